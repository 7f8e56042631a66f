"""
Models Module
=============

This module contains the rating models that implement the stage-then-commit RatingState interface.

Included Rating Systems:
- Glicko 2: Extends Glicko with a volatility parameter describing how erratic a competitor's results are.
  The volatility is re-estimated every rating period by solving for the root of a one dimensional
  function with the Illinois variant of regula falsi.

Each model holds the rating of one competitor on the internal scale and converts to the external
scale on read. update() and decay() stage the next state and apply() commits it.

"""
