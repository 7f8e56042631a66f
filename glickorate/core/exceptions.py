"""exceptions raised by the rating engine"""


class RatingError(Exception):
    """base class for rating engine errors"""


class ConvergenceError(RatingError):
    """the volatility solver hit its iteration cap or took a degenerate step"""

    def __init__(self, message, iterations=None, bracket=None):
        super().__init__(message)
        self.iterations = iterations
        self.bracket = bracket


class DegenerateUpdateError(RatingError, ArithmeticError):
    """the estimated variance v is infinite because every expected score saturated at 0 or 1"""


class NoPendingUpdateError(RatingError, RuntimeError):
    """apply() was called before update() or decay() staged anything"""
