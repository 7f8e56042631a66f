"""math utility functions for the rating engine"""
import math
from scipy.special import expit
from glickorate.utils.constants import DEFAULT_RATING, GLICKO2_SCALE


def sigmoid(x):
    """a little faster than implementing it in numpy for d < 100000"""
    return expit(x)


def sigmoid_scalar(x):
    """no need to use numpy on scalars, split on the sign so math.exp can't overflow"""
    if x >= 0.0:
        return 1.0 / (1.0 + math.exp(-x))
    ex = math.exp(x)
    return ex / (1.0 + ex)


def to_internal(rating, deviation, initial_rating=DEFAULT_RATING, scale=GLICKO2_SCALE):
    """convert (rating, deviation) to the glicko 2 scale (mu, phi)"""
    return (rating - initial_rating) / scale, deviation / scale


def to_external(mu, phi, initial_rating=DEFAULT_RATING, scale=GLICKO2_SCALE):
    """convert (mu, phi) on the glicko 2 scale back to (rating, deviation)"""
    return mu * scale + initial_rating, phi * scale
