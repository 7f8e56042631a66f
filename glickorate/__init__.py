"""Glicko 2 rating updates for a single competitor"""
from glickorate.core.base import RatingState, RatingView, PendingRating
from glickorate.core.config import Glicko2Config, DEFAULT_CONFIG
from glickorate.core.exceptions import RatingError, ConvergenceError, DegenerateUpdateError, NoPendingUpdateError
from glickorate.core.solver import volatility_objective, solve_log_volatility
from glickorate.models.glicko2 import Glicko2Rating
from glickorate.utils.math_utils import to_internal, to_external

__all__ = [
    'RatingState',
    'RatingView',
    'PendingRating',
    'Glicko2Config',
    'DEFAULT_CONFIG',
    'RatingError',
    'ConvergenceError',
    'DegenerateUpdateError',
    'NoPendingUpdateError',
    'volatility_objective',
    'solve_log_volatility',
    'Glicko2Rating',
    'to_internal',
    'to_external',
]
