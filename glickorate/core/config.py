"""configuration for the glicko 2 rating engine"""
from dataclasses import dataclass
from typing import Optional
from glickorate.utils.constants import (
    DEFAULT_RATING,
    GLICKO2_SCALE,
    DEFAULT_VOLATILITY,
    DEFAULT_TAU,
    DEFAULT_EPSILON,
    DEFAULT_MAX_ITERATIONS,
)


@dataclass(frozen=True)
class Glicko2Config:
    """
    System constants for Glicko 2.

    Attributes:
        initial_rating (float): Center of the external rating scale (R0). Defaults to 1500.0.
        scale (float): Conversion factor between the external scale and the internal glicko 2 scale. Defaults to 173.7178.
        initial_volatility (float): Volatility given to ratings constructed without one. Defaults to 0.06.
        tau (float): System constant constraining the change in volatility over time, typically 0.3 to 1.2. Defaults to 0.5.
        epsilon (float): Convergence tolerance of the volatility solver. Defaults to 1e-6.
        max_iterations (int): Cap on the bracket search and on the solver iterations. Defaults to 100.
        max_deviation (float, optional): Ceiling applied to the deviation by decay(), in external units. Defaults to None (no ceiling).
    """

    initial_rating: float = DEFAULT_RATING
    scale: float = GLICKO2_SCALE
    initial_volatility: float = DEFAULT_VOLATILITY
    tau: float = DEFAULT_TAU
    epsilon: float = DEFAULT_EPSILON
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    max_deviation: Optional[float] = None

    def __post_init__(self):
        if self.scale <= 0.0:
            raise ValueError(f'scale must be positive, got {self.scale}')
        if self.initial_volatility <= 0.0:
            raise ValueError(f'initial_volatility must be positive, got {self.initial_volatility}')
        if self.tau <= 0.0:
            raise ValueError(f'tau must be positive, got {self.tau}')
        if self.epsilon <= 0.0:
            raise ValueError(f'epsilon must be positive, got {self.epsilon}')
        if self.max_iterations < 1:
            raise ValueError(f'max_iterations must be at least 1, got {self.max_iterations}')
        if self.max_deviation is not None and self.max_deviation <= 0.0:
            raise ValueError(f'max_deviation must be positive, got {self.max_deviation}')


DEFAULT_CONFIG = Glicko2Config()
