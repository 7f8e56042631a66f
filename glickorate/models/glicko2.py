"""
Glicko 2
paper: http://www.glicko.net/research/dpcmsv.pdf
example: http://www.glicko.net/glicko/glicko2.pdf

"""
import math
import logging
from typing import Optional, Sequence
import numpy as np
from glickorate.core.base import RatingState, RatingView
from glickorate.core.config import Glicko2Config, DEFAULT_CONFIG
from glickorate.core.exceptions import DegenerateUpdateError
from glickorate.core.solver import solve_log_volatility
from glickorate.utils.math_utils import sigmoid, sigmoid_scalar, to_internal, to_external
from glickorate.utils.constants import THREE_OVER_PI_SQUARED

logger = logging.getLogger(__name__)


class Glicko2Rating(RatingState):
    """
    The Glicko 2 rating of one competitor, designed by Mark Glickman.

    State is held on the internal glicko 2 scale (mu, phi, sigma) and converted to the external
    scale (rating, deviation, volatility) on read. Opponents are only ever read, never mutated.
    """

    def __init__(
        self,
        rating: float,
        deviation: float,
        volatility: Optional[float] = None,
        config: Optional[Glicko2Config] = None,
    ):
        """
        Initializes a rating from values on the external scale.

        Parameters:
            rating (float): The rating, conventionally centered on 1500.
            deviation (float): The rating deviation, must be positive and finite.
            volatility (float, optional): The volatility, must be positive and finite. Defaults to config.initial_volatility.
            config (Glicko2Config, optional): System constants. Defaults to DEFAULT_CONFIG.
        """
        self.config = config if config is not None else DEFAULT_CONFIG
        if volatility is None:
            volatility = self.config.initial_volatility
        if not (math.isfinite(deviation) and deviation > 0.0):
            raise ValueError(f'deviation must be positive and finite, got {deviation}')
        if not (math.isfinite(volatility) and volatility > 0.0):
            raise ValueError(f'volatility must be positive and finite, got {volatility}')
        mu, phi = to_internal(rating, deviation, self.config.initial_rating, self.config.scale)
        super().__init__(mu, phi, volatility)

    @property
    def rating(self) -> float:
        return to_external(self._mu, self._phi, self.config.initial_rating, self.config.scale)[0]

    @property
    def deviation(self) -> float:
        return to_external(self._mu, self._phi, self.config.initial_rating, self.config.scale)[1]

    @property
    def volatility(self) -> float:
        return self._sigma

    @staticmethod
    def g_scalar(phi):
        """this is DIFFERENT from g in regular Glicko"""
        return 1.0 / math.sqrt(1.0 + (THREE_OVER_PI_SQUARED * (phi**2.0)))

    @staticmethod
    def g_vector(phi):
        """vector version"""
        return 1.0 / np.sqrt(1.0 + (THREE_OVER_PI_SQUARED * np.square(phi)))

    def expected_score(self, opponent) -> float:
        """probability of beating the opponent, discounted by the opponent's deviation only"""
        return sigmoid_scalar(self.g_scalar(opponent.phi) * (self._mu - opponent.mu))

    def expected_scores(self, opponents) -> np.ndarray:
        mus = np.array([opponent.mu for opponent in opponents], dtype=np.float64)
        phis = np.array([opponent.phi for opponent in opponents], dtype=np.float64)
        return sigmoid(self.g_vector(phis) * (self._mu - mus))

    def win_probability(self, opponent) -> float:
        """pre-match probability of beating the opponent using the uncertainty of both players"""
        combined_phi = self.g_scalar(math.sqrt((self._phi**2.0) + (opponent.phi**2.0)))
        return sigmoid_scalar(combined_phi * (self._mu - opponent.mu))

    def update(self, opponents, outcomes):
        """stage an update from one game or from all of the games of a rating period"""
        if isinstance(opponents, (RatingState, RatingView)):
            self.single_update(opponents, outcomes)
        else:
            self.batched_update(opponents, outcomes)

    def batched_update(self, opponents: Sequence, outcomes: Sequence[float]):
        """
        Stages one update based on all of the results of the rating period.

        Parameters:
            opponents: Ordered sequence of opponent ratings or views, only their mu and phi are read.
            outcomes: Outcomes from this competitor's perspective, paired 1:1 with opponents.

        Raises:
            ValueError: if the sequences are empty or differ in length
            DegenerateUpdateError: if every expected score is exactly 0 or 1
            ConvergenceError: if the volatility solver does not converge
        """
        outcomes = np.asarray(outcomes, dtype=np.float64).reshape(-1)
        if len(opponents) == 0:
            raise ValueError('batched_update needs at least one opponent')
        if len(opponents) != outcomes.shape[0]:
            raise ValueError(f'got {len(opponents)} opponents but {outcomes.shape[0]} outcomes')

        mus = np.array([opponent.mu for opponent in opponents], dtype=np.float64)
        phis = np.array([opponent.phi for opponent in opponents], dtype=np.float64)
        gs = self.g_vector(phis)
        probs = sigmoid(gs * (self._mu - mus))

        inv_v = float(np.sum(np.square(gs) * probs * (1.0 - probs)))
        # this is kinda like a gradient
        grad = float(np.sum(gs * (outcomes - probs)))
        self._stage_from_period(inv_v, grad)

    def single_update(self, opponent, outcome: float):
        """
        Stages an update from a single game, equivalent to batched_update with one-element sequences.

        Parameters:
            opponent: Opponent rating or view, only its mu and phi are read.
            outcome (float): win (1), loss (0), or draw (0.5) from this competitor's perspective.
        """
        g = self.g_scalar(opponent.phi)
        prob = sigmoid_scalar(g * (self._mu - opponent.mu))
        inv_v = (g**2.0) * prob * (1.0 - prob)
        grad = g * (outcome - prob)
        self._stage_from_period(inv_v, grad)

    def _stage_from_period(self, inv_v, grad):
        """steps 3 through 7 of the paper given the accumulated 1/v and the sum of g * (s - E)"""
        if not (inv_v > 0.0 and math.isfinite(inv_v)):
            raise DegenerateUpdateError(
                f'estimated variance is not finite (1/v = {inv_v}), every expected score saturated at 0 or 1'
            )
        v = 1.0 / inv_v
        if not math.isfinite(v):
            raise DegenerateUpdateError(f'estimated variance overflowed (1/v = {inv_v})')
        delta = v * grad
        A = solve_log_volatility(
            delta=delta,
            v=v,
            phi=self._phi,
            sigma=self._sigma,
            tau=self.config.tau,
            epsilon=self.config.epsilon,
            max_iterations=self.config.max_iterations,
        )
        sigma_prime = math.exp(A / 2.0)
        phi_star_squared = (self._phi**2.0) + (sigma_prime**2.0)
        phi_prime = 1.0 / math.sqrt((1.0 / phi_star_squared) + inv_v)
        mu_prime = self._mu + (phi_prime**2.0) * grad
        self._stage(mu_prime, phi_prime, sigma_prime)
        logger.debug(f'staged update mu {self._mu:.6f} -> {mu_prime:.6f}, phi {self._phi:.6f} -> {phi_prime:.6f}')

    def decay(self):
        """called for a rating period with no games to model the increase in variance over time"""
        phi_prime = math.sqrt((self._phi**2.0) + (self._sigma**2.0))
        if self.config.max_deviation is not None:
            # the ceiling only stops growth, a deviation already above it is left where it is
            phi_prime = max(self._phi, min(phi_prime, self.config.max_deviation / self.config.scale))
        self._stage(self._mu, phi_prime, self._sigma)
        logger.debug(f'staged decay phi {self._phi:.6f} -> {phi_prime:.6f}')

    @classmethod
    def from_internal(cls, mu: float, phi: float, sigma: float, config: Optional[Glicko2Config] = None):
        """build a rating directly from values on the internal glicko 2 scale"""
        config = config if config is not None else DEFAULT_CONFIG
        rating, deviation = to_external(mu, phi, config.initial_rating, config.scale)
        instance = cls(rating, deviation, sigma, config=config)
        instance._mu, instance._phi = mu, phi
        return instance

    def copy(self) -> 'Glicko2Rating':
        """independent copy of the current state, anything pending is not copied"""
        return self.from_internal(self._mu, self._phi, self._sigma, config=self.config)

    def __repr__(self):
        return (
            f'{type(self).__name__}(rating={self.rating:.2f}, '
            f'deviation={self.deviation:.2f}, volatility={self.volatility:.6f})'
        )
