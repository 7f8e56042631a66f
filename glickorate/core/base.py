"""base class for a single competitor's rating state"""
from abc import ABC, abstractmethod
from typing import NamedTuple, Optional, Sequence, Union
from glickorate.core.exceptions import NoPendingUpdateError


class RatingView(NamedTuple):
    """read-only snapshot of a rating on the internal scale, what an update reads from an opponent"""

    mu: float
    phi: float
    sigma: float


class PendingRating(NamedTuple):
    """values staged by update() or decay() on the internal scale, promoted to current by apply()"""

    mu: float
    phi: float
    sigma: float


class RatingState(ABC):
    """
    Base class for the rating of one competitor. Changes go through two phases: an update or decay
    computes the next state and stages it as pending, then apply() commits it. Until apply() is
    called the current state is untouched, so a whole rating period can be computed against
    pre-period opponent ratings before anything is committed.

    Attributes:
        mu (float): Current rating on the internal scale.
        phi (float): Current deviation on the internal scale.
        sigma (float): Current volatility.
    """

    def __init__(self, mu: float, phi: float, sigma: float):
        self._mu = mu
        self._phi = phi
        self._sigma = sigma
        self._pending: Optional[PendingRating] = None

    @property
    def mu(self) -> float:
        return self._mu

    @property
    def phi(self) -> float:
        return self._phi

    @property
    def sigma(self) -> float:
        return self._sigma

    @property
    def view(self) -> RatingView:
        return RatingView(self._mu, self._phi, self._sigma)

    @property
    def pending(self) -> Optional[PendingRating]:
        """values staged by the last update or decay on the internal scale, None if nothing is staged"""
        return self._pending

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def _stage(self, mu: float, phi: float, sigma: float):
        self._pending = PendingRating(mu, phi, sigma)

    def apply(self):
        """
        Commits the pending values staged by the last update or decay and clears them.

        Raises:
            NoPendingUpdateError: if nothing has been staged since the last apply()
        """
        if self._pending is None:
            raise NoPendingUpdateError('apply() called with no staged update, call update() or decay() first')
        self._mu, self._phi, self._sigma = self._pending
        self._pending = None

    @abstractmethod
    def update(
        self,
        opponents: Union['RatingState', RatingView, Sequence[Union['RatingState', RatingView]]],
        outcomes: Union[float, Sequence[float]],
    ):
        """
        Stages new values based on the outcomes of games played in a rating period.

        Parameters:
            opponents: a single opponent or an ordered sequence of opponents
            outcomes: a single outcome or a sequence of outcomes paired 1:1 with opponents, represented as win (1), loss (0), or draw (0.5).
        """
        raise NotImplementedError

    @abstractmethod
    def decay(self):
        """Stages new values for a rating period in which no games were played."""
        raise NotImplementedError
