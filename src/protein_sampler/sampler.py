"""Uniform random sampling without replacement."""

import logging
import random
from typing import List, Optional, Sequence, TypeVar

from .error_handler import InsufficientRecordsError, InvalidArgumentError

logger = logging.getLogger(__name__)

T = TypeVar('T')

SAMPLING_METHODS = ('auto', 'rejection', 'shuffle')


class RandomSampler:
    """Draws a uniform random subset of records in draw order.

    Two equivalent algorithms are available. ``rejection`` keeps a set of
    chosen indices and redraws on a repeat; it is cheap when ``count`` is a
    small fraction of the population. ``shuffle`` runs a partial Fisher-Yates
    over an index list and needs exactly ``count`` draws. ``auto`` picks
    rejection when ``count`` is at most a quarter of the population.
    """

    REJECTION_MAX_FRACTION = 0.25

    def __init__(self, seed: Optional[int] = None, method: str = 'auto',
                 rng: Optional[random.Random] = None):
        if method not in SAMPLING_METHODS:
            raise InvalidArgumentError(
                f"unknown sampling method {method!r}; "
                f"expected one of {', '.join(SAMPLING_METHODS)}"
            )
        self.method = method
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)
        self.draws = 0

    def _choose_method(self, population: int, count: int) -> str:
        if self.method != 'auto':
            return self.method
        if count <= population * self.REJECTION_MAX_FRACTION:
            return 'rejection'
        return 'shuffle'

    def draw_indices(self, population: int, count: int) -> List[int]:
        """Draw ``count`` distinct indices from ``range(population)``.

        Raises:
            InvalidArgumentError: if count is not a positive integer
            InsufficientRecordsError: if count exceeds the population
        """
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise InvalidArgumentError(f"count must be a positive integer, got {count!r}")
        if count > population:
            raise InsufficientRecordsError(count, population)

        self.draws = 0
        method = self._choose_method(population, count)
        logger.debug(f"Sampling {count} of {population} using {method}")

        if method == 'rejection':
            return self._rejection(population, count)
        return self._partial_shuffle(population, count)

    def _rejection(self, population: int, count: int) -> List[int]:
        chosen = set()
        order: List[int] = []
        while len(chosen) < count:
            index = self.rng.randrange(population)
            self.draws += 1
            if index in chosen:
                continue
            chosen.add(index)
            order.append(index)
        return order

    def _partial_shuffle(self, population: int, count: int) -> List[int]:
        pool = list(range(population))
        for i in range(count):
            j = self.rng.randrange(i, population)
            self.draws += 1
            pool[i], pool[j] = pool[j], pool[i]
        return pool[:count]

    def sample(self, records: Sequence[T], count: int) -> List[T]:
        """Return ``count`` distinct records in the order they were drawn."""
        indices = self.draw_indices(len(records), count)
        logger.debug(f"Drew {len(indices)} records in {self.draws} draws")
        return [records[i] for i in indices]
