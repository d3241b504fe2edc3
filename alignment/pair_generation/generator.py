"""
Pair generation for user comparisons.

This module enumerates (User A, User B) pairs for pairwise alignment
scoring.

Key Design Decisions:
- Pairs are unordered: (A, B) and (B, A) are considered the same pair
- Self-pairs are excluded: (A, A) is never generated
- Every pair is generated exactly once, in canonical order
  (increasing first index, then increasing second index)
- Enumeration is lazy and restartable
"""

import logging
from itertools import combinations
from typing import Generic, Iterator, Sequence, Tuple, TypeVar

import numpy as np

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UserPairs(Generic[T]):
    """
    Lazy view over every unordered pair of a user sequence.

    Iterating yields ``(users[i], users[j])`` for each ``i < j``. Each
    iteration starts over, and the input sequence is never modified.

    Attributes:
        users: The sequence pairs are drawn from
    """

    def __init__(self, users: Sequence[T]):
        self.users = users

    def __iter__(self) -> Iterator[Tuple[T, T]]:
        return combinations(self.users, 2)

    def __len__(self) -> int:
        n = len(self.users)
        return n * (n - 1) // 2


class PairGenerator:
    """
    Generator for person index pairs.

    Produces the full triangular enumeration of index pairs as numpy
    arrays, for consumers that work on whole columns of pairs at once.
    """

    def generate_pairs(self, n_persons: int) -> Tuple[np.ndarray, np.ndarray]:
        """
        Generate every pair of person indices.

        Args:
            n_persons: Total number of persons

        Returns:
            Tuple of (indices_a, indices_b) arrays where each (indices_a[i], indices_b[i])
            represents a pair. Indices are guaranteed to satisfy indices_a[i] < indices_b[i].
        """
        max_possible = n_persons * (n_persons - 1) // 2
        logger.info(f"Generating {max_possible} pairs from {n_persons} persons")

        if max_possible == 0:
            empty = np.array([], dtype=int)
            return empty, empty.copy()

        # Triangular indices above the diagonal, row-major
        indices_a, indices_b = np.triu_indices(n_persons, k=1)
        return indices_a, indices_b

    def pairs_of(self, users: Sequence[T]) -> UserPairs[T]:
        """Lazy pairs over ``users``."""
        pairs = UserPairs(users)
        logger.info(f"Enumerating {len(pairs)} pairs from {len(users)} users")
        return pairs
