"""Pair enumeration for user comparisons."""

from .generator import PairGenerator, UserPairs

__all__ = ["PairGenerator", "UserPairs"]
