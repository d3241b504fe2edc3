"""
Identifier generation for survey records.

Identifiers look like ``<label>_<n>`` where the label is a short,
human-readable prefix and ``n`` comes from a per-generator counter.
Each generator owns its counter; build one per repository and pass it
to whatever needs to mint identifiers.
"""

from typing import Optional

DEFAULT_LABEL = "unlabeled"
LABEL_LENGTH = 6


class IdGenerator:
    """
    Counter-backed identifier generator.

    Attributes:
        next_n: Number the next auto-numbered identifier will use
    """

    def __init__(self, start: int = 1):
        self.next_n = start

    def make_id(self, label: Optional[str] = None, n: Optional[int] = None) -> str:
        """
        Mint an identifier.

        Args:
            label: Prefix; stripped and cut to its first 6 characters.
                Defaults to "unlabeled".
            n: Explicit number. When omitted the internal counter is used
                and advanced; an explicit number leaves the counter alone.

        Returns:
            Identifier string ``f"{label}_{n}"``
        """
        if n is None:
            n = self.next_n
            self.next_n += 1
        if label is None:
            label = DEFAULT_LABEL
        label = label.strip()[:LABEL_LENGTH]
        return f"{label}_{n}"
