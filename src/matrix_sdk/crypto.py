"""Encryption capability bookkeeping.

Key exchange is not implemented; the client only records what the homeserver
reports so a future key manager can decide when to upload more keys.
"""

from __future__ import annotations

import logging

log = logging.getLogger(__name__)

SIGNED_CURVE25519 = "signed_curve25519"


class OneTimeKeyCounts:
    """Latest ``device_one_time_keys_count`` seen in sync."""

    def __init__(self, target: int = 50) -> None:
        self.target = target
        self.counts: dict[str, int] = {}

    def update(self, counts: dict[str, int]) -> None:
        self.counts = dict(counts)
        log.debug("One-time key counts: %s", self.counts)

    @property
    def missing(self) -> int:
        """How many signed curve25519 keys are needed to reach :attr:`target`."""
        return max(self.target - self.counts.get(SIGNED_CURVE25519, 0), 0)
