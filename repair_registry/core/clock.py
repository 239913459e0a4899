"""
Logical clock standing in for the ledger's block height.
"""

import threading


class BlockHeightClock:
    """Monotonic block-height counter.

    ``now()`` reads the current height without moving it, so every operation
    inside one block shares a timestamp. ``advance()`` mines the next block.
    """

    def __init__(self, start: int = 0):
        self._height = start
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            return self._height

    def advance(self, blocks: int = 1) -> int:
        if blocks < 0:
            raise ValueError("block height cannot move backwards")
        with self._lock:
            self._height += blocks
            return self._height

    def __call__(self) -> int:
        return self.now()
