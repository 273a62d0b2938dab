"""
BlockClock -- Deterministic block-height abstraction.

Responsibility:
    Provides an injectable block-height provider so that registry code
    never owns the ledger clock.  The height is an opaque, monotonically
    non-decreasing integer supplied by the surrounding ledger.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Heights never decrease.  ``advance()`` rejects negative steps and
      ``SequentialBlockClock`` rejects decreasing sequences.

Failure modes:
    - ``ValueError`` on a negative start, a negative advance, or an
      empty / decreasing replay sequence.
    - ``NotImplementedError`` when advancing a replay clock.
"""

from abc import ABC, abstractmethod


class BlockClock(ABC):
    """
    Abstract block-height provider.

    Contract:
        Services that timestamp records receive a BlockClock via
        constructor injection and read it with ``height()``.  ``peek()``
        reports the same value without side effects on any implementation.
    """

    @abstractmethod
    def height(self) -> int:
        """Get the current block height."""
        ...

    @abstractmethod
    def peek(self) -> int:
        """Current block height; never moves the clock."""
        ...

    @abstractmethod
    def advance(self, blocks: int = 1) -> int:
        """Advance by ``blocks`` and return the new height."""
        ...


class CounterBlockClock(BlockClock):
    """
    Deterministic counter clock.

    Guarantees:
        - ``height()`` returns the same value on repeated calls until
          ``advance()`` or ``tick()`` is called.
        - ``tick()`` advances by exactly one block.
    """

    def __init__(self, start: int = 0):
        if start < 0:
            raise ValueError(f"Block height cannot be negative: {start}")
        self._height = start

    def height(self) -> int:
        return self._height

    def peek(self) -> int:
        return self._height

    def advance(self, blocks: int = 1) -> int:
        if blocks < 0:
            raise ValueError(f"Block height is monotonic; cannot advance by {blocks}")
        self._height += blocks
        return self._height

    def tick(self) -> int:
        """Advance by one block and return the new height."""
        return self.advance(1)


class SequentialBlockClock(BlockClock):
    """
    Clock that returns heights from a predefined sequence.

    Contract:
        Initialized with a non-empty, non-decreasing list of heights.
        Each ``height()`` call consumes one value; after exhaustion the
        last value repeats.  ``peek()`` returns the value the next
        ``height()`` will return without consuming it.  Used to replay a
        recorded ledger.
    """

    def __init__(self, heights: list[int]):
        if not heights:
            raise ValueError("SequentialBlockClock requires at least one height")
        if any(later < earlier for earlier, later in zip(heights, heights[1:])):
            raise ValueError(f"Block heights must be non-decreasing: {heights}")
        if heights[0] < 0:
            raise ValueError(f"Block height cannot be negative: {heights[0]}")
        self._heights = list(heights)
        self._index = 0

    def height(self) -> int:
        value = self.peek()
        self._index += 1
        return value

    def peek(self) -> int:
        return self._heights[min(self._index, len(self._heights) - 1)]

    def advance(self, blocks: int = 1) -> int:
        raise NotImplementedError("SequentialBlockClock replays a fixed sequence")
