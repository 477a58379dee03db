"""
Codepoint allocation from the supplementary private-use range.
"""

from typing import Iterable

from .config import PUA_START, PUA_END
from .errors import ExhaustedError


class CodepointAllocator:
    """
    Hand out unused codepoints in ascending order.

    The cursor only moves forward: a codepoint is returned at most once and
    reserved codepoints (values of the imported mapping) are never returned.
    """

    def __init__(self, reserved: Iterable[int] = (), start: int = PUA_START, end: int = PUA_END):
        if start > end:
            raise ValueError(f"empty codepoint range {start:#x}-{end:#x}")
        self.start = start
        self.end = end
        self.reserved = frozenset(reserved)
        self._next = start

    @property
    def remaining(self) -> int:
        """Number of unreserved codepoints not yet handed out"""
        if self._next > self.end:
            return 0
        blocked = sum(1 for cp in self.reserved if self._next <= cp <= self.end)
        return self.end - self._next + 1 - blocked

    def allocate(self) -> int:
        """
        Return the next free codepoint.

        Raises:
            ExhaustedError once every codepoint in the range is used or reserved
        """
        while self._next <= self.end:
            codepoint = self._next
            self._next += 1
            if codepoint not in self.reserved:
                return codepoint

        raise ExhaustedError(
            f"no unreserved codepoints left in U+{self.start:04X}-U+{self.end:04X}"
        )
