from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CodeContextRange:
    """
    Half-open [start, end) span of the original input whose code segments must
    be disguised with /* */ comments instead of <!-- --> comments.

    `end` is None when the element was never closed; the context then runs to
    the end of the input.
    """

    start: int
    end: Optional[int] = None

    @property
    def open_ended(self) -> bool:
        return self.end is None

    def contains(self, offset: int) -> bool:
        if offset < self.start:
            return False
        return self.end is None or offset < self.end
