# phpbeautify/ranges.py
"""
Locate <script>/<style> elements in the original input.

Code segments inside these elements sit in JavaScript/CSS, where an HTML
comment is not a comment, so they have to be disguised with /* */ instead.

Only real markup may open or close an element: the parser is fed a copy of
the input in which every code segment is blanked out, so `<?php echo
"<script>"; ?>` cannot start a range.
"""
from __future__ import annotations

import bisect
import re
from html.parser import HTMLParser
from typing import Iterable, List, Optional, Sequence

from .lexer import tokenize
from .models.ranges import CodeContextRange
from .models.tokens import Token, TokenKind

__all__ = ["CODE_CONTEXT_ELEMENTS", "find_code_context_ranges", "in_code_context"]

CODE_CONTEXT_ELEMENTS = ("script", "style")

_NOT_NEWLINE_RE = re.compile(r"[^\n]")


def _markup_only(tokens: Iterable[Token]) -> str:
    """Input text with code segments replaced by spaces; newlines and offsets kept."""
    parts = []
    for token in tokens:
        if token.kind is TokenKind.INLINE_HTML:
            parts.append(token.text)
        else:
            parts.append(_NOT_NEWLINE_RE.sub(" ", token.text))
    return "".join(parts)


class _RangeScanner(HTMLParser):
    """Single forward scan; records element open/close offsets."""

    def __init__(self, text: str, elements: Iterable[str]):
        super().__init__(convert_charrefs=False)
        self._elements = {e.lower() for e in elements}
        # HTMLParser reports (line, column); lines are split on "\n" only.
        self._line_starts = [0]
        for i, ch in enumerate(text):
            if ch == "\n":
                self._line_starts.append(i + 1)
        self._pending: Optional[int] = None
        self.ranges: List[CodeContextRange] = []

    def _offset(self) -> int:
        lineno, col = self.getpos()
        return self._line_starts[lineno - 1] + col

    def handle_starttag(self, tag, attrs):  # type: ignore[no-untyped-def]
        if tag in self._elements and self._pending is None:
            self._pending = self._offset()

    def handle_endtag(self, tag):  # type: ignore[no-untyped-def]
        if tag in self._elements and self._pending is not None:
            self.ranges.append(CodeContextRange(self._pending, self._offset()))
            self._pending = None

    def finish(self) -> List[CodeContextRange]:
        self.close()
        if self._pending is not None:
            # Unclosed element: its context extends to the end of input.
            self.ranges.append(CodeContextRange(self._pending, None))
            self._pending = None
        return self.ranges


def find_code_context_ranges(
    text: str,
    elements: Sequence[str] = CODE_CONTEXT_ELEMENTS,
    *,
    tokens: Optional[Sequence[Token]] = None,
) -> List[CodeContextRange]:
    """
    Return the [start, end) spans covered by `elements`, in input order.

    `start` is the offset of the element's start tag and `end` the offset of
    its end tag. Pass the `tokens` of `text` when they are already at hand;
    otherwise the text is tokenized here. A fresh parser is used per call.
    """
    if tokens is None:
        tokens = tokenize(text)
    markup = _markup_only(tokens)
    scanner = _RangeScanner(markup, elements)
    scanner.feed(markup)
    return scanner.finish()


def in_code_context(ranges: Sequence[CodeContextRange], offset: int) -> bool:
    """True if `offset` (an original-input offset) lies inside any range."""
    if not ranges:
        return False
    # Ranges are sorted by start and do not overlap.
    i = bisect.bisect_right([r.start for r in ranges], offset) - 1
    return i >= 0 and ranges[i].contains(offset)
