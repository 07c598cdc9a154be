"""Sentinel strings used to hide code segments from the markup beautifier.

A code segment is turned into a comment the beautifier leaves alone:

    outside <script>/<style>:  <!-- %pcs-comment-start#<?php ... ?>%pcs-comment-end#-->
    inside  <script>/<style>:  /*%pcs-comment-start#<?php ... ?>%pcs-comment-end#*/

Quotes are escaped everywhere so a segment inside an attribute value cannot
end the attribute early. The terminator of the active comment style (`-->` or
`*/`) is escaped so the code cannot end the wrapper early. Inside
<script>/<style> the end-tag opener `</` is escaped as well, so a string like
`"</script>"` in the code cannot end the element around it.

Every sentinel carries the codec's nonce next to a `%`. Input that already
contains such a fragment gets a random nonce instead (see `for_text`), so the
final decode never touches characters that were in the input.
"""

from __future__ import annotations

import re
import secrets
from typing import List, Tuple

__all__ = ["DEFAULT_NONCE", "MARKUP_TERMINATOR", "CODE_TERMINATOR", "END_TAG_OPEN", "MarkerCodec"]

DEFAULT_NONCE = "pcs"
MARKUP_TERMINATOR = "-->"
CODE_TERMINATOR = "*/"
END_TAG_OPEN = "</"


class MarkerCodec:
    """Forward escaping/wrapping and its exact inverse for one nonce."""

    def __init__(self, nonce: str = DEFAULT_NONCE):
        if not re.fullmatch(r"[A-Za-z0-9]+", nonce or ""):
            raise ValueError("nonce must be a non-empty alphanumeric string")
        self.nonce = nonce
        n = nonce
        self.double_quote = f"{n}%quote#1"
        self.single_quote = f"{n}%quote~2"
        self.markup_terminator = f"-%{n}-comment-end#->"
        self.code_terminator = f"*%{n}-comment-end#/"
        self.end_tag_open = f"<%{n}-end-tag#/"
        self.markup_start = f"<!-- %{n}-comment-start#"
        self.markup_end = f"%{n}-comment-end#-->"
        self.code_start = f"/*%{n}-comment-start#"
        self.code_end = f"%{n}-comment-end#*/"

        e = re.escape
        # Beautifiers may put whitespace between "<!--" and what follows it.
        self._markup_start_re = re.compile(r"<!--\s*" + e(f"%{n}-comment-start#"))
        self._decode_steps: List[Tuple[re.Pattern, str]] = [
            (re.compile(e(self.markup_end)), ""),
            (self._markup_start_re, ""),
            (re.compile(e(self.code_end)), ""),
            (re.compile(e(self.code_start)), ""),
            (re.compile(e(self.markup_terminator)), MARKUP_TERMINATOR),
            (re.compile(e(self.code_terminator)), CODE_TERMINATOR),
            (re.compile(e(self.end_tag_open)), END_TAG_OPEN),
            (re.compile(e(self.single_quote)), "'"),
            (re.compile(e(self.double_quote)), '"'),
        ]

    @classmethod
    def for_text(cls, text: str) -> "MarkerCodec":
        """
        Codec whose sentinels cannot already occur in `text`.

        Keeps the readable default nonce for ordinary input and draws random
        ones only when the input contains a nonce-bearing fragment.
        """
        nonce = DEFAULT_NONCE
        while f"%{nonce}" in text or f"{nonce}%" in text:
            nonce = "pcs" + secrets.token_hex(4)
        return cls(nonce)

    def sentinels(self) -> Tuple[str, ...]:
        return (
            self.double_quote,
            self.single_quote,
            self.markup_terminator,
            self.code_terminator,
            self.end_tag_open,
            self.markup_start,
            self.markup_end,
            self.code_start,
            self.code_end,
        )

    def encode(self, text: str, in_code_context: bool) -> str:
        """Escape quotes and the active comment terminator (plus `</` in code context)."""
        text = text.replace('"', self.double_quote).replace("'", self.single_quote)
        if in_code_context:
            text = text.replace(CODE_TERMINATOR, self.code_terminator)
            return text.replace(END_TAG_OPEN, self.end_tag_open)
        return text.replace(MARKUP_TERMINATOR, self.markup_terminator)

    def wrap_start(self, in_code_context: bool) -> str:
        return self.code_start if in_code_context else self.markup_start

    def wrap_end(self, in_code_context: bool) -> str:
        return self.code_end if in_code_context else self.markup_end

    def decode(self, text: str) -> str:
        """Strip wrappers, then unescape terminators, then quotes."""
        for pattern, replacement in self._decode_steps:
            text = pattern.sub(replacement, text)
        return text
