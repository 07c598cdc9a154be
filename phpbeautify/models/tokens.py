from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
    """What a token means to the disguise transform."""

    OPEN_TAG = "open_tag"                    # <?php
    OPEN_TAG_WITH_ECHO = "open_tag_with_echo"  # <?=
    CLOSE_TAG = "close_tag"                  # ?> plus at most one newline
    INLINE_HTML = "inline_html"              # markup/text outside any code segment
    CODE = "code"
    COMMENT = "comment"
    OTHER = "other"

    @property
    def is_open(self) -> bool:
        return self in (TokenKind.OPEN_TAG, TokenKind.OPEN_TAG_WITH_ECHO)


@dataclass(frozen=True)
class Token:
    """A slice of the original input. Tokens partition the input exactly."""

    kind: TokenKind
    text: str
    start: int  # offset of text[0] in the original input

    @property
    def end(self) -> int:
        return self.start + len(self.text)
