import logging
from typing import Iterable, List, Optional, Sequence

from .markers import MarkerCodec
from .models.ranges import CodeContextRange
from .models.tokens import Token, TokenKind
from .ranges import in_code_context

log = logging.getLogger(__name__)

SYNTHETIC_CLOSE_TAG = "?>"


def _wrap_before_trailing_whitespace(content: str, wrapper: str) -> str:
    """Insert `wrapper` after the last non-whitespace character of `content`."""
    stripped = content.rstrip()
    return stripped + wrapper + content[len(stripped):]


def disguise(
    tokens: Iterable[Token],
    ranges: Sequence[CodeContextRange],
    codec: MarkerCodec,
) -> str:
    """
    Turn every code segment into a comment the markup beautifier will not touch.

    | token                | effect                                             |
    |----------------------|----------------------------------------------------|
    | <?php / <?=          | start sentinel, then the tag                       |
    | ?>                   | tag, end sentinel, then the tag's trailing newline |
    | inline HTML          | unchanged                                          |
    | anything in the code | quotes and the active comment terminator escaped   |

    The comment style (HTML or /* */) is chosen from the original-input offset
    of each segment's open tag and kept until the segment closes. If the input
    ends inside a segment, a `?>` and end sentinel are appended.
    """
    out: List[str] = []
    offset = 0    # original-input offset; the only thing ranges are tested against
    emitted = 0   # length of the disguised output so far
    segment_ctx: Optional[bool] = None  # None outside a segment
    last_kind: Optional[TokenKind] = None
    segments = 0

    for token in tokens:
        ctx = in_code_context(ranges, offset)
        kind = token.kind

        if kind.is_open:
            segment_ctx = ctx
            piece = codec.wrap_start(ctx) + token.text
            segments += 1
        elif kind is TokenKind.CLOSE_TAG:
            if segment_ctx is None:
                segment_ctx = ctx
            piece = _wrap_before_trailing_whitespace(token.text, codec.wrap_end(segment_ctx))
            segment_ctx = None
        elif kind is TokenKind.INLINE_HTML:
            piece = token.text
        else:
            piece = codec.encode(token.text, ctx if segment_ctx is None else segment_ctx)

        out.append(piece)
        emitted += len(piece)
        offset += len(token.text)
        last_kind = kind

    if last_kind is not None and last_kind not in (TokenKind.CLOSE_TAG, TokenKind.INLINE_HTML):
        ctx = segment_ctx if segment_ctx is not None else in_code_context(ranges, offset)
        piece = SYNTHETIC_CLOSE_TAG + codec.wrap_end(ctx)
        out.append(piece)
        emitted += len(piece)
        log.debug("input ends inside a code segment; appended a closing tag")

    log.debug("disguised %d segment(s): %d chars in, %d chars out", segments, offset, emitted)
    return "".join(out)
