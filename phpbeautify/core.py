# phpbeautify/core.py
import re
from typing import Any, Callable, Mapping, Optional, Union

from ._logging import resolve_logger
from .lexer import tokenize
from .markers import DEFAULT_NONCE, MarkerCodec
from .markup import format_html
from .options import HtmlFormatOptions, to_html_options
from .ranges import find_code_context_ranges
from .transform import disguise

__all__ = ["beautify", "is_whole_code_block"]

Formatter = Callable[[str, HtmlFormatOptions], str]

_OPEN_TAG_RE = re.compile(r"<\?(?:php\b|=)", re.IGNORECASE)
_LEADING_WS_RE = re.compile(r"^\s+(?=<\?(?:php\b|=))", re.IGNORECASE)
_CLOSE_TAG = "?>"


def is_whole_code_block(text: str) -> bool:
    """
    True when `text` is one code segment with no markup around it.

    Exactly one open tag, preceded by nothing but whitespace; at most one
    `?>`, and if there is one it is the last thing in the input apart from a
    single trailing character (or CRLF).

    `?>` is counted as a plain substring, so one inside a PHP string or
    comment counts too and sends the input down the full path. This is
    intended: the check stays a cheap text test that never runs the
    tokenizer, and the full path is always safe.
    """
    opens = list(_OPEN_TAG_RE.finditer(text))
    if len(opens) != 1 or text[:opens[0].start()].strip():
        return False
    close = text.find(_CLOSE_TAG)
    if close == -1:
        return True
    if close != text.rfind(_CLOSE_TAG):
        return False
    rest = text[close + len(_CLOSE_TAG):]
    return len(rest) <= 1 or rest == "\r\n"


def beautify(
    text: str,
    options: Union[Mapping[str, Any], HtmlFormatOptions, None] = None,
    *,
    formatter: Optional[Formatter] = None,
    short_tags: bool = False,
    logger=None,
    log: bool = False,
) -> str:
    """
    Re-indent the markup of a PHP template, leaving every code segment intact.

    Pure code (see `is_whole_code_block`) is returned as-is apart from
    whitespace before the open tag. Otherwise code segments are disguised as
    comments, the result goes through `formatter` (default: `format_html`),
    and the disguise is removed again.

    `options` is an editor-style record (camelCase or snake_case keys) or a
    ready `HtmlFormatOptions`. Exceptions from the tokenizer or the formatter
    propagate unchanged; falling back to the original text is the caller's call.
    """
    lg = resolve_logger(logger=logger, enabled=log, name=__name__)

    if is_whole_code_block(text):
        lg.debug("input is a single code block; skipping the markup pass")
        return _LEADING_WS_RE.sub("", text, count=1)

    html_options = options if isinstance(options, HtmlFormatOptions) else to_html_options(options)
    codec = MarkerCodec.for_text(text)
    if codec.nonce != DEFAULT_NONCE:
        lg.debug(f"input contains default sentinel fragments; using nonce {codec.nonce!r}")

    tokens = tokenize(text, short_tags=short_tags)
    ranges = find_code_context_ranges(text, tokens=tokens)
    lg.debug(f"{len(tokens)} tokens, {len(ranges)} script/style range(s)")

    disguised = disguise(tokens, ranges, codec)
    formatted = (formatter or format_html)(disguised, html_options)
    return codec.decode(formatted)
