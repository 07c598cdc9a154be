# phpbeautify/lexer.py
"""
Token stream over mixed PHP/HTML source, built on Pygments' PhpLexer.

Pygments reports offsets and never drops characters, which is exactly what
the disguise transform needs: every character of the input ends up in one
token, and the tokens concatenate back to the input.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from pygments.lexers.php import PhpLexer
from pygments.token import Comment, Error

from .models.tokens import Token, TokenKind

__all__ = ["tokenize"]

_MERGEABLE = (TokenKind.INLINE_HTML, TokenKind.CODE, TokenKind.COMMENT, TokenKind.OTHER)


def _new_lexer() -> PhpLexer:
    # Builtin-name highlighting only renames Name tokens; skip loading the tables.
    return PhpLexer(startinline=False, funcnamehighlighting=False)


class _TokenBuffer:
    def __init__(self) -> None:
        self.tokens: List[Token] = []

    def emit(self, kind: TokenKind, text: str, start: int) -> None:
        if not text:
            return
        last = self.tokens[-1] if self.tokens else None
        if last is not None:
            # PHP's own tokenizer keeps a single newline after ?> in the close tag.
            if last.kind is TokenKind.CLOSE_TAG and kind is TokenKind.INLINE_HTML and not last.text.endswith("\n"):
                nl = "\r\n" if text.startswith("\r\n") else "\n" if text.startswith("\n") else ""
                if nl:
                    self.tokens[-1] = Token(last.kind, last.text + nl, last.start)
                    text, start = text[len(nl):], start + len(nl)
                    if not text:
                        return
                    last = self.tokens[-1]
            if last.kind is kind and kind in _MERGEABLE:
                self.tokens[-1] = Token(kind, last.text + text, last.start)
                return
        self.tokens.append(Token(kind, text, start))


def tokenize(text: str, *, short_tags: bool = False) -> List[Token]:
    """
    Split `text` into Tokens.

    Text outside code segments is INLINE_HTML. `<?php` and `<?=` open a
    segment, `?>` closes it. A bare `<?` (e.g. `<?xml ...?>`) only opens a
    segment when `short_tags` is True; otherwise the whole `<? ... ?>` run is
    literal markup, as with PHP's short_open_tag=Off.

    A fresh lexer is built per call so concurrent callers never share state.
    Lexer exceptions propagate unchanged.
    """
    out = _TokenBuffer()
    inside = False
    literal_pi = False
    # A bare "<?" waiting on the next token to tell "<?=" from a short tag.
    pending: Optional[Tuple[int, str]] = None

    for index, ttype, value in _new_lexer().get_tokens_unprocessed(text):
        if not value:
            continue

        if pending is not None:
            p_index, p_value = pending
            pending = None
            if value.startswith("="):
                out.emit(TokenKind.OPEN_TAG_WITH_ECHO, p_value + "=", p_index)
                inside = True
                value, index = value[1:], index + 1
                if not value:
                    continue
            elif short_tags:
                out.emit(TokenKind.OPEN_TAG, p_value, p_index)
                inside = True
            else:
                out.emit(TokenKind.INLINE_HTML, p_value, p_index)
                literal_pi = True

        is_preproc = ttype in Comment.Preproc

        if literal_pi:
            out.emit(TokenKind.INLINE_HTML, value, index)
            if is_preproc and value == "?>":
                literal_pi = False
            continue

        if not inside:
            if is_preproc and value.startswith("<?"):
                if value == "<?":
                    pending = (index, value)
                else:
                    out.emit(TokenKind.OPEN_TAG, value, index)
                    inside = True
            else:
                out.emit(TokenKind.INLINE_HTML, value, index)
            continue

        if is_preproc and value == "?>":
            out.emit(TokenKind.CLOSE_TAG, value, index)
            inside = False
        elif ttype in Error:
            out.emit(TokenKind.OTHER, value, index)
        elif ttype in Comment:
            out.emit(TokenKind.COMMENT, value, index)
        else:
            out.emit(TokenKind.CODE, value, index)

    if pending is not None:
        p_index, p_value = pending
        out.emit(TokenKind.OPEN_TAG if short_tags else TokenKind.INLINE_HTML, p_value, p_index)

    return out.tokens
