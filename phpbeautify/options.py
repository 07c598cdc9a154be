# phpbeautify/options.py
"""
Translate editor-style formatting options into the markup beautifier's vocabulary.

Editors hand over camelCase records (`insertSpaces`, `wrapLineLength`,
`contentUnformatted`, ...); snake_case keys are accepted too. Any value that
is missing, None, or of the wrong shape falls back to its default.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

__all__ = [
    "DEFAULT_UNFORMATTED",
    "DEFAULT_CONTENT_UNFORMATTED",
    "DEFAULT_EXTRA_LINERS",
    "WRAP_ATTRIBUTE_MODES",
    "HtmlFormatOptions",
    "get_format_option",
    "get_tags_format_option",
    "to_html_options",
]

DEFAULT_UNFORMATTED: Tuple[str, ...] = (
    "area", "base", "br", "col", "embed", "hr", "img", "input", "keygen",
    "link", "menuitem", "meta", "param", "source", "track", "wbr",
    "!doctype", "?xml", "?php", "?=", "basefont", "isindex",
)
DEFAULT_CONTENT_UNFORMATTED: Tuple[str, ...] = ("pre", "textarea")
DEFAULT_EXTRA_LINERS: Tuple[str, ...] = ("head", "body", "/html")
WRAP_ATTRIBUTE_MODES = frozenset({
    "auto",
    "force",
    "force-aligned",
    "force-expand-multiline",
    "aligned-multiple",
    "preserve",
    "preserve-aligned",
})

_MISSING = object()


@dataclass(frozen=True)
class HtmlFormatOptions:
    """Options understood by the markup beautifier (js-beautify naming)."""

    indent_char: str = " "
    indent_size: int = 4
    end_with_newline: bool = False
    wrap_line_length: int = 120  # 0 disables wrapping
    wrap_attributes: str = "auto"
    preserve_newlines: bool = False
    max_preserve_newlines: Optional[int] = None  # None: no limit
    indent_inner_html: bool = False
    indent_handlebars: bool = False
    unformatted: Tuple[str, ...] = DEFAULT_UNFORMATTED
    content_unformatted: Tuple[str, ...] = DEFAULT_CONTENT_UNFORMATTED
    extra_liners: Tuple[str, ...] = DEFAULT_EXTRA_LINERS
    templating: Tuple[str, ...] = ("php",)

    @property
    def indent_unit(self) -> str:
        return self.indent_char * self.indent_size


def _snake(key: str) -> str:
    return re.sub(r"(?<!^)([A-Z])", r"_\1", key).lower()


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _lookup(options: Optional[Mapping[str, Any]], key: str) -> Any:
    if not options:
        return _MISSING
    for candidate in (key, _camel(key), _snake(key)):
        if candidate in options:
            return options[candidate]
    return _MISSING


def get_format_option(
    options: Optional[Mapping[str, Any]],
    key: str,
    default: Any = None,
    *,
    kind: Optional[type] = None,
) -> Any:
    """
    Read `key` (camelCase or snake_case) from `options`.

    Absent keys, None values, and values that are not an instance of `kind`
    (when given) all yield `default`.
    """
    value = _lookup(options, key)
    if value is _MISSING or value is None:
        return default
    if kind is not None:
        # bool is an int subclass; never let True pass for a width.
        if kind is int and isinstance(value, bool):
            return default
        if not isinstance(value, kind):
            return default
    return value


def get_tags_format_option(
    options: Optional[Mapping[str, Any]],
    key: str,
    default: Tuple[str, ...] = (),
) -> Tuple[str, ...]:
    """
    Read a list of element names.

    Accepts "pre, code" or ["pre", "code"]; names are trimmed and lower-cased.
    An empty string is an explicit empty list. Other shapes yield `default`.
    """
    value = _lookup(options, key)
    if isinstance(value, str):
        parts = value.split(",")
    elif isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        parts = list(value)
    else:
        return tuple(default)
    return tuple(p.strip().lower() for p in parts if p.strip())


def to_html_options(options: Optional[Mapping[str, Any]] = None) -> HtmlFormatOptions:
    """Build the beautifier options from an editor-style record."""
    insert_spaces = get_format_option(options, "insertSpaces", True, kind=bool)
    tab_size = get_format_option(options, "tabSize", 4, kind=int)

    indent_char = get_format_option(options, "indentChar", None, kind=str)
    if indent_char not in (" ", "\t"):
        indent_char = " " if insert_spaces else "\t"
    default_width = max(tab_size, 0) if indent_char == " " else 1
    indent_size = get_format_option(options, "indentWidth", default_width, kind=int)
    if indent_size < 0:
        indent_size = default_width

    wrap_line_length = get_format_option(options, "wrapLineLength", 120, kind=int)
    if wrap_line_length < 0:
        wrap_line_length = 0

    wrap_attributes = get_format_option(options, "wrapAttributes", "auto", kind=str)
    if wrap_attributes not in WRAP_ATTRIBUTE_MODES:
        wrap_attributes = "auto"

    max_preserve = get_format_option(options, "maxPreserveNewlines", None, kind=int)
    if max_preserve is not None and max_preserve < 0:
        max_preserve = None

    return HtmlFormatOptions(
        indent_char=indent_char,
        indent_size=indent_size,
        end_with_newline=get_format_option(options, "endWithNewline", False, kind=bool),
        wrap_line_length=wrap_line_length,
        wrap_attributes=wrap_attributes,
        preserve_newlines=get_format_option(options, "preserveNewlines", False, kind=bool),
        max_preserve_newlines=max_preserve,
        indent_inner_html=get_format_option(options, "indentInnerHtml", False, kind=bool),
        indent_handlebars=get_format_option(options, "indentHandlebars", False, kind=bool),
        unformatted=get_tags_format_option(options, "unformatted", DEFAULT_UNFORMATTED),
        content_unformatted=get_tags_format_option(
            options, "contentUnformatted", DEFAULT_CONTENT_UNFORMATTED
        ),
        extra_liners=get_tags_format_option(options, "extraLiners", DEFAULT_EXTRA_LINERS),
        templating=("php",),
    )
