# phpbeautify/markup.py
"""
Whitespace-only HTML beautifier.

This is the default `formatter` used by `phpbeautify.beautify`. It re-indents
markup and never changes anything else: comments, templating tags
(`<? ... ?>`), doctype declarations, raw text elements (`script`, `style`),
`content_unformatted` element bodies and `unformatted` elements are copied
verbatim. Text and inline elements flow and wrap at `wrap_line_length`;
block elements start on their own line.

Malformed markup (stray end tags, unclosed elements, a `<` in text) never
raises; the output simply follows whatever structure could be recognised.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

from .options import HtmlFormatOptions

__all__ = ["format_html", "INLINE_ELEMENTS", "VOID_ELEMENTS", "RAW_TEXT_ELEMENTS"]

INLINE_ELEMENTS = frozenset({
    "a", "abbr", "acronym", "area", "audio", "b", "bdi", "bdo", "big", "br",
    "button", "canvas", "cite", "code", "data", "datalist", "del", "dfn", "em",
    "embed", "i", "iframe", "img", "input", "ins", "kbd", "keygen", "label",
    "map", "mark", "math", "meter", "noscript", "object", "output", "progress",
    "q", "ruby", "s", "samp", "select", "small", "span", "strike", "strong",
    "sub", "sup", "svg", "template", "text", "textarea", "time", "tt", "u",
    "var", "video", "wbr",
})

VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input", "keygen",
    "link", "menuitem", "meta", "param", "source", "track", "wbr",
    "basefont", "isindex",
})

RAW_TEXT_ELEMENTS = frozenset({"script", "style"})

# Elements whose end tag may be omitted before a sibling of the same name.
_SELF_TERMINATING = frozenset({"li", "p", "option", "tr", "td", "th", "dt", "dd"})

_TAG_NAME_RE = re.compile(r"<(/?)([A-Za-z][^\s/>]*)")
_WS_OR_WORD_RE = re.compile(r"\s+|\S+")
_HANDLEBARS_BLOCK_RE = re.compile(r"\{\{(?:[#^/]|else\b)[^{}]*\}\}")


@dataclass
class _Item:
    kind: str  # text, start, end, comment, template, decl, raw, verbatim
    raw: str
    name: str = ""
    void: bool = False
    verbatim: bool = False


@dataclass
class _Open:
    name: str
    lines_at_open: int
    indented: bool


# ---------------- Scanner ----------------

def _find_tag_end(s: str, i: int, templating: bool) -> int:
    """Index just past the '>' that closes the tag starting at s[i]."""
    n = len(s)
    j = i + 1
    quote = None
    while j < n:
        ch = s[j]
        if quote:
            if ch == quote:
                quote = None
        elif ch in ('"', "'"):
            quote = ch
        elif s.startswith("<!--", j):
            k = s.find("-->", j + 4)
            if k == -1:
                return n
            j = k + 3
            continue
        elif templating and s.startswith("<?", j):
            k = s.find("?>", j + 2)
            if k == -1:
                return n
            j = k + 2
            continue
        elif ch == ">":
            return j + 1
        j += 1
    return n


def _find_matching_end(s: str, name: str, start: int) -> int:
    """End offset of the element `name` whose start tag ends at `start`."""
    pattern = re.compile(r"<(/?)\s*" + re.escape(name) + r"(?=[\s/>])[^>]*>", re.IGNORECASE)
    depth = 1
    for m in pattern.finditer(s, start):
        if m.group(1):
            depth -= 1
            if depth == 0:
                return m.end()
        elif not m.group(0).endswith("/>"):
            depth += 1
    return len(s)


def _scan(text: str, opts: HtmlFormatOptions) -> List[_Item]:
    templating = "php" in opts.templating
    unformatted = {t for t in opts.unformatted if t[:1] not in ("!", "?")}
    content_unformatted = set(opts.content_unformatted)

    items: List[_Item] = []
    n = len(text)
    i = 0
    text_start = 0

    def flush_text(upto: int) -> None:
        if upto > text_start:
            items.append(_Item("text", text[text_start:upto]))

    while i < n:
        lt = text.find("<", i)
        if lt == -1:
            break
        i = lt

        if text.startswith("<!--", i):
            k = text.find("-->", i + 4)
            end = n if k == -1 else k + 3
            flush_text(i)
            items.append(_Item("comment", text[i:end]))
        elif templating and text.startswith("<?", i):
            k = text.find("?>", i + 2)
            end = n if k == -1 else k + 2
            flush_text(i)
            items.append(_Item("template", text[i:end]))
        elif text.startswith("<!", i):
            end = _find_tag_end(text, i, templating)
            flush_text(i)
            items.append(_Item("decl", text[i:end]))
        else:
            m = _TAG_NAME_RE.match(text, i)
            if not m:
                # A lone "<" in text.
                i += 1
                continue
            end = _find_tag_end(text, i, templating)
            raw = text[i:end]
            name = m.group(2).lower()
            flush_text(i)
            if m.group(1):
                items.append(_Item("end", raw, name))
            else:
                void = name in VOID_ELEMENTS or raw.rstrip(">").rstrip().endswith("/")
                if name in unformatted and not void:
                    end = _find_matching_end(text, name, end)
                    items.append(_Item("verbatim", text[i:end], name))
                else:
                    items.append(_Item("start", raw, name, void=void, verbatim=name in unformatted))
                    if not void and (name in RAW_TEXT_ELEMENTS or name in content_unformatted):
                        close = re.compile(r"</\s*" + re.escape(name) + r"\s*>", re.IGNORECASE)
                        cm = close.search(text, end)
                        body_end = cm.start() if cm else n
                        if body_end > end:
                            items.append(_Item("raw", text[end:body_end], name))
                        end = body_end
        i = end
        text_start = end

    flush_text(n)
    return items


def _split_attributes(raw: str, templating: bool) -> List[str]:
    """Split the attribute part of a start tag into attribute strings."""
    attrs: List[str] = []
    buf: List[str] = []
    n = len(raw)
    j = 0
    quote = None
    while j < n:
        ch = raw[j]
        if quote:
            buf.append(ch)
            if ch == quote:
                quote = None
        elif ch in ('"', "'"):
            quote = ch
            buf.append(ch)
        elif raw.startswith("<!--", j) or (templating and raw.startswith("<?", j)):
            closer = "-->" if raw.startswith("<!--", j) else "?>"
            k = raw.find(closer, j + 2)
            k = n if k == -1 else k + len(closer)
            buf.append(raw[j:k])
            j = k
            continue
        elif ch.isspace():
            if buf:
                attrs.append("".join(buf))
                buf = []
        else:
            buf.append(ch)
        j += 1
    if buf:
        attrs.append("".join(buf))
    # Re-join "name = value" written with spaces around "=".
    joined: List[str] = []
    for a in attrs:
        if joined and (a.startswith("=") or joined[-1].endswith("=")):
            joined[-1] += a
        else:
            joined.append(a)
    return joined


# ---------------- Printer ----------------

class _Printer:
    def __init__(self, opts: HtmlFormatOptions):
        self.opts = opts
        self.lines: List[str] = []
        self.line = ""
        self.depth = 0
        self.ws_newlines = 0
        self.ws_space = False
        self.break_next = False

    def indent(self, depth: Optional[int] = None) -> str:
        return self.opts.indent_unit * (self.depth if depth is None else depth)

    def has_content(self) -> bool:
        return bool(self.line.strip())

    def col(self) -> int:
        return len(self.line.rsplit("\n", 1)[-1])

    def newline(self, blank_lines: int = 0) -> None:
        if self.has_content():
            self.lines.append(self.line.rstrip())
        self.line = ""
        if not self.lines:
            return
        existing = 0
        for line in reversed(self.lines):
            if line:
                break
            existing += 1
        for _ in range(blank_lines - existing):
            self.lines.append("")

    def add_whitespace(self, ws: str) -> None:
        self.ws_newlines += ws.count("\n")
        self.ws_space = True

    def _kept_blank_lines(self, newlines: int) -> int:
        if not (self.opts.preserve_newlines and newlines):
            return 0
        limit = self.opts.max_preserve_newlines
        kept = newlines if limit is None else min(newlines, limit)
        return max(kept - 1, 0)

    def place(self, *, block: bool = False, atom: bool = False) -> bool:
        """
        Resolve pending whitespace before the next item.

        Returns True when the item should be preceded by a single space.
        """
        nl, sp = self.ws_newlines, self.ws_space
        brk = self.break_next
        self.ws_newlines, self.ws_space, self.break_next = 0, False, False
        if not self.has_content():
            if nl and self.lines:
                self.newline(self._kept_blank_lines(nl))
            return False
        if block or brk or (nl and (self.opts.preserve_newlines or atom)):
            self.newline(self._kept_blank_lines(nl))
            return False
        return sp

    def write(self, s: str) -> None:
        if self.has_content():
            self.line += s
        else:
            self.line = self.indent() + s

    def start_col(self, space: bool) -> int:
        if self.has_content():
            return self.col() + int(space)
        return len(self.indent())

    def fits(self, space: bool, s: str) -> bool:
        limit = self.opts.wrap_line_length
        if not limit or not self.has_content():
            return True
        return self.col() + int(space) + len(s.split("\n", 1)[0]) <= limit

    def inline(self, s: str, *, atom: bool = False, wrappable: bool = True) -> None:
        space = self.place(atom=atom)
        if wrappable and not self.fits(space, s):
            self.newline()
            space = False
        if space:
            self.line += " "
        self.write(s)

    def finish(self) -> str:
        self.newline()
        while self.lines and not self.lines[-1]:
            self.lines.pop()
        return "\n".join(self.lines)


# ---------------- Formatter ----------------

class _Formatter:
    def __init__(self, opts: HtmlFormatOptions):
        self.opts = opts
        self.p = _Printer(opts)
        self.stack: List[_Open] = []
        self.templating = "php" in opts.templating

    def run(self, items: List[_Item]) -> str:
        for item in items:
            getattr(self, "_on_" + item.kind)(item)
        return self.p.finish()

    # -- tags

    def _render_start(self, item: _Item, col: int) -> str:
        mode = self.opts.wrap_attributes
        if item.verbatim or mode in ("preserve", "preserve-aligned"):
            return item.raw
        m = _TAG_NAME_RE.match(item.raw)
        head = "<" + m.group(2)
        body = item.raw[m.end():]
        body = body[:-1] if body.endswith(">") else body
        self_closing = body.rstrip().endswith("/")
        if self_closing:
            body = body.rstrip()[:-1]
        attrs = _split_attributes(body, self.templating)
        close = " />" if self_closing else ">"
        if not attrs:
            return head + close

        single = head + " " + " ".join(attrs) + close
        limit = self.opts.wrap_line_length
        wrap_indent = self.p.indent(self.p.depth + 1)
        aligned = " " * (col + len(head) + 1)

        if mode == "force-expand-multiline":
            if len(attrs) == 1:
                return single
            lines = [head] + [wrap_indent + a for a in attrs]
            end = self.p.indent() + close.lstrip()
            return "\n".join(lines) + "\n" + end
        if mode in ("force", "force-aligned"):
            if len(attrs) == 1:
                return single
            pad = aligned if mode == "force-aligned" else wrap_indent
            return head + " " + attrs[0] + "".join("\n" + pad + a for a in attrs[1:]) + close

        # auto / aligned-multiple: wrap only when the tag would overflow.
        if not limit or col + len(single) <= limit:
            return single
        pad = aligned if mode == "aligned-multiple" else wrap_indent
        out = head + " " + attrs[0]
        width = col + len(out)
        for a in attrs[1:]:
            if width + 1 + len(a) > limit:
                out += "\n" + pad + a
                width = len(pad) + len(a)
            else:
                out += " " + a
                width += 1 + len(a)
        return out + close

    def _close_top(self) -> _Open:
        entry = self.stack.pop()
        if entry.indented:
            self.p.depth -= 1
        return entry

    def _on_start(self, item: _Item) -> None:
        p = self.p
        name = item.name
        if name in _SELF_TERMINATING and self.stack and self.stack[-1].name == name:
            self._close_top()

        if name in INLINE_ELEMENTS:
            space = p.place()
            tag = self._render_start(item, p.start_col(space))
            if not p.fits(space, tag):
                p.newline()
                space = False
                tag = self._render_start(item, p.start_col(False))
            if space:
                p.line += " "
            p.write(tag)
            indented = False
        else:
            p.place(block=True)
            if name in self.opts.extra_liners:
                p.newline(1)
            p.write(self._render_start(item, p.start_col(False)))
            indented = not (name == "html" and not self.opts.indent_inner_html)
            if item.void:
                p.break_next = True

        if not item.void:
            self.stack.append(_Open(name, len(p.lines), indented))
            if self.stack[-1].indented:
                p.depth += 1

    def _on_end(self, item: _Item) -> None:
        p = self.p
        name = item.name
        idx = None
        for k in range(len(self.stack) - 1, -1, -1):
            if self.stack[k].name == name:
                idx = k
                break
        if idx is None:
            # Stray end tag: print it, leave the indentation alone.
            if name in INLINE_ELEMENTS:
                p.inline(item.raw)
            else:
                p.place(block=True)
                p.write(item.raw)
                p.break_next = True
            return

        while len(self.stack) > idx + 1:
            self._close_top()
        entry = self._close_top()

        if name in INLINE_ELEMENTS:
            p.inline(item.raw)
            return
        if len(p.lines) > entry.lines_at_open:
            p.place(block=True)
            if "/" + name in self.opts.extra_liners:
                p.newline(1)
        elif p.place():
            p.line += " "
        p.write(item.raw)
        p.break_next = True

    def _on_verbatim(self, item: _Item) -> None:
        if item.name in INLINE_ELEMENTS:
            self.p.inline(item.raw, wrappable=False)
        else:
            self.p.place(block=True)
            self.p.write(item.raw)
            self.p.break_next = True

    def _on_raw(self, item: _Item) -> None:
        # Body of script/style/pre/textarea: glued to its start tag, untouched.
        self.p.line += item.raw

    def _on_comment(self, item: _Item) -> None:
        self.p.inline(item.raw, atom=True, wrappable=False)

    _on_template = _on_comment

    def _on_decl(self, item: _Item) -> None:
        self.p.place(block=True)
        self.p.write(item.raw)
        self.p.break_next = True

    # -- text

    def _on_text(self, item: _Item) -> None:
        if not self.opts.indent_handlebars:
            self._words(item.raw)
            return
        pos = 0
        for m in _HANDLEBARS_BLOCK_RE.finditer(item.raw):
            self._words(item.raw[pos:m.start()])
            self._handlebars(m.group(0))
            pos = m.end()
        self._words(item.raw[pos:])

    def _words(self, raw: str) -> None:
        for m in _WS_OR_WORD_RE.finditer(raw):
            chunk = m.group(0)
            if chunk.isspace():
                self.p.add_whitespace(chunk)
            else:
                self.p.inline(chunk)

    def _handlebars(self, tag: str) -> None:
        p = self.p
        marker = tag[2]
        if marker in "#^":
            p.place(block=True)
            p.write(tag)
            self.stack.append(_Open("{{", len(p.lines), True))
            p.depth += 1
            return
        if marker == "/":
            if any(e.name == "{{" for e in self.stack):
                while self.stack[-1].name != "{{":
                    self._close_top()
                entry = self._close_top()
                if len(p.lines) > entry.lines_at_open:
                    p.place(block=True)
                elif p.place():
                    p.line += " "
            else:
                p.place(block=True)
            p.write(tag)
            p.break_next = True
            return
        # {{else}}: one level out, between the two halves of the block.
        p.place(block=True)
        p.line = p.indent(max(p.depth - 1, 0)) + tag
        p.break_next = True


def format_html(text: str, options: Optional[HtmlFormatOptions] = None) -> str:
    """Re-indent `text` according to `options`. Blank input yields ""."""
    opts = options or HtmlFormatOptions()
    if not text.strip():
        return ""
    result = _Formatter(opts).run(_scan(text, opts))
    if opts.end_with_newline:
        result += "\n"
    return result
