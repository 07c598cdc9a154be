# phpbeautify/service.py
import logging
from typing import Callable, List, Optional, Tuple

from ._logging import resolve_logger
from .config import FormatterConfig
from .core import beautify
from .errors import FormatFailedError
from .utils.exclude import is_excluded

__all__ = ["format_document"]


def format_document(
    text: str,
    path: Optional[str] = None,
    *,
    config: Optional[FormatterConfig] = None,
    code_formatter: Optional[Callable[[str], str]] = None,
    root: Optional[str] = None,
    strict: bool = False,
    log_callback: Optional[Callable[[str], None]] = None,
    logger: Optional[logging.Logger] = None,
    log: bool = False,
) -> Tuple[Optional[str], List[str]]:
    """
    Format a whole document the way an editor's format-on-save would.

    Stages:
    - Excluded: if `path` matches `config.exclude`, nothing happens.
    - Markup: with `config.format_html`, run `beautify` on the text.
    - Code: if given, `code_formatter(text)` reformats the PHP itself
      (an external fixer; this library never rewrites code segments).

    A failing stage is logged and skipped, so the document falls back to the
    text from before that stage. With `strict=True` it raises
    FormatFailedError instead.

    Returns:
        Tuple(Optional[str], List[str]): the new text, or None when nothing
        changed, and the user-facing log lines.
    """
    cfg = config or FormatterConfig()
    lg = resolve_logger(logger=logger, enabled=log, name=__name__)
    local_logs: List[str] = []

    def _log(msg: str) -> None:
        local_logs.append(msg)
        if log_callback:
            log_callback(msg)
        lg.debug(msg)

    if path and is_excluded(path, cfg.exclude, root=root):
        _log(f"  - '{path}' is excluded. Skipping.")
        return None, local_logs

    current = text

    if cfg.format_html:
        try:
            current = beautify(current, cfg.html, short_tags=cfg.short_tags, logger=logger, log=log)
            _log("  ✔ Markup formatted.")
        except Exception as e:
            if strict:
                raise FormatFailedError("markup formatting", str(e)) from e
            _log(f"  ✘ Markup formatting failed, keeping original markup: {e}")

    if code_formatter:
        try:
            current = code_formatter(current)
            _log("  ✔ Code formatter applied.")
        except Exception as e:
            if strict:
                raise FormatFailedError("code formatting", str(e)) from e
            _log(f"  ✘ Code formatter failed: {e}")

    if current == text:
        _log("  - No changes.")
        return None, local_logs
    return current, local_logs
