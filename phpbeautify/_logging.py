"""
Debug tracing for beautify runs, off unless asked for.

Editors call `beautify` on every save, so a stray handler or a print would
end up in someone's output panel. Entry points take `logger=` (use this one)
or `log=True` (use the module's named logger) and otherwise trace into a
`NoopLogger`:

    lg = resolve_logger(logger=logger, enabled=log, name=__name__)
    lg.debug("input is a single code block; skipping the markup pass")
"""
from __future__ import annotations

import logging


class NoopLogger:
    """Swallows every call; stands in for a logger when tracing is off."""

    def debug(self, *args, **kwargs):  # type: ignore[no-untyped-def]
        pass

    info = warning = error = exception = critical = debug


def resolve_logger(
    logger: logging.Logger | None = None,
    *,
    enabled: bool = False,
    name: str | None = None,
    level: int = logging.DEBUG,
) -> logging.Logger | NoopLogger:
    """
    Pick the logger a beautify run traces into.

    A caller-supplied `logger` always wins. With `enabled`, the named
    logger (default "phpbeautify") is raised to `level`; no handler is
    attached, records go up to whatever the host application configured.
    Otherwise tracing is dropped.
    """
    if logger is not None:
        return logger
    if enabled:
        lg = logging.getLogger(name or "phpbeautify")
        lg.setLevel(level)
        lg.propagate = True
        return lg
    return NoopLogger()
