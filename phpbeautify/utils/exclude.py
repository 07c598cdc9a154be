# phpbeautify/utils/exclude.py
import os
from typing import Iterable, Optional

import pathspec


def build_exclude_spec(patterns: Iterable[str]) -> pathspec.PathSpec:
    """Compile glob patterns (gitignore syntax) into a PathSpec."""
    lines = [p.strip() for p in patterns if isinstance(p, str) and p.strip()]
    return pathspec.PathSpec.from_lines("gitwildmatch", lines)


def is_excluded(path: str, patterns: Iterable[str], root: Optional[str] = None) -> bool:
    """
    True if `path` matches any of `patterns`.

    With `root`, paths inside it are matched relative to it; everything else
    is matched on its absolute POSIX form. No patterns means nothing is excluded.
    """
    patterns = list(patterns or [])
    if not patterns or not path:
        return False
    full = os.path.abspath(path)
    probe = full
    if root:
        base = os.path.abspath(root)
        if os.path.commonpath([base, full]) == base:
            probe = os.path.relpath(full, base)
    probe = probe.replace(os.sep, "/")
    return build_exclude_spec(patterns).match_file(probe)
