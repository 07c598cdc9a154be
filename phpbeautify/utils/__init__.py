# phpbeautify/utils/__init__.py
from .exclude import build_exclude_spec, is_excluded

__all__ = ["build_exclude_spec", "is_excluded"]
