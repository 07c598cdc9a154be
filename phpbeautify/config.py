# phpbeautify/config.py
"""
Settings for the formatting service.

Settings live in a JSON object, typically lifted from an editor's settings
file:

    {
        "formatHtml": true,
        "exclude": ["vendor/**", "*.blade.php"],
        "shortTags": false,
        "html": {"insertSpaces": true, "tabSize": 2, "wrapLineLength": 100}
    }

Keys may be camelCase or snake_case. A file that cannot be read or parsed is
an error; a value of the wrong shape is not, it just keeps its default.
"""
from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .errors import ConfigError
from .options import get_format_option

log = logging.getLogger(__name__)

__all__ = ["FormatterConfig", "load_config"]


@dataclass
class FormatterConfig:
    """What `format_document` should do with a document."""

    format_html: bool = False
    exclude: List[str] = field(default_factory=list)
    short_tags: bool = False
    # Editor-style beautifier options, translated by phpbeautify.options.
    html: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FormatterConfig":
        format_html = get_format_option(data, "formatHtml", False, kind=bool)
        short_tags = get_format_option(data, "shortTags", False, kind=bool)

        exclude_raw = get_format_option(data, "exclude", [])
        if isinstance(exclude_raw, str):
            exclude_raw = [exclude_raw]
        if isinstance(exclude_raw, list) and all(isinstance(p, str) for p in exclude_raw):
            exclude = [p for p in exclude_raw if p.strip()]
        else:
            log.warning(f"Ignoring 'exclude' setting of type {type(exclude_raw).__name__}; expected a list of globs.")
            exclude = []

        html_raw = get_format_option(data, "html", {})
        if isinstance(html_raw, Mapping):
            html = dict(html_raw)
        else:
            log.warning(f"Ignoring 'html' setting of type {type(html_raw).__name__}; expected an object.")
            html = {}

        return cls(format_html=format_html, exclude=exclude, short_tags=short_tags, html=html)


def _snake(key: str) -> str:
    return re.sub(r"(?<!^)([A-Z])", r"_\1", key).lower()


def load_config(
    path: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> FormatterConfig:
    """
    Build a FormatterConfig from an optional JSON file plus overrides.

    Overrides win over file values key by key, whichever case either side
    uses; the `html` objects are merged. Raises ConfigError if the file is
    unreadable, not JSON, or not an object.
    """
    data: Dict[str, Any] = {}
    if path:
        try:
            with open(os.path.expanduser(path), "r", encoding="utf-8") as f:
                loaded = json.load(f)
        except OSError as e:
            raise ConfigError(f"Failed to read settings file '{path}': {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Settings file '{path}' is not valid JSON: {e}") from e
        if not isinstance(loaded, dict):
            raise ConfigError(f"Settings file '{path}' must contain a JSON object.")
        data.update({_snake(k): v for k, v in loaded.items()})

    for key, value in (overrides or {}).items():
        key = _snake(key)
        if key == "html" and isinstance(value, Mapping) and isinstance(data.get("html"), Mapping):
            data["html"] = {**data["html"], **value}
        else:
            data[key] = value

    return FormatterConfig.from_mapping(data)
