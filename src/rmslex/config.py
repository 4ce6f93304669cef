"""Settings for the HTML debug output.

``DebugConfig`` is immutable and passed explicitly to the renderer and the
batch functions; ``None`` means the module default.

Usage:
    config = DebugConfig(title="Arabia", stylesheet="../style.css")
    html = render_html(annotate(tokenize_file(path)), config)

    # From a mapping, e.g. parsed from a settings file
    config = DebugConfig.from_dict({"title": "Arabia", "unknown": 1})
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any


@dataclass(frozen=True, slots=True)
class DebugConfig:
    """Immutable render configuration.

    Attributes:
        stylesheet: href of the stylesheet linked from each page, or None to
            link none
        title: Page title, or None to title each page after its script
            (the renderer falls back to "Code")
        base_class: Class every text span carries before any highlight class
        show_columns: Attach a hover card with the column range to text spans
        output_suffix: Suffix of the written page, replacing the script's own

    """

    stylesheet: str | None = "style.css"
    title: str | None = None
    base_class: str = "code-item"
    show_columns: bool = True
    output_suffix: str = ".html"

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "DebugConfig":
        """Create a DebugConfig from a mapping, ignoring unknown keys.

        Example:
            >>> DebugConfig.from_dict({"title": "Arabia", "colour": "red"}).title
            'Arabia'

        """
        valid = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in config_dict.items() if k in valid})


DEFAULT_CONFIG = DebugConfig()


def resolve_config(config: DebugConfig | None) -> DebugConfig:
    return DEFAULT_CONFIG if config is None else config


__all__ = [
    "DEFAULT_CONFIG",
    "DebugConfig",
    "resolve_config",
]
