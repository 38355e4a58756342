"""Tag the topmost JSX element of every component with its source file path."""

from __future__ import annotations

from typing import Optional

from .config import ConfigError, TaggerConfig, load_config
from .generator import render_source
from .models import FileContext
from .parsing import SourceParseError, parse_source
from .paths import UNKNOWN_PATH, PathInput, normalize_path
from .tagger import tag_tree


def tag_source(
    source: str, file_path: PathInput, config: Optional[TaggerConfig] = None
) -> str:
    """Parse ``source``, tag it and return the rewritten text."""
    config = config or TaggerConfig()
    if not config.enabled:
        return source
    tree = parse_source(source)
    tag_tree(tree, file_path, config)
    return render_source(source, tree)


__all__ = [
    "ConfigError",
    "FileContext",
    "SourceParseError",
    "TaggerConfig",
    "UNKNOWN_PATH",
    "load_config",
    "normalize_path",
    "parse_source",
    "render_source",
    "tag_source",
    "tag_tree",
]
