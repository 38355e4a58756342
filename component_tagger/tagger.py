"""Tag the topmost JSX elements of one file with its project-relative path."""

from __future__ import annotations

from typing import Optional

from .config import TaggerConfig
from .injector import inject_attributes
from .locator import locate_topmost
from .logging import get_logger
from .models import FileContext
from .nodes import Node
from .paths import UNKNOWN_PATH, PathInput, normalize_path

logger = get_logger("tagger")


def tag_tree(
    tree: Node, file_path: PathInput, config: Optional[TaggerConfig] = None
) -> Node:
    """Mutate ``tree`` in place and return it.

    Path problems never fail the build: they are logged and the placeholder
    path is used. Errors raised while walking the tree propagate unchanged.
    """
    config = config or TaggerConfig()
    if not config.enabled:
        logger.debug("Tagging disabled; leaving %s untouched", file_path)
        return tree

    context = FileContext(file_path=_display_path(file_path, config.root_marker))
    locate_topmost(tree, context)
    added = inject_attributes(tree, context, attribute=config.attribute_name)
    logger.debug("Added %d %s attribute(s) in %s", added, config.attribute_name, context.file_path)
    return tree


def _display_path(file_path: PathInput, root_marker: str) -> str:
    try:
        return normalize_path(file_path, root_marker)
    except (TypeError, ValueError) as exc:
        logger.warning("Could not derive display path from %r: %s", file_path, exc)
        return UNKNOWN_PATH


__all__ = ["tag_tree"]
