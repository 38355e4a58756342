"""Write the file-path attribute onto marked opening tags."""

from __future__ import annotations

from .config import DEFAULT_ATTRIBUTE_NAME
from .models import FileContext
from .nodes import Node, attribute_name, make_string_attribute, walk


def has_attribute(opening_element: Node, name: str) -> bool:
    return any(attribute_name(attr) == name for attr in opening_element.get("attributes") or [])


def inject_attributes(
    tree: Node, context: FileContext, *, attribute: str = DEFAULT_ATTRIBUTE_NAME
) -> int:
    """Append ``attribute`` to every marked opening tag that lacks it.

    Returns the number of attributes added; a second run adds none.
    """
    added = 0
    for node, _, _ in walk(tree):
        if node["type"] != "JSXOpeningElement" or not context.is_marked(node):
            continue
        if has_attribute(node, attribute):
            continue
        node.setdefault("attributes", []).append(
            make_string_attribute(attribute, context.file_path)
        )
        added += 1
    return added


__all__ = ["has_attribute", "inject_attributes"]
