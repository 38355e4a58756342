"""Write injected attributes back into the original source text."""

from __future__ import annotations

from typing import List, Tuple

from .nodes import Node, attribute_name, walk


def render_source(source: str, tree: Node) -> str:
    """Return ``source`` with every attribute added to ``tree`` spliced in.

    Attributes that came from the parser carry ``start``/``end`` offsets; the
    ones without offsets were added after parsing and are inserted right after
    the tag's last original attribute (or its name) as ``name="value"``.
    Everything else in the source is left byte-for-byte intact.
    """
    insertions: List[Tuple[int, str]] = []
    for node, _, _ in walk(tree):
        if node["type"] != "JSXOpeningElement":
            continue
        added = [attr for attr in node.get("attributes") or [] if "start" not in attr]
        if not added:
            continue
        anchor = _insertion_offset(node)
        text = "".join(f" {_render_attribute(attr)}" for attr in added)
        insertions.append((anchor, text))

    result = source
    for offset, text in sorted(insertions, key=lambda item: item[0], reverse=True):
        result = result[:offset] + text + result[offset:]
    return result


def _insertion_offset(opening_element: Node) -> int:
    original = [attr for attr in opening_element.get("attributes") or [] if "end" in attr]
    anchor_node = original[-1] if original else opening_element.get("name")
    if not isinstance(anchor_node, dict) or "end" not in anchor_node:
        raise ValueError("Opening element has no source offsets to anchor new attributes")
    return anchor_node["end"]


def _render_attribute(attribute: Node) -> str:
    name = attribute_name(attribute)
    if name is None:
        raise ValueError(f"Cannot render attribute of type {attribute.get('type')!r}")
    value = attribute.get("value")
    if value is None:
        return name
    if value.get("type") != "StringLiteral":
        raise ValueError(f"Cannot render attribute value of type {value.get('type')!r}")
    escaped = str(value.get("value", "")).replace('"', "&quot;")
    return f'{name}="{escaped}"'


__all__ = ["render_source"]
