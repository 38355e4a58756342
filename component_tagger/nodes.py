"""Helpers for Babel-shaped syntax trees built from plain dicts."""

from __future__ import annotations

from typing import Any, Dict, Iterator, Optional, Tuple

Node = Dict[str, Any]

# Keys that hold metadata rather than child nodes.
_SKIPPED_KEYS = frozenset(
    {
        "loc",
        "extra",
        "comments",
        "tokens",
        "leadingComments",
        "trailingComments",
        "innerComments",
    }
)


def is_node(value: Any, node_type: str | None = None) -> bool:
    if not isinstance(value, dict) or "type" not in value:
        return False
    return node_type is None or value["type"] == node_type


def is_jsx_element(value: Any) -> bool:
    return is_node(value, "JSXElement")


def is_jsx_fragment(value: Any) -> bool:
    return is_node(value, "JSXFragment")


def is_logical_and(value: Any) -> bool:
    return is_node(value, "LogicalExpression") and value.get("operator") == "&&"


def is_conditional(value: Any) -> bool:
    return is_node(value, "ConditionalExpression")


def iter_child_nodes(node: Node) -> Iterator[Tuple[Node, str]]:
    """Yield ``(child, key)`` for every direct child node in field order."""
    for key, value in node.items():
        if key in _SKIPPED_KEYS:
            continue
        if isinstance(value, dict):
            if "type" in value:
                yield value, key
        elif isinstance(value, list):
            for item in value:
                if is_node(item):
                    yield item, key


def walk(root: Node) -> Iterator[Tuple[Node, Optional[Node], Optional[str]]]:
    """Depth-first, document-order walk yielding ``(node, parent, key)``.

    The root itself is yielded first with no parent.
    """
    stack: list[Tuple[Node, Optional[Node], Optional[str]]] = [(root, None, None)]
    while stack:
        node, parent, key = stack.pop()
        yield node, parent, key
        children = list(iter_child_nodes(node))
        for child, child_key in reversed(children):
            stack.append((child, node, child_key))


def descendants(root: Node) -> Iterator[Node]:
    """Every node below ``root``, excluding ``root`` itself."""
    walker = walk(root)
    next(walker)
    for node, _, _ in walker:
        yield node


def unwrap_parentheses(expression: Any) -> Any:
    while is_node(expression, "ParenthesizedExpression"):
        expression = expression.get("expression")
    return expression


def unwrap_logical_and(expression: Any) -> Any:
    """Follow the right-hand operands of ``a && b && <X/>`` to the final value."""
    while is_logical_and(expression):
        expression = unwrap_parentheses(expression.get("right"))
    return expression


def attribute_name(attribute: Node) -> Optional[str]:
    """Return the plain name of a ``JSXAttribute``, or None for other shapes."""
    if not is_node(attribute, "JSXAttribute"):
        return None
    name = attribute.get("name")
    if is_node(name, "JSXIdentifier"):
        return name.get("name")
    return None


def make_string_attribute(name: str, value: str) -> Node:
    return {
        "type": "JSXAttribute",
        "name": {"type": "JSXIdentifier", "name": name},
        "value": {"type": "StringLiteral", "value": value},
    }


__all__ = [
    "Node",
    "attribute_name",
    "descendants",
    "is_conditional",
    "is_jsx_element",
    "is_jsx_fragment",
    "is_logical_and",
    "is_node",
    "iter_child_nodes",
    "make_string_attribute",
    "unwrap_logical_and",
    "unwrap_parentheses",
    "walk",
]
