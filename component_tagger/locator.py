"""Locate the topmost JSX elements rendered by each component in a file.

A component is any ``FunctionDeclaration`` or any ``VariableDeclarator``
initialised with a function or arrow function. Inside it, every return site
(``return`` statements and arrow functions with an expression body) is
classified on its own; no return site suppresses another, so a loading guard
and the main render path are both tagged.

Elements passed as attribute values (``element={<Screen />}``) are found by a
separate sweep over the whole file.
"""

from __future__ import annotations

from typing import Any

from .logging import get_logger
from .models import FileContext
from .nodes import (
    Node,
    descendants,
    is_conditional,
    is_jsx_element,
    is_jsx_fragment,
    is_logical_and,
    is_node,
    unwrap_logical_and,
    unwrap_parentheses,
    walk,
)

logger = get_logger("locator")

_FUNCTION_INITS = frozenset({"FunctionExpression", "ArrowFunctionExpression"})


def is_component_root(node: Node) -> bool:
    if node["type"] == "FunctionDeclaration":
        return True
    if node["type"] == "VariableDeclarator":
        init = node.get("init")
        return is_node(init) and init["type"] in _FUNCTION_INITS
    return False


def scan_components(tree: Node, context: FileContext) -> int:
    """Run the return-site resolver on every component; return how many ran."""
    components = 0
    for node, _, _ in walk(tree):
        if is_component_root(node):
            components += 1
            resolve_return_sites(node, context)
    return components


def resolve_return_sites(component: Node, context: FileContext) -> None:
    for node in descendants(component):
        node_type = node["type"]
        if node_type == "ReturnStatement":
            mark_returned(node.get("argument"), context)
        elif node_type == "ArrowFunctionExpression":
            body = node.get("body")
            if is_node(body) and body["type"] != "BlockStatement":
                mark_returned(body, context)


def mark_returned(expression: Any, context: FileContext) -> None:
    """Classify a returned expression and mark the elements it renders."""
    pending = [expression]
    while pending:
        current = unwrap_logical_and(unwrap_parentheses(pending.pop()))
        if is_jsx_element(current):
            context.mark(current["openingElement"])
        elif is_jsx_fragment(current):
            mark_fragment_children(current, context)
        elif is_conditional(current):
            pending.append(current.get("alternate"))
            pending.append(current.get("consequent"))


def mark_fragment_children(fragment: Node, context: FileContext) -> None:
    """Mark every top-level element of a fragment, not only the first."""
    for child in fragment.get("children") or []:
        if is_jsx_element(child):
            context.mark(child["openingElement"])
        elif is_node(child, "JSXExpressionContainer"):
            mark_embedded(child.get("expression"), context)


def mark_embedded(expression: Any, context: FileContext) -> None:
    """Mark JSX found directly, at the end of an ``&&`` chain, or in a ternary."""
    expression = unwrap_parentheses(expression)
    if is_jsx_element(expression):
        context.mark(expression["openingElement"])
    elif is_logical_and(expression):
        target = unwrap_logical_and(expression)
        if is_jsx_element(target):
            context.mark(target["openingElement"])
    elif is_conditional(expression):
        for branch in (expression.get("consequent"), expression.get("alternate")):
            branch = unwrap_parentheses(branch)
            if is_jsx_element(branch):
                context.mark(branch["openingElement"])


def resolve_prop_values(tree: Node, context: FileContext) -> None:
    """Mark JSX passed through attribute values anywhere in the file."""
    for node, parent, key in walk(tree):
        if (
            node["type"] == "JSXExpressionContainer"
            and key == "value"
            and is_node(parent, "JSXAttribute")
        ):
            mark_embedded(node.get("expression"), context)


def locate_topmost(tree: Node, context: FileContext) -> FileContext:
    components = scan_components(tree, context)
    resolve_prop_values(tree, context)
    logger.debug(
        "Located %d topmost element(s) across %d component(s) in %s",
        len(context),
        components,
        context.file_path,
    )
    return context


__all__ = [
    "is_component_root",
    "locate_topmost",
    "mark_embedded",
    "mark_fragment_children",
    "mark_returned",
    "resolve_prop_values",
    "resolve_return_sites",
    "scan_components",
]
