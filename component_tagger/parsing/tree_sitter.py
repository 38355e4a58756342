"""Tree-sitter powered TSX parser producing Babel-shaped dict trees."""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, List, Optional

from ..nodes import Node

try:  # pragma: no cover - optional dependency
    import tree_sitter_typescript
    from tree_sitter import Language, Parser

    TREE_SITTER_AVAILABLE = True
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    tree_sitter_typescript = None  # type: ignore[assignment]
    Language = None  # type: ignore[assignment,misc]
    Parser = None  # type: ignore[assignment,misc]
    TREE_SITTER_AVAILABLE = False


class SourceParseError(ValueError):
    """Raised when source text cannot be parsed as TSX."""

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"{message} ({line}:{column})")
        self.line = line
        self.column = column


_LOGICAL_OPERATORS = frozenset({"&&", "||", "??"})
_FUNCTION_EXPRESSIONS = ("function_expression", "function", "generator_function")
_FUNCTION_DECLARATIONS = ("function_declaration", "generator_function_declaration")
_IDENTIFIERS = ("identifier", "property_identifier", "shorthand_property_identifier")


class TsxParser:
    """Parses JS, JSX, TS and TSX source with the tree-sitter TSX grammar."""

    def __init__(self) -> None:
        if not TREE_SITTER_AVAILABLE:
            raise RuntimeError("tree-sitter and tree-sitter-typescript are required to parse source")
        self._parser = Parser(Language(tree_sitter_typescript.language_tsx()))

    def parse(self, source: str) -> Node:
        """Return a ``File`` node whose offsets index into ``source``."""
        source_bytes = source.encode("utf-8")
        tree = self._parser.parse(source_bytes)
        root = tree.root_node
        if root.has_error:
            error = _first_error(root)
            row, column = error.start_point
            raise SourceParseError("Unable to parse source", row + 1, column)
        program = _Converter(source, source_bytes).convert(root)
        return {"type": "File", "start": 0, "end": len(source), "program": program}


_local = threading.local()


def get_parser() -> TsxParser:
    """Return the calling thread's parser, building it on first use.

    tree-sitter parsers are not safe to share between threads.
    """
    parser = getattr(_local, "parser", None)
    if parser is None:
        parser = TsxParser()
        _local.parser = parser
    return parser


def parse_source(source: str) -> Node:
    return get_parser().parse(source)


def _first_error(node):  # type: ignore[no-untyped-def]
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            return _first_error(child)
    return node


class _Converter:
    """Maps tree-sitter nodes onto the Babel node shapes the tagger matches."""

    def __init__(self, source: str, source_bytes: bytes) -> None:
        self._bytes = source_bytes
        self._char_index: Optional[List[int]] = None
        if not source.isascii():
            index: List[int] = []
            for position, char in enumerate(source):
                index.extend([position] * len(char.encode("utf-8")))
            index.append(len(source))
            self._char_index = index
        self._handlers: Dict[str, Callable[[Any], Node]] = {
            "program": self._program,
            "statement_block": self._block,
            "expression_statement": self._expression_statement,
            "return_statement": self._return,
            "lexical_declaration": self._variable_declaration,
            "variable_declaration": self._variable_declaration,
            "variable_declarator": self._variable_declarator,
            "arrow_function": self._arrow_function,
            "export_statement": self._export,
            "binary_expression": self._binary,
            "ternary_expression": self._ternary,
            "jsx_element": self._jsx_element,
            "jsx_self_closing_element": self._jsx_self_closing_element,
            "jsx_expression": self._jsx_expression,
            "jsx_text": self._jsx_text,
            "string": self._string,
            "null": lambda node: self._base(node, "NullLiteral"),
            "true": lambda node: self._base(node, "BooleanLiteral", value=True),
            "false": lambda node: self._base(node, "BooleanLiteral", value=False),
            "number": lambda node: self._base(node, "NumericLiteral", raw=self._text(node)),
        }
        for name in _FUNCTION_DECLARATIONS:
            self._handlers[name] = lambda node: self._function(node, "FunctionDeclaration")
        for name in _FUNCTION_EXPRESSIONS:
            self._handlers[name] = lambda node: self._function(node, "FunctionExpression")
        for name in _IDENTIFIERS:
            self._handlers[name] = lambda node: self._base(node, "Identifier", name=self._text(node))

    def convert(self, node) -> Optional[Node]:  # type: ignore[no-untyped-def]
        if node is None:
            return None
        if node.type == "parenthesized_expression":
            inner = _named(node)
            return self.convert(inner[0]) if inner else None
        handler = self._handlers.get(node.type)
        if handler is not None:
            return handler(node)
        return self._base(node, node.type, children=self._convert_all(_named(node)))

    def _convert_all(self, nodes) -> List[Node]:  # type: ignore[no-untyped-def]
        converted = [self.convert(child) for child in nodes]
        return [item for item in converted if item is not None]

    def _base(self, node, node_type: str, **fields: Any) -> Node:  # type: ignore[no-untyped-def]
        result: Node = {
            "type": node_type,
            "start": self._char(node.start_byte),
            "end": self._char(node.end_byte),
        }
        result.update(fields)
        return result

    def _char(self, byte_offset: int) -> int:
        if self._char_index is None:
            return byte_offset
        return self._char_index[byte_offset]

    def _text(self, node) -> str:  # type: ignore[no-untyped-def]
        return self._bytes[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    # Statements

    def _program(self, node) -> Node:  # type: ignore[no-untyped-def]
        return self._base(node, "Program", body=self._convert_all(_named(node)))

    def _block(self, node) -> Node:  # type: ignore[no-untyped-def]
        return self._base(node, "BlockStatement", body=self._convert_all(_named(node)))

    def _expression_statement(self, node) -> Node:  # type: ignore[no-untyped-def]
        inner = _named(node)
        return self._base(
            node, "ExpressionStatement", expression=self.convert(inner[0]) if inner else None
        )

    def _return(self, node) -> Node:  # type: ignore[no-untyped-def]
        inner = _named(node)
        return self._base(node, "ReturnStatement", argument=self.convert(inner[0]) if inner else None)

    def _variable_declaration(self, node) -> Node:  # type: ignore[no-untyped-def]
        declarators = [child for child in node.named_children if child.type == "variable_declarator"]
        return self._base(
            node,
            "VariableDeclaration",
            kind=self._text(node.children[0]),
            declarations=self._convert_all(declarators),
        )

    def _variable_declarator(self, node) -> Node:  # type: ignore[no-untyped-def]
        return self._base(
            node,
            "VariableDeclarator",
            id=self.convert(node.child_by_field_name("name")),
            init=self.convert(node.child_by_field_name("value")),
        )

    def _export(self, node) -> Node:  # type: ignore[no-untyped-def]
        declaration = node.child_by_field_name("declaration") or node.child_by_field_name("value")
        if any(child.type == "default" for child in node.children):
            return self._base(node, "ExportDefaultDeclaration", declaration=self.convert(declaration))
        specifiers = [child for child in _named(node) if child != declaration]
        return self._base(
            node,
            "ExportNamedDeclaration",
            declaration=self.convert(declaration),
            specifiers=self._convert_all(specifiers),
        )

    # Functions

    def _function(self, node, node_type: str) -> Node:  # type: ignore[no-untyped-def]
        return self._base(
            node,
            node_type,
            id=self.convert(node.child_by_field_name("name")),
            params=self._params(node),
            body=self.convert(node.child_by_field_name("body")),
        )

    def _arrow_function(self, node) -> Node:  # type: ignore[no-untyped-def]
        body = node.child_by_field_name("body")
        return self._base(
            node,
            "ArrowFunctionExpression",
            params=self._params(node),
            body=self.convert(body),
            expression=body is not None and body.type != "statement_block",
        )

    def _params(self, node) -> List[Node]:  # type: ignore[no-untyped-def]
        single = node.child_by_field_name("parameter")
        if single is not None:
            return self._convert_all([single])
        parameters = node.child_by_field_name("parameters")
        if parameters is None:
            return []
        return self._convert_all(_named(parameters))

    # Expressions

    def _binary(self, node) -> Node:  # type: ignore[no-untyped-def]
        operator = node.child_by_field_name("operator").type
        node_type = "LogicalExpression" if operator in _LOGICAL_OPERATORS else "BinaryExpression"
        return self._base(
            node,
            node_type,
            operator=operator,
            left=self.convert(node.child_by_field_name("left")),
            right=self.convert(node.child_by_field_name("right")),
        )

    def _ternary(self, node) -> Node:  # type: ignore[no-untyped-def]
        return self._base(
            node,
            "ConditionalExpression",
            test=self.convert(node.child_by_field_name("condition")),
            consequent=self.convert(node.child_by_field_name("consequence")),
            alternate=self.convert(node.child_by_field_name("alternative")),
        )

    def _string(self, node) -> Node:  # type: ignore[no-untyped-def]
        return self._base(node, "StringLiteral", value=self._text(node)[1:-1])

    # JSX

    def _jsx_element(self, node) -> Node:  # type: ignore[no-untyped-def]
        opening = node.child_by_field_name("open_tag")
        closing = node.child_by_field_name("close_tag")
        children = self._convert_all(
            child
            for child in _named(node)
            if child.type not in ("jsx_opening_element", "jsx_closing_element")
        )
        if opening.child_by_field_name("name") is None:
            return self._base(
                node,
                "JSXFragment",
                openingFragment=self._base(opening, "JSXOpeningFragment"),
                closingFragment=self._base(closing, "JSXClosingFragment") if closing else None,
                children=children,
            )
        return self._base(
            node,
            "JSXElement",
            openingElement=self._opening_element(opening, self_closing=False),
            closingElement=self._closing_element(closing) if closing else None,
            children=children,
        )

    def _jsx_self_closing_element(self, node) -> Node:  # type: ignore[no-untyped-def]
        return self._base(
            node,
            "JSXElement",
            openingElement=self._opening_element(node, self_closing=True),
            closingElement=None,
            children=[],
        )

    def _opening_element(self, node, *, self_closing: bool) -> Node:  # type: ignore[no-untyped-def]
        attributes: List[Node] = []
        for child in _named(node):
            if child.type == "jsx_attribute":
                attributes.append(self._jsx_attribute(child))
            elif child.type == "jsx_expression":
                attributes.append(self._jsx_spread_attribute(child))
        return self._base(
            node,
            "JSXOpeningElement",
            name=self._jsx_name(node.child_by_field_name("name")),
            attributes=attributes,
            selfClosing=self_closing,
        )

    def _closing_element(self, node) -> Node:  # type: ignore[no-untyped-def]
        return self._base(node, "JSXClosingElement", name=self._jsx_name(node.child_by_field_name("name")))

    def _jsx_name(self, node) -> Optional[Node]:  # type: ignore[no-untyped-def]
        if node is None:
            return None
        if node.type == "jsx_namespace_name":
            return self._base(node, "JSXNamespacedName", text=self._text(node))
        if node.type in ("member_expression", "nested_identifier"):
            return self._base(node, "JSXMemberExpression", text=self._text(node))
        return self._base(node, "JSXIdentifier", name=self._text(node))

    def _jsx_attribute(self, node) -> Node:  # type: ignore[no-untyped-def]
        parts = _named(node)
        value = self.convert(parts[1]) if len(parts) > 1 else None
        return self._base(node, "JSXAttribute", name=self._jsx_name(parts[0]), value=value)

    def _jsx_spread_attribute(self, node) -> Node:  # type: ignore[no-untyped-def]
        inner = _named(node)
        argument = None
        if inner:
            spread = inner[0]
            target = _named(spread)[0] if spread.type == "spread_element" and _named(spread) else spread
            argument = self.convert(target)
        return self._base(node, "JSXSpreadAttribute", argument=argument)

    def _jsx_expression(self, node) -> Node:  # type: ignore[no-untyped-def]
        inner = _named(node)
        if inner:
            expression = self.convert(inner[0])
        else:
            expression = self._base(node, "JSXEmptyExpression")
        return self._base(node, "JSXExpressionContainer", expression=expression)

    def _jsx_text(self, node) -> Node:  # type: ignore[no-untyped-def]
        return self._base(node, "JSXText", value=self._text(node))


def _named(node) -> list:  # type: ignore[no-untyped-def]
    return [child for child in node.named_children if child.type != "comment"]


__all__ = ["SourceParseError", "TREE_SITTER_AVAILABLE", "TsxParser", "get_parser", "parse_source"]
