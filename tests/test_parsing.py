"""Tests for the tree-sitter TSX front end."""

from __future__ import annotations

import threading

import pytest

from component_tagger.nodes import walk
from component_tagger.parsing import (
    TREE_SITTER_AVAILABLE,
    SourceParseError,
    get_parser,
    parse_source,
)

pytestmark = pytest.mark.skipif(
    not TREE_SITTER_AVAILABLE, reason="tree-sitter-typescript not installed"
)


def _nodes(tree, node_type):
    return [node for node, _, _ in walk(tree) if node["type"] == node_type]


def test_parse_source_builds_babel_shapes() -> None:
    source = """
export default function Page() {
  return (
    <div className="page">
      <Title />
    </div>
  );
}
"""
    tree = parse_source(source)

    assert tree["type"] == "File"
    declaration = tree["program"]["body"][0]
    assert declaration["type"] == "ExportDefaultDeclaration"
    function = declaration["declaration"]
    assert function["type"] == "FunctionDeclaration"
    assert function["id"]["name"] == "Page"

    statement = function["body"]["body"][0]
    assert statement["type"] == "ReturnStatement"
    returned = statement["argument"]
    assert returned["type"] == "JSXElement"
    opening = returned["openingElement"]
    assert opening["name"]["name"] == "div"
    assert opening["selfClosing"] is False
    assert source[opening["start"] : opening["end"]] == '<div className="page">'
    assert opening["attributes"][0]["value"] == {
        "type": "StringLiteral",
        "start": opening["attributes"][0]["value"]["start"],
        "end": opening["attributes"][0]["value"]["end"],
        "value": "page",
    }

    title = [child for child in returned["children"] if child["type"] == "JSXElement"][0]
    assert title["openingElement"]["selfClosing"] is True
    assert title["closingElement"] is None


def test_parse_source_fragments_and_expressions() -> None:
    source = """
const Toolbar = () => (
  <>
    {ready && enabled && <Save />}
    {mode ? <Edit /> : <View />}
  </>
);
"""
    tree = parse_source(source)

    declarator = _nodes(tree, "VariableDeclarator")[0]
    arrow = declarator["init"]
    assert arrow["type"] == "ArrowFunctionExpression"
    assert arrow["expression"] is True
    assert arrow["body"]["type"] == "JSXFragment"

    containers = _nodes(arrow["body"], "JSXExpressionContainer")
    assert containers[0]["expression"]["type"] == "LogicalExpression"
    assert containers[0]["expression"]["operator"] == "&&"
    assert containers[0]["expression"]["right"]["type"] == "JSXElement"
    assert containers[1]["expression"]["type"] == "ConditionalExpression"


def test_parse_source_offsets_are_character_based() -> None:
    source = 'const Greeting = () => <p title="héllo wörld">Grüße</p>;\n'
    tree = parse_source(source)

    opening = _nodes(tree, "JSXOpeningElement")[0]
    assert source[opening["start"] : opening["end"]] == '<p title="héllo wörld">'


def test_parse_source_spread_attributes() -> None:
    tree = parse_source("const A = (props) => <div {...props} id=\"a\" />;\n")

    attributes = _nodes(tree, "JSXOpeningElement")[0]["attributes"]
    assert [attr["type"] for attr in attributes] == ["JSXSpreadAttribute", "JSXAttribute"]


def test_parse_source_typescript_annotations() -> None:
    source = """
type Props = { title: string };

export const Card: React.FC<Props> = ({ title }: Props) => {
  return <section>{title}</section>;
};
"""
    tree = parse_source(source)

    returns = _nodes(tree, "ReturnStatement")
    assert returns[0]["argument"]["type"] == "JSXElement"


def test_parse_source_raises_on_syntax_error() -> None:
    with pytest.raises(SourceParseError) as excinfo:
        parse_source("function Broken( {\n  return <div>;\n")

    assert excinfo.value.line >= 1


def test_parser_is_reused_within_a_thread() -> None:
    parser = get_parser()

    parse_source("const A = () => <div />;\n")

    assert get_parser() is parser


def test_each_thread_builds_its_own_parser() -> None:
    main_parser = get_parser()
    seen = []
    worker = threading.Thread(target=lambda: seen.append(get_parser()))
    worker.start()
    worker.join()

    assert len(seen) == 1
    assert seen[0] is not main_parser
