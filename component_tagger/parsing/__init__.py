"""Source front end turning TSX text into Babel-shaped trees."""

from .tree_sitter import (
    TREE_SITTER_AVAILABLE,
    SourceParseError,
    TsxParser,
    get_parser,
    parse_source,
)

__all__ = ["SourceParseError", "TREE_SITTER_AVAILABLE", "TsxParser", "get_parser", "parse_source"]
