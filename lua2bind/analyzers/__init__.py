"""Analyzers for lua2bind

Passes that turn Lua source text into a ParseResult.

Modules:
- line_scanner: Comment filtering and table brace depth per line
- annotations: LuaLS directive collection
- declaration_matcher: Function/assignment line shapes
- type_inference: Literal-based ValueType inference
- table_parser: Table literal field extraction
- lua_parser: The parse() entry point
- syntax_checker: Optional luaparser syntax check
"""

from lua2bind.analyzers.line_scanner import LineScanner, ScannedLine, scan_lines
from lua2bind.analyzers.annotations import AnnotationCollector, AnnotationSet
from lua2bind.analyzers.declaration_matcher import (
    FunctionDeclaration, AssignmentDeclaration, match_declaration
)
from lua2bind.analyzers.type_inference import infer_value_type, resolve_value_type
from lua2bind.analyzers.table_parser import parse_table_fields
from lua2bind.analyzers.lua_parser import SchemaExtractor, parse

__all__ = [
    'LineScanner',
    'ScannedLine',
    'scan_lines',
    'AnnotationCollector',
    'AnnotationSet',
    'FunctionDeclaration',
    'AssignmentDeclaration',
    'match_declaration',
    'infer_value_type',
    'resolve_value_type',
    'parse_table_fields',
    'SchemaExtractor',
    'parse',
]
