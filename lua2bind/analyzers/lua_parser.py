"""Schema extraction for Lua source

Entry point of the extractor. Scans the source line by line, associates
LuaLS directives with the declaration that follows them, and builds the
ParseResult tree. This is a shallow structural scan, not a Lua parser:
only ``function name(...)`` and ``name = value`` lines outside table
literals are recognized.

Example:
    >>> result = parse("score = 0\\nfunction reset() end", "game")
    >>> [g.name for g in result.globals], [f.name for f in result.functions]
    (['score'], ['reset'])
"""

from typing import List, Optional, Sequence

from lua2bind.core.diagnostics import Diagnostic, DiagnosticCode, Severity
from lua2bind.core.types import (
    LuaFunction,
    LuaGlobal,
    LuaParameter,
    ParseResult,
    ValueType,
)
from lua2bind.analyzers.annotations import AnnotationCollector, AnnotationSet
from lua2bind.analyzers.declaration_matcher import (
    AssignmentDeclaration,
    FunctionDeclaration,
    match_declaration,
)
from lua2bind.analyzers.line_scanner import ScannedLine, LineScanner
from lua2bind.analyzers.table_parser import parse_table_fields
from lua2bind.analyzers.type_inference import infer_value_type, resolve_value_type


def build_function(declaration: FunctionDeclaration, annotations: AnnotationSet) -> LuaFunction:
    """Create a LuaFunction, applying ---@param and ---@return types

    Args:
        declaration: Matched function declaration
        annotations: Directives that preceded it

    Returns:
        LuaFunction; param annotations for unknown names are ignored
    """
    parameters = tuple(
        LuaParameter(name=name, explicit_type=annotations.param_types.get(name))
        for name in declaration.parameter_names
    )
    return LuaFunction(
        name=declaration.name,
        parameters=parameters,
        return_type=annotations.return_type,
        is_local=declaration.is_local,
    )


def build_global(declaration: AssignmentDeclaration, annotations: AnnotationSet,
                 following_lines: Sequence[str]) -> Optional[LuaGlobal]:
    """Create a LuaGlobal, applying ---@type and ---@field types

    Args:
        declaration: Matched assignment
        annotations: Directives that preceded it
        following_lines: Code of the lines after the assignment (for multi-line tables)

    Returns:
        LuaGlobal, or None for ``name = function(...)`` assignments
    """
    if declaration.is_function_literal:
        return None

    explicit_type = annotations.declared_type
    value_type = resolve_value_type(declaration.value, explicit_type)

    table_fields = ()
    if value_type == ValueType.TABLE and infer_value_type(declaration.value) == ValueType.TABLE:
        table_fields = tuple(parse_table_fields(
            declaration.value, following_lines, annotations.field_types))

    return LuaGlobal(
        name=declaration.name,
        value_type=value_type,
        table_fields=table_fields,
        explicit_type=explicit_type,
        is_local=declaration.is_local,
    )


class SchemaExtractor:
    """Single-use extractor for one source text

    Pending annotations and the scan position live on the instance, so
    independent extractions never share state.
    """

    def __init__(self, source: str, file_name: str) -> None:
        self._source = source
        self._file_name = file_name
        self._annotations = AnnotationCollector()
        self._functions: List[LuaFunction] = []
        self._globals: List[LuaGlobal] = []
        self._errors: List[Diagnostic] = []
        self._current_line = 0

    def extract(self) -> ParseResult:
        """Run the scan and build the result

        Returns:
            ParseResult; on an internal failure it carries one diagnostic
            and whatever was extracted before the failure
        """
        try:
            self._scan()
        except Exception as e:
            self._errors.append(Diagnostic(
                code=DiagnosticCode.PARSE_ERROR,
                severity=Severity.WARNING,
                title="Lua parse warning",
                message=f"Parse error at line {self._current_line}: {e}",
            ))

        return ParseResult(
            file_name=self._file_name,
            functions=tuple(self._functions),
            globals=tuple(self._globals),
            errors=tuple(self._errors),
        )

    def _scan(self) -> None:
        lines = LineScanner(self._source).scan()
        code_lines = ["" if line.is_directive else line.text for line in lines]

        for index, line in enumerate(lines):
            self._current_line = line.number
            self._process_line(line, code_lines[index + 1:])

    def _process_line(self, line: ScannedLine, following_lines: Sequence[str]) -> None:
        # Table contents and the inside of long strings/comments are not statements
        if line.inside_table or line.is_continuation:
            return

        if line.is_directive:
            self._annotations.push(line.text)
            return

        if line.is_blank:
            return

        annotations = self._annotations.take()
        declaration = match_declaration(line.text)

        if isinstance(declaration, FunctionDeclaration):
            func = build_function(declaration, annotations)
            if not func.is_local:
                self._functions.append(func)
        elif isinstance(declaration, AssignmentDeclaration):
            global_var = build_global(declaration, annotations, following_lines)
            if global_var is not None and not global_var.is_local:
                self._globals.append(global_var)


def parse(source: str, file_name: str) -> ParseResult:
    """Extract functions and globals from Lua source

    Never raises for malformed input: failures are reported in
    ``ParseResult.errors`` alongside any partial results.

    Args:
        source: Complete Lua source text
        file_name: File name without extension

    Returns:
        ParseResult with non-local functions and globals in source order
    """
    return SchemaExtractor(source, file_name).extract()
