"""Literal-based type inference

Infers a ValueType from the text of a right-hand side. Only literal
syntax is recognized; references, calls and arithmetic are UNKNOWN.
"""

import re
from typing import Optional

from lua2bind.core.types import ValueType, annotation_value_type
from lua2bind.analyzers.line_scanner import long_bracket_level
from lua2bind.analyzers.declaration_matcher import FUNCTION_KEYWORD, starts_with_keyword


NUMBER_LITERAL = re.compile(r"^-?\d+\.?\d*$")


def infer_value_type(value: str) -> ValueType:
    """Infer the kind of a literal value, first match wins

    Args:
        value: Right-hand side text

    Returns:
        TABLE, STRING, BOOLEAN, NIL, NUMBER, FUNCTION or UNKNOWN
    """
    value = value.strip()

    if value.startswith("{"):
        return ValueType.TABLE

    if value.startswith(("\"", "'")) or long_bracket_level(value, 0) is not None:
        return ValueType.STRING

    if value in ("true", "false"):
        return ValueType.BOOLEAN

    if value == "nil":
        return ValueType.NIL

    if NUMBER_LITERAL.match(value):
        return ValueType.NUMBER

    if starts_with_keyword(value, FUNCTION_KEYWORD):
        return ValueType.FUNCTION

    return ValueType.UNKNOWN


def resolve_value_type(value: str, explicit_type: Optional[str]) -> ValueType:
    """Inferred type, unless an annotation says otherwise

    Args:
        value: Right-hand side text
        explicit_type: Annotated type name, if any

    Returns:
        The annotation's ValueType when present, else the inferred one
    """
    if explicit_type:
        return annotation_value_type(explicit_type)
    return infer_value_type(value)
