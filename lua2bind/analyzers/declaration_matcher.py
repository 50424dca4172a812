"""Declaration matcher

Classifies a trimmed code line as a function declaration, an assignment
declaration, or neither. Checked in that order; the shapes are mutually
exclusive.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union


FUNCTION_PATTERN = re.compile(
    r"^(?P<local>local\s+)?function\s+(?P<name>[a-zA-Z_][a-zA-Z0-9_]*)\s*\((?P<params>[^)]*)\)"
)

ASSIGNMENT_PATTERN = re.compile(
    r"^(?P<local>local\s+)?(?P<name>[a-zA-Z_][a-zA-Z0-9_]*)\s*=(?!=)\s*(?P<value>.+)$"
)

FUNCTION_KEYWORD = "function"


@dataclass(frozen=True)
class FunctionDeclaration:
    """``[local] function name(a, b)``"""
    name: str
    parameter_names: Tuple[str, ...]
    is_local: bool


@dataclass(frozen=True)
class AssignmentDeclaration:
    """``[local] name = value``"""
    name: str
    value: str
    is_local: bool

    @property
    def is_function_literal(self) -> bool:
        return starts_with_keyword(self.value, FUNCTION_KEYWORD)


Declaration = Union[FunctionDeclaration, AssignmentDeclaration]


def starts_with_keyword(text: str, keyword: str) -> bool:
    """Check whether text starts with keyword as a whole word"""
    if not text.startswith(keyword):
        return False
    rest = text[len(keyword):]
    return not rest or not (rest[0].isalnum() or rest[0] == '_')


def split_parameters(params: str) -> List[str]:
    """Split a raw parameter list into trimmed names

    Args:
        params: Text between the parentheses (e.g. " a, b ,c")

    Returns:
        Non-empty parameter names in order
    """
    return [name.strip() for name in params.split(",") if name.strip()]


def match_declaration(line: str) -> Optional[Declaration]:
    """Match a trimmed line against the declaration shapes

    Args:
        line: Trimmed, comment-free code line

    Returns:
        FunctionDeclaration, AssignmentDeclaration, or None for any other statement
    """
    match = FUNCTION_PATTERN.match(line)
    if match:
        return FunctionDeclaration(
            name=match.group("name"),
            parameter_names=tuple(split_parameters(match.group("params"))),
            is_local=match.group("local") is not None,
        )

    match = ASSIGNMENT_PATTERN.match(line)
    if match:
        return AssignmentDeclaration(
            name=match.group("name"),
            value=match.group("value").strip(),
            is_local=match.group("local") is not None,
        )

    return None
