"""Schema model for lua2bind

Defines the ValueType enum and the immutable tree produced by one parse
call: ParseResult owns Functions, Globals and Errors; table-valued
globals own a recursive list of LuaTableField entries.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from lua2bind.core.diagnostics import Diagnostic


class ValueType(Enum):
    """Kinds of Lua values recognized by the extractor"""

    UNKNOWN = 0
    NUMBER = 1
    STRING = 2
    BOOLEAN = 3
    TABLE = 4
    FUNCTION = 5
    NIL = 6


# LuaLS annotation text -> ValueType. Anything not listed is UNKNOWN.
ANNOTATION_TYPES: Dict[str, ValueType] = {
    "number": ValueType.NUMBER,
    "integer": ValueType.NUMBER,
    "int": ValueType.NUMBER,
    "string": ValueType.STRING,
    "boolean": ValueType.BOOLEAN,
    "bool": ValueType.BOOLEAN,
    "table": ValueType.TABLE,
    "function": ValueType.FUNCTION,
}


def annotation_value_type(explicit_type: Optional[str]) -> ValueType:
    """Map annotation text to a ValueType

    Args:
        explicit_type: Type name from a ---@type/---@param/---@field directive

    Returns:
        Matching ValueType, UNKNOWN for missing or unrecognized names
    """
    if not explicit_type:
        return ValueType.UNKNOWN
    return ANNOTATION_TYPES.get(explicit_type, ValueType.UNKNOWN)


@dataclass(frozen=True)
class LuaParameter:
    """A parameter of a global Lua function

    Attributes:
        name: Parameter name as written in the signature
        explicit_type: Type from a ---@param directive, if any
    """
    name: str
    explicit_type: Optional[str] = None

    @property
    def inferred_type(self) -> ValueType:
        return annotation_value_type(self.explicit_type)


@dataclass(frozen=True)
class LuaFunction:
    """A function declaration (``function name(a, b)``)

    Attributes:
        name: Function identifier
        parameters: Parameters in declaration order
        return_type: Type from a ---@return directive, if any
        is_local: True when declared with ``local``; such functions are not exposed
    """
    name: str
    parameters: Tuple[LuaParameter, ...] = ()
    return_type: Optional[str] = None
    is_local: bool = False


@dataclass(frozen=True)
class LuaTableField:
    """A keyed entry of a table literal

    Attributes:
        name: Key text left of the first ``=``
        value_type: Inferred (or annotated) kind of the value
        nested_fields: Entries of the nested table, populated iff value_type is TABLE
        explicit_type: Type from a ---@field directive, if any
    """
    name: str
    value_type: ValueType = ValueType.UNKNOWN
    nested_fields: Tuple['LuaTableField', ...] = ()
    explicit_type: Optional[str] = None


@dataclass(frozen=True)
class LuaGlobal:
    """A variable assignment (``name = value``)

    Attributes:
        name: Variable identifier
        value_type: Inferred kind, overridden by explicit_type when present
        table_fields: Fields of the table literal, populated iff value_type is TABLE
        explicit_type: Type from a ---@type directive, if any
        is_local: True when declared with ``local``; such variables are not exposed
    """
    name: str
    value_type: ValueType = ValueType.UNKNOWN
    table_fields: Tuple[LuaTableField, ...] = ()
    explicit_type: Optional[str] = None
    is_local: bool = False


@dataclass(frozen=True)
class ParseResult:
    """Everything extracted from one Lua source file

    Only non-local functions and globals are present. ``errors`` holds at
    most one diagnostic describing an internal failure; whatever was
    extracted before the failure is kept.
    """
    file_name: str
    functions: Tuple[LuaFunction, ...] = ()
    globals: Tuple[LuaGlobal, ...] = ()
    errors: Tuple['Diagnostic', ...] = ()

    @property
    def has_exposed_members(self) -> bool:
        return bool(self.functions or self.globals)
