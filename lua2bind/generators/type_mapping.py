"""Lua -> C++ (sol2) type mapping

An explicit annotation takes precedence over the inferred ValueType.
Anything that cannot be typed statically maps to ``sol::object``.
"""

from typing import Dict, Optional

from lua2bind.core.types import ValueType


DYNAMIC_TYPE = "sol::object"
TABLE_TYPE = "sol::table"
VOID_TYPE = "void"

VALUE_TYPES: Dict[ValueType, str] = {
    ValueType.NUMBER: "double",
    ValueType.STRING: "std::string",
    ValueType.BOOLEAN: "bool",
    ValueType.TABLE: TABLE_TYPE,
    ValueType.FUNCTION: DYNAMIC_TYPE,
    ValueType.NIL: DYNAMIC_TYPE,
    ValueType.UNKNOWN: DYNAMIC_TYPE,
}

ANNOTATED_TYPES: Dict[str, str] = {
    "number": "double",
    "integer": "int",
    "int": "int",
    "string": "std::string",
    "boolean": "bool",
    "bool": "bool",
    "table": TABLE_TYPE,
    "function": DYNAMIC_TYPE,
}


def map_value_type(value_type: ValueType, explicit_type: Optional[str] = None) -> str:
    """C++ type for a global or table field

    Args:
        value_type: Inferred (or annotated) ValueType
        explicit_type: Annotation text, if any

    Returns:
        C++ type name
    """
    if explicit_type:
        return ANNOTATED_TYPES.get(explicit_type, DYNAMIC_TYPE)
    return VALUE_TYPES.get(value_type, DYNAMIC_TYPE)


def map_parameter_type(explicit_type: Optional[str]) -> str:
    """C++ type for a function parameter (untyped parameters are sol::object)"""
    if not explicit_type:
        return DYNAMIC_TYPE
    return ANNOTATED_TYPES.get(explicit_type, DYNAMIC_TYPE)


def map_return_type(explicit_type: Optional[str]) -> str:
    """C++ return type for a function

    Args:
        explicit_type: Text of the ---@return directive, if any

    Returns:
        "void" when there is no annotation or it says nil/void, else the mapped type
    """
    if not explicit_type or explicit_type in ("nil", "void"):
        return VOID_TYPE
    return ANNOTATED_TYPES.get(explicit_type, DYNAMIC_TYPE)
