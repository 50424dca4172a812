"""lua2bind - typed C++ accessors for Lua scripts

Extracts a structural schema (global functions, global variables, table
literals) from Lua source without executing it, then emits sol2-based
C++ wrapper classes for the exposed members.
"""

from lua2bind.core.types import (
    ValueType,
    LuaParameter,
    LuaFunction,
    LuaTableField,
    LuaGlobal,
    ParseResult,
)
from lua2bind.analyzers.lua_parser import parse

__version__ = "0.3.0"

__all__ = [
    "ValueType",
    "LuaParameter",
    "LuaFunction",
    "LuaTableField",
    "LuaGlobal",
    "ParseResult",
    "parse",
]
