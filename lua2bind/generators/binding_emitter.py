"""C++ binding emitter for lua2bind

Walks a ParseResult and produces a header with one wrapper class per Lua
file, built on sol2:
- A method per global function; the function handle is looked up on
  first call and cached for the lifetime of the wrapper
- A Name()/SetName() pair per primitive global, reading and writing the
  live Lua state on every call
- A nested wrapper class per table global (recursively for nested
  tables); each wrapper is created on first access and cached
- Members whose C++ names are invalid or already used in their class
  are left out and reported back to the caller
"""

from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple, TypeVar

from lua2bind.core.config import DEFAULT_NAMESPACE
from lua2bind.core.types import LuaFunction, LuaGlobal, LuaTableField, ParseResult, ValueType
from lua2bind.generators.naming import NamingScheme
from lua2bind.generators.type_mapping import (
    DYNAMIC_TYPE,
    TABLE_TYPE,
    VOID_TYPE,
    map_parameter_type,
    map_return_type,
    map_value_type,
)


INDENT = "    "

# Passed by const reference rather than by value
_REFERENCE_TYPES = {"std::string", TABLE_TYPE, DYNAMIC_TYPE}

Member = TypeVar("Member", LuaFunction, LuaGlobal, LuaTableField)


def exposed_members(members: Iterable[Member]) -> List[Member]:
    """Members that can be emitted, later duplicates shadowing earlier ones

    A name keeps the position of its first occurrence and the value of
    its last. Locals and names that are not plain identifiers (e.g.
    ``["key"]`` table keys) are left out.

    Args:
        members: Functions, globals or table fields in source order

    Returns:
        De-duplicated list
    """
    by_name: Dict[str, Member] = {}
    for member in members:
        if getattr(member, "is_local", False):
            continue
        if not NamingScheme.is_valid_identifier(member.name):
            continue
        by_name[member.name] = member
    return list(by_name.values())


def member_names(member: Member) -> Tuple[str, ...]:
    """C++ names a member declares in its enclosing class"""
    name = NamingScheme.to_pascal_case(member.name)
    if isinstance(member, LuaFunction):
        return (name,)
    if member.value_type == ValueType.TABLE:
        return (name, NamingScheme.table_class_name(member.name))
    return (name, NamingScheme.setter_name(member.name))


def claim_member_names(members: Iterable[Member], taken: Set[str],
                       skipped: List[str], scope: str = "") -> List[Member]:
    """Members whose C++ names are valid and still free in their class

    Members are claimed in order. One whose converted name is not a valid
    identifier (``_`` or ``_2d``), or collides with a name already taken,
    is left out and recorded in ``skipped``.

    Args:
        members: Exposed members of one class
        taken: Names already declared in the class; updated in place
        skipped: Receives ``scope + name`` of every member left out
        scope: Prefix for skipped names of table fields (e.g., "player.")

    Returns:
        Members that can be emitted
    """
    claimed: List[Member] = []
    for member in members:
        names = member_names(member)
        if not all(NamingScheme.is_valid_identifier(n) for n in names) or taken.intersection(names):
            skipped.append(f"{scope}{member.name}")
            continue
        taken.update(names)
        claimed.append(member)
    return claimed


def _argument_declaration(cpp_type: str, name: str) -> str:
    if cpp_type in _REFERENCE_TYPES:
        return f"const {cpp_type}& {name}"
    return f"{cpp_type} {name}"


class BindingEmitter:
    """Emits the C++ wrapper header for one ParseResult

    Usage:
        result = parse(source, "game")
        header = BindingEmitter("MyGame").generate_binding_class(result)
    """

    def __init__(self, namespace: str = DEFAULT_NAMESPACE) -> None:
        self.namespace = namespace

    def generate_binding_class(self, parse_result: ParseResult,
                               skipped: Optional[List[str]] = None) -> str:
        """Generate the complete header text

        Functions claim their C++ names before globals; members whose names
        are invalid or already used in their class are not generated.

        Args:
            parse_result: Schema of one Lua file
            skipped: Receives the names of members that were not generated
                (table fields as "table.field")

        Returns:
            C++ header content as string
        """
        if skipped is None:
            skipped = []
        class_name = NamingScheme.script_class_name(parse_result.file_name)
        taken = {class_name}
        functions = claim_member_names(exposed_members(parse_result.functions), taken, skipped)
        globals_ = claim_member_names(exposed_members(parse_result.globals), taken, skipped)
        table_globals = [g for g in globals_ if g.value_type == ValueType.TABLE]

        lines: List[str] = []
        lines.extend(self._generate_file_header(parse_result.file_name))
        lines.append(f"namespace {self.namespace} {{")
        lines.append("")
        lines.append(f"/// Strongly-typed bindings for {parse_result.file_name}.lua")
        lines.append(f"class {class_name} {{")
        lines.append("public:")

        for global_var in table_globals:
            self._generate_table_class(
                lines, global_var.name, global_var.table_fields, INDENT,
                f"Wrapper class for the '{global_var.name}' Lua table", skipped)

        lines.append(f"{INDENT}/// Creates a binding wrapper over a Lua state that has already run {parse_result.file_name}.lua")
        lines.append(f"{INDENT}explicit {class_name}(sol::state_view lua) : lua_(lua) {{}}")
        lines.append("")

        for func in functions:
            self._generate_function_wrapper(lines, func)

        for global_var in globals_:
            if global_var.value_type == ValueType.TABLE:
                self._generate_table_accessor(lines, INDENT, global_var.name, "lua_", "global",
                                              f"Access the '{global_var.name}' table from Lua")
            else:
                self._generate_value_accessor(lines, INDENT, global_var.name, "lua_",
                                              map_value_type(global_var.value_type, global_var.explicit_type),
                                              f"Gets or sets the '{global_var.name}' global from Lua")

        lines.append("private:")
        lines.append(f"{INDENT}sol::state_view lua_;")
        for func in functions:
            lines.append(f"{INDENT}std::optional<sol::protected_function> {NamingScheme.cache_member_name(func.name)};")
        for global_var in table_globals:
            lines.append(f"{INDENT}std::optional<{NamingScheme.table_class_name(global_var.name)}> "
                         f"{NamingScheme.table_cache_member_name(global_var.name)};")
        lines.append("};")
        lines.append("")
        lines.append(f"}}  // namespace {self.namespace}")
        lines.append("")

        return "\n".join(lines)

    def _generate_file_header(self, file_name: str) -> List[str]:
        return [
            "// <auto-generated>",
            f"// This file was generated by lua2bind from {file_name}.lua",
            "// Do not edit this file manually.",
            "// </auto-generated>",
            "",
            "#pragma once",
            "",
            "#include <optional>",
            "#include <stdexcept>",
            "#include <string>",
            "#include <utility>",
            "",
            "#include <sol/sol.hpp>",
            "",
        ]

    def _generate_function_wrapper(self, lines: List[str], func: LuaFunction) -> None:
        """Generate a method that calls a global Lua function

        Args:
            lines: Output lines
            func: Function to wrap
        """
        method_name = NamingScheme.to_pascal_case(func.name)
        cache = NamingScheme.cache_member_name(func.name)
        return_type = map_return_type(func.return_type)

        arg_decls = []
        arg_names = []
        for param in func.parameters:
            param_name = NamingScheme.parameter_name(param.name)
            arg_decls.append(_argument_declaration(map_parameter_type(param.explicit_type), param_name))
            arg_names.append(param_name)

        i1 = INDENT
        i2 = INDENT * 2
        i3 = INDENT * 3
        lines.append(f"{i1}/// Calls the Lua function '{func.name}'")
        lines.append(f"{i1}{return_type} {method_name}({', '.join(arg_decls)}) {{")
        lines.append(f"{i2}if (!{cache}) {{")
        lines.append(f"{i3}sol::object fn = lua_[\"{func.name}\"];")
        lines.append(f"{i3}if (fn.get_type() != sol::type::function) {{")
        lines.append(f"{i3}{INDENT}throw std::runtime_error(\"Lua global '{func.name}' is not a function\");")
        lines.append(f"{i3}}}")
        lines.append(f"{i3}{cache} = fn.as<sol::protected_function>();")
        lines.append(f"{i2}}}")
        lines.append(f"{i2}sol::protected_function_result result = (*{cache})({', '.join(arg_names)});")
        lines.append(f"{i2}if (!result.valid()) {{")
        lines.append(f"{i3}sol::error err = result;")
        lines.append(f"{i3}throw std::runtime_error(err.what());")
        lines.append(f"{i2}}}")
        if return_type != VOID_TYPE:
            lines.append(f"{i2}return result.get<{return_type}>();")
        lines.append(f"{i1}}}")
        lines.append("")

    def _generate_value_accessor(self, lines: List[str], indent: str, lua_name: str,
                                 source: str, cpp_type: str, doc: str) -> None:
        """Generate a Name()/SetName() pair that reads through to Lua

        Args:
            lines: Output lines
            indent: Current indentation
            lua_name: Global or field name in Lua
            source: Member the value lives in ("lua_" or "table_")
            cpp_type: C++ type of the value
            doc: Doc comment text
        """
        getter = NamingScheme.to_pascal_case(lua_name)
        setter = NamingScheme.setter_name(lua_name)
        lines.append(f"{indent}/// {doc}")
        lines.append(f"{indent}{cpp_type} {getter}() {{ return {source}.get<{cpp_type}>(\"{lua_name}\"); }}")
        lines.append(f"{indent}void {setter}({_argument_declaration(cpp_type, 'value')}) "
                     f"{{ {source}.set(\"{lua_name}\", value); }}")
        lines.append("")

    def _generate_table_accessor(self, lines: List[str], indent: str, lua_name: str,
                                 source: str, kind: str, doc: str) -> None:
        """Generate a getter returning a lazily created table wrapper

        Args:
            lines: Output lines
            indent: Current indentation
            lua_name: Global or field name in Lua
            source: Member the table lives in ("lua_" or "table_")
            kind: "global" or "field", used in the error message
            doc: Doc comment text
        """
        class_name = NamingScheme.table_class_name(lua_name)
        cache = NamingScheme.table_cache_member_name(lua_name)
        i2 = indent + INDENT
        i3 = i2 + INDENT

        lines.append(f"{indent}/// {doc}")
        lines.append(f"{indent}{class_name}& {NamingScheme.to_pascal_case(lua_name)}() {{")
        lines.append(f"{i2}if (!{cache}) {{")
        lines.append(f"{i3}sol::object value = {source}[\"{lua_name}\"];")
        lines.append(f"{i3}if (value.get_type() != sol::type::table) {{")
        lines.append(f"{i3}{INDENT}throw std::runtime_error(\"Lua {kind} '{lua_name}' is not a table\");")
        lines.append(f"{i3}}}")
        lines.append(f"{i3}{cache}.emplace(value.as<sol::table>());")
        lines.append(f"{i2}}}")
        lines.append(f"{i2}return *{cache};")
        lines.append(f"{indent}}}")
        lines.append("")

    def _generate_table_class(self, lines: List[str], lua_name: str,
                              fields: Sequence[LuaTableField], indent: str, doc: str,
                              skipped: List[str], scope: str = "") -> None:
        """Generate a wrapper class for a table, recursing into nested tables

        Args:
            lines: Output lines
            lua_name: Name of the table global or field
            fields: Fields of the table
            indent: Indentation of the class declaration
            doc: Doc comment text
            skipped: Receives the dotted names of fields that were not generated
            scope: Dotted path of the enclosing tables
        """
        class_name = NamingScheme.table_class_name(lua_name)
        scope = f"{scope}{lua_name}."
        members = claim_member_names(exposed_members(fields), {class_name, "RawTable"}, skipped, scope)
        nested_tables = [f for f in members if f.value_type == ValueType.TABLE]
        inner = indent + INDENT

        lines.append(f"{indent}/// {doc}")
        lines.append(f"{indent}class {class_name} {{")
        lines.append(f"{indent}public:")

        for nested in nested_tables:
            self._generate_table_class(lines, nested.name, nested.nested_fields, inner,
                                       f"Wrapper for nested table '{nested.name}'", skipped, scope)

        lines.append(f"{inner}explicit {class_name}(sol::table table) : table_(std::move(table)) {{}}")
        lines.append("")

        for member in members:
            if member.value_type == ValueType.TABLE:
                self._generate_table_accessor(lines, inner, member.name, "table_", "field",
                                              f"Access the nested table '{member.name}'")
            else:
                self._generate_value_accessor(lines, inner, member.name, "table_",
                                              map_value_type(member.value_type, member.explicit_type),
                                              f"Gets or sets the '{member.name}' field")

        lines.append(f"{inner}/// Gets the underlying sol::table for advanced access")
        lines.append(f"{inner}sol::table& RawTable() {{ return table_; }}")
        lines.append("")
        lines.append(f"{indent}private:")
        lines.append(f"{inner}sol::table table_;")
        for nested in nested_tables:
            lines.append(f"{inner}std::optional<{NamingScheme.table_class_name(nested.name)}> "
                         f"{NamingScheme.table_cache_member_name(nested.name)};")
        lines.append(f"{indent}}};")
        lines.append("")
