"""Naming scheme for lua2bind

Implements the naming convention for generated C++:
- Members: snake_case Lua names -> PascalCase (player_health -> PlayerHealth)
- Script classes: <PascalStem>Script, written to <PascalStem>Script.g.hpp
- Table wrappers: <PascalField>Table
- Cache members: cached_fn_<lua_name>_ for functions, cached_tbl_<lua_name>_ for tables
- C++ Keywords: parameter names mangled by appending _lua suffix
"""

import re


class NamingScheme:
    """Handles C++ identifier generation for Lua constructs"""

    SEPARATOR = "_"
    SCRIPT_CLASS_SUFFIX = "Script"
    TABLE_CLASS_SUFFIX = "Table"
    OUTPUT_FILE_SUFFIX = ".g.hpp"
    KEYWORD_SUFFIX = "_lua"

    # C++ reserved keywords that need mangling
    CPP_KEYWORDS = {
        'alignas', 'alignof', 'and', 'and_eq', 'asm', 'auto', 'bitand', 'bitor',
        'bool', 'case', 'catch', 'char', 'char8_t', 'char16_t', 'char32_t',
        'class', 'compl', 'const', 'const_cast', 'consteval', 'constexpr',
        'continue', 'decltype', 'default', 'delete', 'double', 'dynamic_cast',
        'enum', 'explicit', 'export', 'extern', 'float', 'friend', 'inline',
        'int', 'long', 'mutable', 'namespace', 'new', 'noexcept', 'nullptr',
        'operator', 'or_eq', 'private', 'protected', 'public', 'register',
        'reinterpret_cast', 'short', 'signed', 'sizeof', 'static',
        'static_assert', 'struct', 'switch', 'template', 'this', 'thread_local',
        'throw', 'try', 'typedef', 'typeid', 'typename', 'union', 'unsigned',
        'using', 'virtual', 'void', 'volatile', 'wchar_t', 'xor', 'xor_eq',
        # Names the generated code itself uses
        'err', 'fn', 'lua', 'result', 'value',
    }

    @staticmethod
    def to_pascal_case(name: str) -> str:
        """Convert a separator-delimited identifier to PascalCase

        Each segment gets an upper-case first letter and a lower-case
        remainder; empty segments are dropped.

        Args:
            name: Lua identifier (e.g., "player_health")

        Returns:
            PascalCase name (e.g., "PlayerHealth"), "" for ""
        """
        if not name:
            return ""
        parts = [part for part in name.split(NamingScheme.SEPARATOR) if part]
        return "".join(part[0].upper() + part[1:].lower() for part in parts)

    @staticmethod
    def script_class_name(file_stem: str) -> str:
        """Generate wrapper class name for a Lua file

        Args:
            file_stem: File name without extension (e.g., "sprite")

        Returns:
            C++ class name (e.g., "SpriteScript")
        """
        return f"{NamingScheme.to_pascal_case(file_stem)}{NamingScheme.SCRIPT_CLASS_SUFFIX}"

    @staticmethod
    def output_file_name(file_stem: str) -> str:
        """Generated header name for a Lua file (e.g., "SpriteScript.g.hpp")"""
        return f"{NamingScheme.script_class_name(file_stem)}{NamingScheme.OUTPUT_FILE_SUFFIX}"

    @staticmethod
    def table_class_name(field_name: str) -> str:
        """Generate wrapper class name for a table global or field

        Args:
            field_name: Lua name of the table (e.g., "player_stats")

        Returns:
            C++ class name (e.g., "PlayerStatsTable")
        """
        return f"{NamingScheme.to_pascal_case(field_name)}{NamingScheme.TABLE_CLASS_SUFFIX}"

    @staticmethod
    def setter_name(name: str) -> str:
        return f"Set{NamingScheme.to_pascal_case(name)}"

    @staticmethod
    def cache_member_name(name: str) -> str:
        """Member holding a cached function handle (e.g., "cached_fn_update_")"""
        return f"cached_fn_{NamingScheme.sanitize(name)}_"

    @staticmethod
    def table_cache_member_name(name: str) -> str:
        """Member holding a cached table wrapper (e.g., "cached_tbl_player_")"""
        return f"cached_tbl_{NamingScheme.sanitize(name)}_"

    @staticmethod
    def parameter_name(name: str) -> str:
        """Mangle a parameter name if it conflicts with C++ keywords

        Args:
            name: Lua parameter name

        Returns:
            Name with _lua suffix if needed
        """
        if name.lower() in NamingScheme.CPP_KEYWORDS:
            return f"{name}{NamingScheme.KEYWORD_SUFFIX}"
        return name

    @staticmethod
    def sanitize(name: str) -> str:
        """Replace characters that are not valid in C++ identifiers

        Args:
            name: Raw name (table keys may contain brackets or quotes)

        Returns:
            Identifier-safe string
        """
        sanitized = re.sub(r"[^A-Za-z0-9_]", "_", name)
        sanitized = re.sub(r"_{2,}", "_", sanitized).strip("_")
        if sanitized and sanitized[0].isdigit():
            sanitized = f"_{sanitized}"
        return sanitized

    @staticmethod
    def is_valid_identifier(name: str) -> bool:
        """Check if a string is a valid C++ identifier

        Args:
            name: String to check

        Returns:
            True if valid identifier
        """
        if not name or name[0].isdigit():
            return False
        return all(c.isalnum() or c == "_" for c in name)
