"""Script discovery for lua2bind"""

from lua2bind.module_system.script_collector import (
    LuaScript, collect_scripts, find_lua_files, is_in_lua_directory
)

__all__ = ['LuaScript', 'collect_scripts', 'find_lua_files', 'is_in_lua_directory']
