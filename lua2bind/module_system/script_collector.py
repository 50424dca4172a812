"""Lua script discovery for lua2bind

Finds .lua files on disk and decides which of them belong to the
configured script directory.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional


LUA_SUFFIX = ".lua"
SKIP_DIRS = {'.git', 'node_modules', '__pycache__', 'venv', '.venv', 'build', 'dist'}


@dataclass(frozen=True)
class LuaScript:
    """A script handed to the generator

    Attributes:
        path: Path as given by the caller (used for filtering and messages)
        text: Source text, None if it could not be obtained
        read_error: Why the text could not be read, if it could not
    """
    path: str
    text: Optional[str]
    read_error: Optional[str] = None

    @property
    def stem(self) -> str:
        return Path(self.path.replace("\\", "/")).stem

    @property
    def is_lua(self) -> bool:
        return self.path.lower().endswith(LUA_SUFFIX)


def normalize_path(path: str) -> str:
    return path.replace("\\", "/")


def is_in_lua_directory(path: str, lua_directory: str) -> bool:
    """Check whether a script lies under the configured directory

    Separators are normalized and the comparison is case-insensitive.
    An empty directory accepts every path.

    Args:
        path: Script path
        lua_directory: Configured directory (e.g., "Content/scripts")

    Returns:
        True if the path contains the directory
    """
    directory = normalize_path(lua_directory).strip("/")
    if not directory:
        return True
    return directory.lower() in normalize_path(path).lower()


def find_lua_files(root: Path) -> List[Path]:
    """Find all .lua files under root (recursive)

    Args:
        root: Directory to search

    Returns:
        Sorted list of .lua file paths
    """
    lua_files = []
    for lua_file in root.rglob(f"*{LUA_SUFFIX}"):
        rel_parts = lua_file.relative_to(root).parts
        if any(skip in rel_parts for skip in SKIP_DIRS):
            continue
        if lua_file.is_file():
            lua_files.append(lua_file)
    return sorted(lua_files)


def read_script(path: Path) -> LuaScript:
    """Read a script as UTF-8

    Args:
        path: File to read

    Returns:
        LuaScript with the file text, or with read_error set when the
        file cannot be read or decoded

    Raises:
        FileNotFoundError: If path doesn't exist
    """
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return LuaScript(path=str(path), text=f.read())
    except (OSError, UnicodeDecodeError) as e:
        return LuaScript(path=str(path), text=None, read_error=str(e))


def collect_scripts(inputs: Iterable[Path]) -> List[LuaScript]:
    """Collect scripts from files and directories

    Directories are searched recursively for .lua files; files are taken
    as given, whatever their extension, so the generator can report
    inputs that are not Lua scripts.

    Args:
        inputs: Files and/or directories

    Returns:
        LuaScripts in input order (directory contents sorted)

    Raises:
        FileNotFoundError: If an input doesn't exist
    """
    scripts: List[LuaScript] = []
    for input_path in inputs:
        if input_path.is_dir():
            scripts.extend(read_script(path) for path in find_lua_files(input_path))
        else:
            scripts.append(read_script(input_path))
    return scripts
