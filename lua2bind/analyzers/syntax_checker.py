"""Optional Lua syntax check

Runs luaparser over a script so malformed files can be reported. The
schema extraction itself never depends on this; a failed check only adds
a warning.
"""

from typing import Optional

try:
    from luaparser import ast
    from luaparser.ast import SyntaxException
except ImportError:
    raise ImportError("luaparser is required. Install with: pip install luaparser")

from lua2bind.core.diagnostics import Diagnostic, DiagnosticCode, Severity


def check_syntax(source: str, path: str) -> Optional[Diagnostic]:
    """Parse source with luaparser and report a syntax error, if any

    Args:
        source: Lua source text
        path: File path used in the message

    Returns:
        LB008 warning diagnostic, or None when the source parses
    """
    try:
        ast.parse(source)
    except SyntaxException as e:
        return Diagnostic(
            code=DiagnosticCode.SYNTAX_ERROR,
            severity=Severity.WARNING,
            title="Lua syntax error",
            message=f"Invalid Lua syntax in {path}: {e}",
        )
    return None
