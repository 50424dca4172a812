"""Line scanner for Lua source

Splits source into logical lines with comments removed, flags LuaLS
directive lines (``---@...``) and tracks table-literal brace depth.
String handling is an approximation: quoted strings with backslash
escapes and long brackets (``[[ ]]``, ``[==[ ]==]``) are recognized, which
is enough to keep comment markers and braces inside literals from being
counted.
"""

import re
from dataclasses import dataclass
from typing import List, Optional


DIRECTIVE_PREFIX = "---@"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class ScannedLine:
    """A source line after comment filtering

    Attributes:
        number: 1-based line number in the source
        text: Trimmed code with comments removed (the directive itself for directive lines)
        depth_before: Table brace depth at the start of the line
        depth_after: Table brace depth at the end of the line
        is_directive: Line is a ``---@`` annotation
        is_continuation: Line starts inside a long string or block comment
    """
    number: int
    text: str
    depth_before: int
    depth_after: int
    is_directive: bool = False
    is_continuation: bool = False

    @property
    def is_blank(self) -> bool:
        return not self.text

    @property
    def opens_table(self) -> bool:
        return self.depth_after > self.depth_before

    @property
    def closes_table(self) -> bool:
        return self.depth_after < self.depth_before

    @property
    def inside_table(self) -> bool:
        return self.depth_before > 0


def split_lines(source: str) -> List[str]:
    """Split source on \\r\\n, \\r or \\n"""
    return _LINE_BREAK.split(source)


def long_bracket_level(text: str, pos: int) -> Optional[int]:
    """Level of a long bracket opener at ``pos``

    Args:
        text: Text to inspect
        pos: Index expected to hold ``[``

    Returns:
        Number of ``=`` signs for ``[[``/``[=[``/..., None if there is no opener
    """
    if pos >= len(text) or text[pos] != '[':
        return None
    i = pos + 1
    while i < len(text) and text[i] == '=':
        i += 1
    if i < len(text) and text[i] == '[':
        return i - pos - 1
    return None


def long_bracket_close(level: int) -> str:
    return "]" + "=" * level + "]"


def quoted_string_end(text: str, start: int) -> int:
    """Index just past the quoted string starting at ``start``

    Unterminated strings end at the line break or the end of the text.
    """
    quote = text[start]
    i = start + 1
    while i < len(text):
        ch = text[i]
        if ch == "\n":
            return i
        if ch == '\\':
            i += 2
            continue
        if ch == quote:
            return i + 1
        i += 1
    return len(text)


def mask_strings(text: str) -> str:
    """Blank out string literal contents, keeping positions

    Delimiters (``{``, ``}``, ``,``, ``=``) inside strings become spaces so
    callers can search the masked text and slice the original.

    Args:
        text: Code with comments already removed; long strings may span lines

    Returns:
        Text of the same length with string contents replaced by spaces
    """
    chars = list(text)
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in ('"', "'"):
            end = quoted_string_end(text, i)
            inner_end = end - 1 if end - 1 > i and text[end - 1] == ch else end
            for j in range(i + 1, inner_end):
                chars[j] = ' '
            i = end
            continue
        if ch == '[':
            level = long_bracket_level(text, i)
            if level is not None:
                opener = level + 2
                close = text.find(long_bracket_close(level), i + opener)
                end = n if close < 0 else close
                for j in range(i + opener, end):
                    chars[j] = ' '
                i = n if close < 0 else close + opener
                continue
        i += 1
    return "".join(chars)


class LineScanner:
    """Single-use scanner over one source text

    The brace depth and the open comment/string state are carried from
    line to line; nothing is shared between scanner instances.
    """

    def __init__(self, source: str) -> None:
        self._raw_lines = split_lines(source)
        self._depth = 0
        self._block_comment_level: Optional[int] = None
        self._long_string_level: Optional[int] = None
        self.line_number = 0

    def scan(self) -> List[ScannedLine]:
        """Scan every line of the source

        Returns:
            ScannedLine per physical line, in order
        """
        return [self._scan_line(raw) for raw in self._raw_lines]

    def _scan_line(self, raw: str) -> ScannedLine:
        self.line_number += 1
        depth_before = self._depth
        continuation = self._block_comment_level is not None or self._long_string_level is not None

        stripped = raw.strip()
        if not continuation and stripped.startswith(DIRECTIVE_PREFIX):
            return ScannedLine(self.line_number, stripped, depth_before, depth_before,
                               is_directive=True)

        code = self._strip_comments(raw)
        return ScannedLine(self.line_number, code.strip(), depth_before, self._depth,
                           is_continuation=continuation)

    def _strip_comments(self, raw: str) -> str:
        """Remove comments from one line, updating depth and open-block state"""
        code: List[str] = []
        i = 0
        n = len(raw)
        while i < n:
            if self._block_comment_level is not None:
                close = long_bracket_close(self._block_comment_level)
                end = raw.find(close, i)
                if end < 0:
                    break
                i = end + len(close)
                self._block_comment_level = None
                continue

            if self._long_string_level is not None:
                close = long_bracket_close(self._long_string_level)
                end = raw.find(close, i)
                if end < 0:
                    code.append(raw[i:])
                    break
                code.append(raw[i:end + len(close)])
                i = end + len(close)
                self._long_string_level = None
                continue

            ch = raw[i]
            if ch == '-' and raw.startswith('--', i):
                level = long_bracket_level(raw, i + 2)
                if level is None:
                    break
                self._block_comment_level = level
                i += 2 + level + 2
                continue

            if ch in ('"', "'"):
                end = quoted_string_end(raw, i)
                code.append(raw[i:end])
                i = end
                continue

            if ch == '[':
                level = long_bracket_level(raw, i)
                if level is not None:
                    self._long_string_level = level
                    code.append(raw[i:i + level + 2])
                    i += level + 2
                    continue

            if ch == '{':
                self._depth += 1
            elif ch == '}':
                self._depth = max(0, self._depth - 1)
            code.append(ch)
            i += 1

        return "".join(code)


def scan_lines(source: str) -> List[ScannedLine]:
    """Scan source text into filtered lines"""
    return LineScanner(source).scan()
