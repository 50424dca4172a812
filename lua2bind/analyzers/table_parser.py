"""Table literal schema builder

Extracts the content of a table literal (single or multi-line), splits it
into top-level entries while respecting nested braces, and turns keyed
entries into LuaTableField records, recursing into nested tables.

Positional entries (no ``=``) are not part of the schema and are dropped.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from lua2bind.core.types import LuaTableField, ValueType
from lua2bind.analyzers.line_scanner import mask_strings
from lua2bind.analyzers.type_inference import infer_value_type, resolve_value_type


def _brace_balance(masked: str) -> int:
    return masked.count("{") - masked.count("}")


def trim_outer_braces(table_text: str) -> str:
    """Text between the first ``{`` and the last ``}``

    Args:
        table_text: Table literal, possibly with surrounding text

    Returns:
        Inner content, or the input unchanged when there is no brace pair
    """
    masked = mask_strings(table_text)
    start = masked.find("{")
    end = masked.rfind("}")
    if start < 0 or end <= start:
        return table_text
    return table_text[start + 1:end]


def extract_table_content(value: str, following_lines: Sequence[str] = ()) -> str:
    """Content between a table literal's outer braces

    When the braces balance on ``value`` itself the content is sliced out
    directly. Otherwise characters are collected across the following
    lines while the brace counter is at least 1; nested braces are kept
    verbatim and each line break becomes a single space.

    Args:
        value: Right-hand side text starting at (or before) the opening ``{``
        following_lines: Comment-free code of the lines after ``value``'s line

    Returns:
        Content without the outer braces
    """
    masked_value = mask_strings(value)
    if "{" in masked_value and _brace_balance(masked_value) == 0:
        return trim_outer_braces(value)

    content: List[str] = []
    depth = 0
    started = False

    # Masked as one text so long strings stay open across line breaks
    text = "\n".join([value, *following_lines])
    for ch, mask in zip(text, mask_strings(text)):
        if ch == "\n":
            if started:
                content.append(" ")
            continue
        if mask == "{":
            depth += 1
            if started:
                content.append(ch)
            started = True
            continue
        if mask == "}" and started:
            depth -= 1
            if depth == 0:
                return "".join(content)
            content.append(ch)
            continue
        if started:
            content.append(ch)

    return "".join(content)


def split_top_level_fields(content: str) -> List[str]:
    """Split table content on commas at brace depth 0

    Commas inside nested tables or strings do not split. Empty segments
    (e.g. after a trailing comma) are discarded.

    Args:
        content: Table content without the outer braces

    Returns:
        Trimmed entry texts in source order
    """
    segments: List[str] = []
    masked = mask_strings(content)
    depth = 0
    start = 0

    for i, ch in enumerate(masked):
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth = max(0, depth - 1)
        elif ch == "," and depth == 0:
            segment = content[start:i].strip()
            if segment:
                segments.append(segment)
            start = i + 1

    last = content[start:].strip()
    if last:
        segments.append(last)
    return segments


def split_field(segment: str) -> Optional[Tuple[str, str]]:
    """Split ``name = value`` on its first ``=``

    Args:
        segment: One top-level entry

    Returns:
        (name, value) trimmed, or None for positional entries
    """
    eq_index = mask_strings(segment).find("=")
    if eq_index <= 0:
        return None
    name = segment[:eq_index].strip()
    if not name:
        return None
    return name, segment[eq_index + 1:].strip()


def parse_fields(content: str, field_types: Optional[Dict[str, str]] = None) -> List[LuaTableField]:
    """Build the field list for table content

    Args:
        content: Table content without the outer braces
        field_types: Annotated types by field name (from ---@field), top level only

    Returns:
        LuaTableField per keyed entry, in source order, duplicates kept
    """
    field_types = field_types or {}
    fields: List[LuaTableField] = []

    for segment in split_top_level_fields(content):
        parsed = split_field(segment)
        if parsed is None:
            continue
        name, value = parsed

        explicit_type = field_types.get(name)
        value_type = resolve_value_type(value, explicit_type)

        nested: Tuple[LuaTableField, ...] = ()
        if value_type == ValueType.TABLE and infer_value_type(value) == ValueType.TABLE:
            nested = tuple(parse_fields(trim_outer_braces(value)))

        fields.append(LuaTableField(
            name=name,
            value_type=value_type,
            nested_fields=nested,
            explicit_type=explicit_type,
        ))

    return fields


def parse_table_fields(value: str, following_lines: Sequence[str] = (),
                       field_types: Optional[Dict[str, str]] = None) -> List[LuaTableField]:
    """Fields of the table literal starting at ``value``

    Args:
        value: Right-hand side text starting with ``{``
        following_lines: Comment-free code of the lines after the assignment
        field_types: Annotated types for top-level fields

    Returns:
        Ordered LuaTableField list (empty for ``{}``)
    """
    return parse_fields(extract_table_content(value, following_lines), field_types)
