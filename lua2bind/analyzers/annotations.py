"""LuaLS annotation handling

Directive comments (``---@type``, ``---@param``, ``---@return``,
``---@field``) are collected until the next code line and then applied to
the declaration on that line, if it is one.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional


TYPE_ANNOTATION = re.compile(r"---@type\s+(?P<type>\S+)")
PARAM_ANNOTATION = re.compile(r"---@param\s+(?P<name>\S+)\s+(?P<type>\S+)")
RETURN_ANNOTATION = re.compile(r"---@return\s+(?P<type>\S+)")
FIELD_ANNOTATION = re.compile(r"---@field\s+(?P<name>\S+)\s+(?P<type>\S+)")


@dataclass
class AnnotationSet:
    """Types declared by one block of directives

    Later directives of the same kind replace earlier ones.
    """
    declared_type: Optional[str] = None
    return_type: Optional[str] = None
    param_types: Dict[str, str] = field(default_factory=dict)
    field_types: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_directives(cls, directives: List[str]) -> 'AnnotationSet':
        """Parse a list of directive lines

        Args:
            directives: Raw ``---@`` lines in source order

        Returns:
            AnnotationSet with every recognized directive applied
        """
        annotations = cls()
        for directive in directives:
            match = PARAM_ANNOTATION.match(directive)
            if match:
                # ---@param name? type marks an optional parameter
                annotations.param_types[match.group("name").rstrip("?")] = match.group("type")
                continue

            match = RETURN_ANNOTATION.match(directive)
            if match:
                annotations.return_type = match.group("type")
                continue

            match = TYPE_ANNOTATION.match(directive)
            if match:
                annotations.declared_type = match.group("type")
                continue

            match = FIELD_ANNOTATION.match(directive)
            if match:
                annotations.field_types[match.group("name").rstrip("?")] = match.group("type")
        return annotations


class AnnotationCollector:
    """Pending-directive state machine

    Idle until a directive arrives, then Collecting until the next
    non-blank code line takes the pending list. Blank lines leave the
    pending list alone.
    """

    def __init__(self) -> None:
        self._pending: List[str] = []

    @property
    def is_collecting(self) -> bool:
        return bool(self._pending)

    def push(self, directive: str) -> None:
        self._pending.append(directive)

    def take(self) -> AnnotationSet:
        """Hand over the pending directives and return to Idle

        Returns:
            Parsed annotations (empty when nothing was pending)
        """
        annotations = AnnotationSet.from_directives(self._pending)
        self._pending = []
        return annotations

    def clear(self) -> None:
        self._pending = []
