"""Syntax tree nodes and predicates over them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional


class NodeType(Enum):
    """Kind of a token or tree node."""

    WORD = auto()
    PIPE = auto()
    AND = auto()
    OR = auto()
    RED_INP = auto()
    RED_OUT = auto()
    APPEND = auto()
    DELIM = auto()
    THREE_IN = auto()
    NEWLINE = auto()
    SPACE = auto()


@dataclass
class TreeNode:
    """A node of the command tree.

    For a word node, ``args`` holds the command and its arguments, ``left``
    starts the chain of input redirections and ``right`` the chain of output
    redirections; each redirection node keeps its file name in ``value``.
    """

    type: NodeType
    value: Optional[str] = None
    args: list[str] = field(default_factory=list)
    left: Optional["TreeNode"] = None
    right: Optional["TreeNode"] = None


def is_logic_root(node: TreeNode) -> bool:
    """True for ``&&`` and ``||`` nodes."""
    return node.type in (NodeType.AND, NodeType.OR)


def is_word_root(node: TreeNode) -> bool:
    """True for a command node."""
    return node.type is NodeType.WORD


def is_special_root(node: TreeNode) -> bool:
    """True for redirection and here-document nodes."""
    return node.type in (
        NodeType.RED_INP,
        NodeType.RED_OUT,
        NodeType.APPEND,
        NodeType.DELIM,
        NodeType.THREE_IN,
    )


def is_only_asterisks(text: str) -> bool:
    """True when every character is ``*`` (and for the empty string)."""
    return all(char == "*" for char in text)