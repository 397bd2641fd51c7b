"""Removal of line (``//``) and block (``/* ... */``) comments from text.

The filter is a finite state machine, so it runs in linear time and keeps
no more state than the current character.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator


class CommentError(ValueError):
    """Malformed comment in the input text."""


class _State(enum.Enum):
    NORMAL = enum.auto()
    POTENTIAL_COMMENT = enum.auto()
    LINE_COMMENT = enum.auto()
    BLOCK_COMMENT = enum.auto()
    POTENTIAL_BLOCK_COMMENT_END = enum.auto()


_ISOLATED_SLASH = "encountered isolated `/`"
_UNTERMINATED_BLOCK = "block comment not terminated with */"


def iter_excluding_comments(chars: Iterable[str]) -> Iterator[str]:
    """Yield the characters of ``chars`` that lie outside comments.

    A line comment ends at a newline, which is kept. Raises
    :class:`CommentError` on a ``/`` that starts no comment or on a block
    comment that is never closed.
    """
    state = _State.NORMAL
    for char in chars:
        if state is _State.NORMAL:
            if char == "/":
                state = _State.POTENTIAL_COMMENT
            else:
                yield char
        elif state is _State.POTENTIAL_COMMENT:
            if char == "/":
                state = _State.LINE_COMMENT
            elif char == "*":
                state = _State.BLOCK_COMMENT
            else:
                raise CommentError(_ISOLATED_SLASH)
        elif state is _State.LINE_COMMENT:
            if char == "\n":
                state = _State.NORMAL
                yield char
        elif state is _State.BLOCK_COMMENT:
            if char == "*":
                state = _State.POTENTIAL_BLOCK_COMMENT_END
        elif char == "/":
            state = _State.NORMAL
        else:
            state = _State.BLOCK_COMMENT

    if state in (_State.BLOCK_COMMENT, _State.POTENTIAL_BLOCK_COMMENT_END):
        raise CommentError(_UNTERMINATED_BLOCK)
    if state is _State.POTENTIAL_COMMENT:
        raise CommentError(_ISOLATED_SLASH)


def exclude_comments(text: str) -> str:
    """Return ``text`` with all comments removed."""
    return "".join(iter_excluding_comments(text))