"""Reply boundary detection.

Replies carry no length prefix or terminator. A reply is over once a single
root JSON object has been seen, which is decided by counting braces.
"""

from __future__ import annotations

ESCAPE = "\\"


def is_complete_block(text: str) -> bool:
    """Return True if ``text`` holds exactly one balanced root ``{...}`` block.

    Braces preceded by a backslash are literal. Any structural brace after
    the root object has closed, or a closing brace without a matching
    opening one, makes the text invalid and the result False. This is a
    bracket-balance check only, not a JSON validator.
    """
    depth = 0
    root_opened = False
    root_closed = False

    for i, char in enumerate(text):
        if char not in "{}":
            continue
        if i > 0 and text[i - 1] == ESCAPE:
            continue
        if root_closed:
            return False

        if char == "{":
            root_opened = True
            depth += 1
        else:
            depth -= 1
            if depth == 0:
                root_closed = True
            elif depth < 0:
                return False

    return root_opened and depth == 0
