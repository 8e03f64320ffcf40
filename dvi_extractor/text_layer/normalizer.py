"""Whitespace normalization applied once to reconstructed declaration text."""

import re

_LINE_ENDINGS = re.compile(r"\r\n?")
_HORIZONTAL_SPACE = re.compile(r"[^\S\n]+")
_SPACE_AROUND_NEWLINE = re.compile(r" ?\n ?")
_BLANK_LINE_RUN = re.compile(r"\n{3,}")


def normalize_text(raw: str) -> str:
    """
    Canonicalize whitespace.

    CRLF/CR become LF, horizontal whitespace runs become one space, a space
    touching a newline is dropped and 3+ newlines collapse to 2.
    normalize_text(normalize_text(x)) == normalize_text(x).
    """
    text = _LINE_ENDINGS.sub("\n", raw or "")
    text = _HORIZONTAL_SPACE.sub(" ", text)
    text = _SPACE_AROUND_NEWLINE.sub("\n", text)
    return _BLANK_LINE_RUN.sub("\n\n", text)
