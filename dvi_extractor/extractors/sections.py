"""Anchor lookup and bounded search windows inside declaration text."""

import re
from typing import Optional


def transport_scope(text: str, transport_marker: re.Pattern) -> str:
    """Text from the first transport segment marker on, or the whole text without one."""
    match = transport_marker.search(text)
    return text[match.start():] if match else text


def section_window(
    text: str,
    anchor: re.Pattern,
    budget: int,
    stop: Optional[re.Pattern] = None
) -> Optional[str]:
    """
    Return the text starting at ``anchor``, bounded by ``budget`` characters
    or the next ``stop`` match after the anchor, whichever comes first.

    Returns None when the anchor is absent.
    """
    match = anchor.search(text)
    if not match:
        return None

    end = match.start() + budget
    if stop is not None:
        next_header = stop.search(text, match.end())
        if next_header and next_header.start() < end:
            end = next_header.start()
    return text[match.start():end]
