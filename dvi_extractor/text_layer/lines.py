"""Rebuild reading-ordered lines from positioned PDF text fragments."""

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence


@dataclass(frozen=True)
class PositionedFragment:
    """A text run from the PDF text layer.

    ``y`` is the text baseline and grows upwards (PDF user space): larger
    values are higher on the page.
    """
    text: str
    x: float
    y: float


def _snap(value: float, grid: float) -> float:
    # Half-up rounding; round() would send x.5 to the even neighbour.
    return math.floor(value / grid + 0.5) * grid


def reconstruct_page(fragments: Iterable[PositionedFragment], grid: float = 2.0) -> str:
    """
    Join one page's fragments into newline-separated rows.

    Fragments whose snapped baselines coincide form a row. Rows run top to
    bottom, fragments within a row left to right, separated by one space.
    Blank fragments are ignored; a page without text yields "".
    """
    rows: Dict[float, List[PositionedFragment]] = {}
    for fragment in fragments:
        if not fragment.text or not fragment.text.strip():
            continue
        rows.setdefault(_snap(fragment.y, grid), []).append(fragment)

    if not rows:
        return ""

    lines = []
    for y in sorted(rows, reverse=True):
        row = sorted(rows[y], key=lambda f: f.x)
        lines.append(" ".join(f.text for f in row))
    return "\n".join(lines)


def reconstruct_text(pages: Sequence[Iterable[PositionedFragment]], grid: float = 2.0) -> str:
    """
    Reconstruct every page independently and join pages with a blank line.
    Pages without text are left out.
    """
    texts = (reconstruct_page(page, grid) for page in pages)
    return "\n\n".join(text for text in texts if text)
