"""Locating query matches in plain text."""

import re
from bisect import bisect_right

from ...common.pydantic import Match
from ...documents.text_document import Span

FRAGMENT_WIDTH = 40


def line_starts(text: str) -> list[int]:
    """Offsets at which each line of ``text`` begins."""
    return [0, *(m.end() for m in re.finditer("\n", text))]


def find_matches(
    query: re.Pattern[str], text: str, first_index: int = 0, fragment_width: int = FRAGMENT_WIDTH
) -> list[tuple[Span, Match]]:
    """Find the non-empty matches of ``query`` in ``text``.

    Matches are numbered from ``first_index``. The fragment is the match's
    line, cut to ``fragment_width`` characters on either side of the match.
    """
    starts = line_starts(text)
    found: list[tuple[Span, Match]] = []
    for m in query.finditer(text):
        if m.end() == m.start():
            continue
        line = bisect_right(starts, m.start()) - 1
        line_start = starts[line]
        line_end = starts[line + 1] - 1 if line + 1 < len(starts) else len(text)
        fragment_start = max(line_start, m.start() - fragment_width)
        fragment_end = min(max(line_end, m.end()), m.end() + fragment_width)
        fragment = text[fragment_start:fragment_end]
        match = Match(
            text=m.group(),
            fragment=fragment,
            line=line,
            column=m.start() - line_start,
            index=first_index + len(found),
        )
        found.append((Span(m.start(), m.end()), match))
    return found


def step(current: int | None, count: int, forward: bool) -> int | None:
    """Move a match cursor one step, wrapping around at both ends."""
    if count == 0:
        return None
    if current is None:
        return 0 if forward else count - 1
    return (current + (1 if forward else -1)) % count
