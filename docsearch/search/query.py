"""Query construction from raw user input."""

import re

from .errors import InvalidQueryError


def build_query(input_text: str, case_sensitive: bool = False, use_regex: bool = False) -> re.Pattern[str]:
    """Compile user input into a pattern.

    In literal mode every character of ``input_text`` is escaped. Matching is
    case-insensitive unless ``case_sensitive`` is set, and ``^``/``$`` anchor
    at line boundaries.

    Raises:
        InvalidQueryError: ``input_text`` is not a valid regular expression.
    """
    flags = re.MULTILINE
    if not case_sensitive:
        flags |= re.IGNORECASE
    source = input_text if use_regex else re.escape(input_text)
    try:
        return re.compile(source, flags)
    except re.error as e:
        raise InvalidQueryError(input_text, str(e)) from e


def same_query(a: re.Pattern[str] | None, b: re.Pattern[str] | None) -> bool:
    """Whether two compiled queries would find the same matches."""
    if a is None or b is None:
        return a is b
    return a.pattern == b.pattern and a.flags == b.flags
