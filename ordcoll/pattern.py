"""Regular-expression capability used by Collection.match.

Patterns may be plain Python regular expressions, compiled patterns, or
delimited patterns of the form /body/flags. Any character other than a
letter, digit, backslash or whitespace can delimit the body; bracket
delimiters pair up, as in {body} or (body). A pattern whose opening
delimiter is never closed, or whose closing delimiter is followed by
anything but letters, is used as a plain regular expression.
"""

from __future__ import annotations

import re
from typing import Generator, Union

__all__ = ["PatternLike", "compile_pattern", "find_all"]


type PatternLike = Union[str, re.Pattern[str]]

# Closing delimiter for each bracket-style opening delimiter
_BRACKETS = {"(": ")", "[": "]", "{": "}", "<": ">"}

_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": 0,  # str patterns are always unicode
}


def _is_delimiter(char: str) -> bool:
    return not (char.isalnum() or char.isspace() or char == "\\")


def _closing_index(pattern: str) -> int | None:
    """Find the delimiter that closes the body, skipping escaped characters.

    Bracket delimiters nest, so "(a(b)c)" closes at the last parenthesis.
    """
    opener = pattern[0]
    closer = _BRACKETS.get(opener, opener)
    depth = 1
    index = 1
    while index < len(pattern):
        char = pattern[index]
        if char == "\\":
            index += 2
            continue
        if char == closer:
            depth -= 1
            if depth == 0:
                return index
        elif char == opener and closer != opener:
            depth += 1
        index += 1
    return None


def _split_delimited(pattern: str) -> tuple[str, str] | None:
    if len(pattern) < 2 or not _is_delimiter(pattern[0]):
        return None
    end = _closing_index(pattern)
    if end is None:
        return None
    suffix = pattern[end + 1 :]
    if suffix and not suffix.isalpha():
        return None
    return pattern[1:end], suffix


def compile_pattern(pattern: PatternLike) -> re.Pattern[str]:
    """Compile a pattern argument.

    Args:
        pattern: A compiled pattern, a delimited pattern such as "/[0-9]+/i",
            or a plain regular expression.

    Returns:
        The compiled pattern.

    Raises:
        ValueError: If a delimited pattern carries an unsupported flag.
        re.error: If the pattern body is not a valid regular expression.
    """
    if isinstance(pattern, re.Pattern):
        return pattern
    split = _split_delimited(pattern)
    if split is None:
        return re.compile(pattern)
    body, suffix = split
    flags = 0
    for letter in suffix:
        if letter not in _FLAGS:
            raise ValueError(f"Unsupported pattern flag {letter!r} in {pattern!r}")
        flags |= _FLAGS[letter]
    return re.compile(body, flags)


def find_all(pattern: PatternLike, text: str) -> Generator[str]:
    """Yield every full-match substring of pattern in text, in order.

    Capture groups are ignored; only group 0 is reported.
    """
    for found in compile_pattern(pattern).finditer(text):
        yield found.group(0)
