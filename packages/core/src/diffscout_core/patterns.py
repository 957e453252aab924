"""Path pattern matching for include/ignore rules.

Patterns come from free-form environment text, so a malformed rule must never
raise. Each pattern is tried as a glob first; if the glob is invalid it is
tried as a regular expression; if that fails too it simply does not match.

Glob syntax:
  - ``*`` and ``?`` match within one path segment
  - ``**`` as a whole segment spans any number of segments (including none)
  - ``[abc]``, ``[a-z]``, ``[!abc]`` character classes
  - ``{a,b}`` alternation, nestable (``{js,{ts,tsx}}``)
  - wildcards do not match a leading ``.`` in a segment; name it explicitly
    (``.github/**``, ``*.yml`` misses ``.github/ci.yml``)
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Sequence

logger = logging.getLogger(__name__)

# A wildcard at the start of a segment never matches a leading dot.
_NO_DOT = r"(?!\.)"
_SEGMENT = _NO_DOT + "[^/]*"


def parse_patterns(raw: str | None) -> list[str]:
    """Split a comma-separated pattern list, dropping blank entries."""
    if not raw:
        return []
    return [p.strip() for p in raw.split(",") if p.strip()]


def normalize_pattern(pattern: str) -> str:
    """Anchor a pattern so it can match at any depth of the path."""
    if pattern.startswith("/"):
        return "**" + pattern
    if pattern.startswith("**"):
        return pattern
    return "**/" + pattern


def glob_to_regex(glob: str, segment_start: bool = True) -> str:
    """Translate a glob into a regex for ``re.fullmatch``.

    Wildcards skip dot-files and dot-directories unless the pattern names the
    dot itself (``.github/**``, ``.env``). ``segment_start`` says whether the
    first character of ``glob`` begins a path segment; brace options inherit
    it from the brace.

    Raises ValueError for an unterminated ``[`` or ``{``.
    """
    out: list[str] = []
    i, n = 0, len(glob)
    while i < n:
        c = glob[i]
        at_segment_start = glob[i - 1] == "/" if i else segment_start
        if c == "*":
            if glob.startswith("**", i) and at_segment_start:
                if i + 2 == n:
                    out.append(_SEGMENT + "(?:/" + _SEGMENT + ")*")
                    i += 2
                    continue
                if glob[i + 2] == "/":
                    out.append("(?:" + _SEGMENT + "/)*")
                    i += 3
                    continue
            while i < n and glob[i] == "*":
                i += 1
            out.append(_SEGMENT if at_segment_start else "[^/]*")
            continue
        if c == "?":
            out.append(_NO_DOT + "[^/]" if at_segment_start else "[^/]")
        elif c == "[":
            end = _class_end(glob, i)
            body = glob[i + 1 : end]
            if body[:1] in ("!", "^"):
                body = "^" + body[1:]
            out.append((_NO_DOT if at_segment_start else "") + "[" + body.replace("\\", "\\\\") + "]")
            i = end
        elif c == "{":
            end = _brace_end(glob, i)
            options = _split_options(glob[i + 1 : end])
            if len(options) == 1:
                out.append(re.escape(glob[i : end + 1]))
            else:
                out.append("(?:" + "|".join(glob_to_regex(o, at_segment_start) for o in options) + ")")
            i = end
        elif c == "\\" and i + 1 < n:
            i += 1
            out.append(re.escape(glob[i]))
        else:
            out.append(re.escape(c))
        i += 1
    return "".join(out)


def _class_end(glob: str, start: int) -> int:
    j = start + 1
    if j < len(glob) and glob[j] in ("!", "^"):
        j += 1
    # A leading ']' is part of the class, not its terminator.
    if j < len(glob) and glob[j] == "]":
        j += 1
    end = glob.find("]", j)
    if end == -1:
        raise ValueError(f"unterminated character class in glob: {glob!r}")
    return end


def _brace_end(glob: str, start: int) -> int:
    depth = 0
    j = start
    while j < len(glob):
        c = glob[j]
        if c == "\\":
            j += 2
            continue
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                return j
        j += 1
    raise ValueError(f"unterminated brace in glob: {glob!r}")


def _split_options(body: str) -> list[str]:
    """Split brace contents on the commas that are not inside a nested brace."""
    options: list[str] = []
    depth = last = j = 0
    while j < len(body):
        c = body[j]
        if c == "\\":
            j += 2
            continue
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
        elif c == "," and depth == 0:
            options.append(body[last:j])
            last = j + 1
        j += 1
    options.append(body[last:])
    return options


def _match_one(pattern: str, path: str) -> bool:
    try:
        regex = re.compile(glob_to_regex(normalize_pattern(pattern)))
    except (ValueError, re.error):
        pass
    else:
        return regex.fullmatch(path) is not None

    try:
        return re.search(pattern, path) is not None
    except re.error:
        logger.debug("Pattern %r is neither a valid glob nor a valid regex; ignoring it", pattern)
        return False


def matches(patterns: Sequence[str], path: str) -> bool:
    """Return True if any pattern matches ``path``.

    An empty pattern list matches everything.
    """
    if not patterns:
        return True
    return any(_match_one(p, path) for p in patterns)


def is_path_selected(path: str, include_patterns: Iterable[str], ignore_patterns: Iterable[str]) -> bool:
    """Apply the include/ignore precedence rule to one path.

    A non-empty include list decides alone. Otherwise a non-empty ignore list
    excludes whatever it matches. With neither, every path is selected.
    """
    include = list(include_patterns)
    if include:
        return matches(include, path)
    ignore = list(ignore_patterns)
    if ignore:
        return not matches(ignore, path)
    return True
