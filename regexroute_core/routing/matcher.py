"""Route Matcher - Anchored regular expression matching.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import re
import threading
from typing import Dict, List, Optional


class PatternError(ValueError):
    """Raised when a route pattern is not a valid regular expression."""

    def __init__(self, expression: str, reason: str):
        self.expression = expression
        self.reason = reason
        super().__init__(f"Invalid route pattern {expression!r}: {reason}")


class RegexMatcher:
    """Full-string regex matcher.

    Patterns are compiled as written and evaluated with ``fullmatch``, so
    the whole path has to match. ``"foo"`` does not match ``"foobar"`` or
    ``"xfoo"``, and ``"a|b"`` is anchored as a unit.

    Captures:
    - One entry per capturing group, left to right (named groups included)
    - Group 0 (the whole match) is never part of the captures
    - A group that did not take part in the match yields ""
    """

    def __init__(self):
        self._cache: Dict[str, re.Pattern] = {}
        self._lock = threading.Lock()

    def compile(self, expression: str) -> re.Pattern:
        """Compile expression (cached).

        Raises:
            PatternError: If the expression is not a valid regex
        """
        regex = self._cache.get(expression)
        if regex is not None:
            return regex

        try:
            regex = re.compile(expression)
        except re.error as e:
            raise PatternError(expression, str(e)) from e

        with self._lock:
            self._cache.setdefault(expression, regex)
        return regex

    def matches(self, expression: str, path: str) -> bool:
        """Check if path fully matches expression."""
        return self.compile(expression).fullmatch(path) is not None

    @staticmethod
    def captures(regex: re.Pattern, path: str) -> Optional[List[str]]:
        """Extract captured subgroups.

        Returns:
            List of captures if path fully matches, None otherwise
        """
        match = regex.fullmatch(path)
        if match is None:
            return None
        return list(match.groups(default=""))


default_matcher = RegexMatcher()


__all__ = [
    "PatternError",
    "RegexMatcher",
    "default_matcher",
]
