"""Path exclusion patterns for CSRF checks.

Supported forms:

- ``/oauth/callback`` matches that path exactly.
- ``/api/*`` matches ``/api`` and anything below it, but not ``/api-other``.
- ``/hooks/*/callback`` treats each ``*`` as "any characters" and must
  match the whole path. Every other character is literal.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class PathPattern:
    """A single compiled exclusion pattern."""

    pattern: str
    prefix: str | None = None
    regex: re.Pattern[str] | None = None

    @classmethod
    def compile(cls, pattern: str) -> "PathPattern":
        if pattern.endswith("/*") and "*" not in pattern[:-2]:
            return cls(pattern, prefix=pattern[:-2])
        if "*" in pattern:
            body = ".*".join(re.escape(part) for part in pattern.split("*"))
            return cls(pattern, regex=re.compile(f"^{body}$"))
        return cls(pattern)

    def matches(self, path: str) -> bool:
        if path == self.pattern:
            return True
        if self.prefix is not None:
            return path == self.prefix or path.startswith(self.prefix + "/")
        if self.regex is not None:
            return self.regex.match(path) is not None
        return False


class ExclusionMatcher:
    """Ordered list of patterns; the first match wins."""

    def __init__(self, patterns: Iterable[str] = ()) -> None:
        self.patterns = [PathPattern.compile(p) for p in patterns]

    def match(self, path: str) -> str | None:
        """Return the first pattern matching ``path``, if any."""
        for pattern in self.patterns:
            if pattern.matches(path):
                return pattern.pattern
        return None
