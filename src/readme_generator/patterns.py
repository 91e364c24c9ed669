import re
from collections.abc import Iterable


class PatternError(Exception):
    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.message = f"Invalid pattern {pattern!r}: {reason}"
        super().__init__(self.message)


class PathPattern:
    """A caller-supplied path rule, evaluated with search semantics."""

    def __init__(self, pattern: str, flags: int = 0):
        try:
            self._regex = re.compile(pattern, flags)
        except re.error as exc:
            raise PatternError(pattern, str(exc)) from exc
        self.pattern = pattern

    def matches(self, path: str) -> bool:
        return self._regex.search(path) is not None

    def __repr__(self) -> str:
        return f"PathPattern({self.pattern!r})"


def compile_patterns(patterns: Iterable[str], ignore_case: bool = False) -> list[PathPattern]:
    flags = re.IGNORECASE if ignore_case else 0
    return [PathPattern(p, flags) for p in patterns]


def matches_any(patterns: Iterable[PathPattern], path: str) -> bool:
    return any(p.matches(path) for p in patterns)
