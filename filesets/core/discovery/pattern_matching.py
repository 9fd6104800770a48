from typing import Iterable, List, NamedTuple, Optional
import pathspec

from filesets.exceptions import InvalidArgument
from filesets.logging_setup import get_logger

log = get_logger(__name__)

class IgnorePattern(NamedTuple):
    pattern: str
    spec: pathspec.PathSpec

def clean_ignore_patterns(patterns: Optional[Iterable[Optional[str]]]) -> List[str]:
    # a list holding only None means "no patterns", not a literal match.
    if patterns is None:
        return []
    return [p for p in patterns if p is not None]

def _as_literal_glob(pattern: str) -> str:
    # a leading '!' or '#' is a plain character in a shell glob, not negation or a comment.
    if pattern.startswith(("!", "#")):
        return "\\" + pattern
    return pattern

def compile_ignore_patterns(patterns: Optional[Iterable[Optional[str]]]) -> List[IgnorePattern]:
    # one compiled pattern each, so any single match ignores the entry.
    compiled: List[IgnorePattern] = []
    for pattern in clean_ignore_patterns(patterns):
        try:
            spec = pathspec.PathSpec.from_lines(pathspec.patterns.GitWildMatchPattern, [_as_literal_glob(pattern)])
        except Exception as e:
            raise InvalidArgument(f"Invalid ignore pattern '{pattern}': {e}")
        compiled.append(IgnorePattern(pattern, spec))
    log.debug("ignore_patterns_compiled", count=len(compiled))
    return compiled

def _matches(base_name: str, ignore_pattern: IgnorePattern) -> bool:
    # wildcards never match a leading dot; only a literal '.' at the start of the pattern does.
    if base_name.startswith(".") and not ignore_pattern.pattern.startswith("."):
        return False
    return bool(ignore_pattern.spec.match_file(base_name))

def is_ignored(base_name: str, ignore_patterns: Iterable[IgnorePattern]) -> bool:
    # only the entry's own name is matched, never its full or relative path.
    return any(_matches(base_name, p) for p in ignore_patterns)
