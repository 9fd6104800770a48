# filesets/core/fileset.py
"""
A root directory plus the policy used to enumerate the files beneath it.
"""
import os
from typing import Any, Callable, Dict, List, Mapping, Union

from filesets.config.request import OptionsRequest, options_from_request
from filesets.config.settings import (
    DEFAULT_LINKS,
    DEFAULT_RECURSE,
    DEFAULT_RECURSELIMIT,
    INFINITE,
    LinksPolicy,
    RecurseLimitValue,
)
from filesets.core.discovery.path_resolution import (
    is_absolute_path,
    normalize_root_path,
    relativize_paths,
)
from filesets.core.discovery.pattern_matching import IgnorePattern, compile_ignore_patterns, is_ignored
from filesets.core.discovery.walker import (
    StatFunction,
    perform_recursion,
    safe_stat,
    stat_function_for,
)
from filesets.core.merge import merge as merge_filesets
from filesets.exceptions import InvalidArgument
from filesets.logging_setup import get_logger

log = get_logger(__name__)

OptionsSource = Union[Mapping[str, Any], OptionsRequest, None]

VALID_LINKS = frozenset(p.value for p in LinksPolicy)

class Fileset:
    """
    Operates recursively on a path, returning a list of relative file paths.

    Unlike ``os.walk`` the recursion depth can be bounded, which means the
    walk needs to know when it goes another level deep.
    """

    def __init__(self, path: Union[str, "os.PathLike[str]"], options: OptionsSource = None):
        path = normalize_root_path(os.fspath(path))
        if not is_absolute_path(path):
            raise InvalidArgument(f"Fileset paths must be fully qualified: {path}")

        self._path = path

        self._ignore: List[str] = []
        self._ignore_patterns: List[IgnorePattern] = []
        self._links = DEFAULT_LINKS
        self._stat_function: StatFunction = stat_function_for(DEFAULT_LINKS)
        self._recurse = DEFAULT_RECURSE
        self._recurselimit: RecurseLimitValue = DEFAULT_RECURSELIMIT
        self._checksum_type: Any = None

        if isinstance(options, OptionsRequest):
            self._initialize_from_options(options_from_request(options))
        else:
            self._initialize_from_options(options or {})

        if safe_stat(self._path, self._stat_function) is None:
            raise InvalidArgument(f"Fileset paths must exist: {self._path}")

        log.debug(
            "fileset_initialized",
            path=self._path,
            links=self._links.value,
            recurse=self._recurse,
            recurselimit=self._recurselimit_repr(),
            ignore=self._ignore,
        )

    def __repr__(self) -> str:
        return (
            f"Fileset(path={self._path!r}, recurse={self._recurse!r}, "
            f"recurselimit={self._recurselimit_repr()!r}, links={self._links.value!r})"
        )

    merge = staticmethod(merge_filesets)

    def files(self) -> List[str]:
        # relative paths in breadth-first order, with '.' for the root itself.
        absolute_paths = perform_recursion(
            self._path,
            self._stat_function,
            self._should_ignore,
            self._should_recurse,
        )
        return relativize_paths(self._path, absolute_paths)

    @property
    def path(self) -> str:
        return self._path

    # --- setters; every one of them re-validates its value ---

    def set_ignore(self, values: Any) -> None:
        if not isinstance(values, (list, tuple, set, frozenset)):
            values = [values]
        patterns = list(values)
        self._ignore_patterns = compile_ignore_patterns(patterns)
        self._ignore = patterns

    def set_links(self, links: Any) -> None:
        if isinstance(links, LinksPolicy):
            policy = links
        elif isinstance(links, str) and links.lower() in VALID_LINKS:
            policy = LinksPolicy(links.lower())
        else:
            raise InvalidArgument(f"Invalid :links value '{links}'")
        self._links = policy
        self._stat_function = stat_function_for(policy)

    def set_recurse(self, recurse: Any) -> None:
        if isinstance(recurse, int) and not isinstance(recurse, bool):
            raise InvalidArgument("Fileset recurse parameter must not be a number anymore, please use recurselimit")
        if not isinstance(recurse, bool):
            raise InvalidArgument(f"Fileset recurse parameter must be true or false, got '{recurse}'")
        self._recurse = recurse

    def set_recurse_limit(self, limit: Any) -> None:
        if limit is INFINITE or limit == INFINITE.value:
            self._recurselimit = INFINITE
            return
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise InvalidArgument(f"Invalid recurselimit value '{limit}'")
        if limit < 0:
            raise InvalidArgument(f"Fileset recurselimit must not be negative: {limit}")
        self._recurselimit = limit

    def set_checksum_type(self, checksum_type: Any) -> None:
        self._checksum_type = checksum_type

    def set_option(self, key: Any, value: Any) -> None:
        setter = OPTION_SETTERS.get(str(getattr(key, "value", key)))
        if setter is None:
            raise InvalidArgument(f"Invalid option '{key}'")
        setter(self, value)

    ignore = property(lambda self: list(self._ignore), set_ignore)
    links = property(lambda self: self._links, set_links)
    recurse = property(lambda self: self._recurse, set_recurse)
    recurselimit = property(lambda self: self._recurselimit, set_recurse_limit)
    checksum_type = property(lambda self: self._checksum_type, set_checksum_type)

    # --- internals ---

    def _initialize_from_options(self, options: Mapping[Any, Any]) -> None:
        for option, value in options.items():
            self.set_option(option, value)

    def _should_ignore(self, name: str) -> bool:
        return is_ignored(name, self._ignore_patterns)

    def _should_recurse(self, depth: int) -> bool:
        # recurse if told to, and the limit is infinite or not yet passed.
        return self._recurse and (self._recurselimit is INFINITE or depth <= self._recurselimit)

    def _recurselimit_repr(self) -> Union[str, int]:
        return self._recurselimit.value if self._recurselimit is INFINITE else self._recurselimit

OPTION_SETTERS: Dict[str, Callable[[Fileset, Any], None]] = {
    "ignore": Fileset.set_ignore,
    "links": Fileset.set_links,
    "recurse": Fileset.set_recurse,
    "recurselimit": Fileset.set_recurse_limit,
    "checksum_type": Fileset.set_checksum_type,
    "checksumType": Fileset.set_checksum_type,
}
