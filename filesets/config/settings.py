from enum import Enum
from typing import Dict, Tuple, Union

class LinksPolicy(Enum):
    # how symlinks are classified while walking.
    MANAGE = "manage"  # lstat: links are leaves
    FOLLOW = "follow"  # stat: links to directories are expanded

class RecurseLimit(Enum):
    # sentinel for an unbounded recursion depth.
    INFINITE = "infinite"

INFINITE = RecurseLimit.INFINITE

RecurseLimitValue = Union[RecurseLimit, int]

class FilesetOption(str, Enum):
    # option keys accepted from an external request, in either spelling.
    LINKS = "links"
    IGNORE = "ignore"
    RECURSE = "recurse"
    RECURSELIMIT = "recurselimit"
    CHECKSUM_TYPE = "checksum_type"

# other spellings a request may use for the same option.
OPTION_KEY_ALIASES: Dict[FilesetOption, Tuple[str, ...]] = {
    FilesetOption.CHECKSUM_TYPE: ("checksumType",),
}

DEFAULT_LINKS = LinksPolicy.MANAGE
DEFAULT_RECURSE = False
DEFAULT_RECURSELIMIT: RecurseLimitValue = INFINITE

REQUEST_OPTION_KEYS: Tuple[FilesetOption, ...] = tuple(FilesetOption)
