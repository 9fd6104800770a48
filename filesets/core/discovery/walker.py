# filesets/core/discovery/walker.py
import os
import stat as stat_module
from collections import deque
from typing import Callable, Deque, FrozenSet, List, NamedTuple, Optional, Tuple

from filesets.config.settings import LinksPolicy
from filesets.logging_setup import get_logger

log = get_logger(__name__)

StatFunction = Callable[[str], os.stat_result]
DirIdentity = Tuple[int, int]

class Traversal(NamedTuple):
    depth: int
    path: str
    # (st_dev, st_ino) of every directory above this node, for the cycle guard.
    ancestors: FrozenSet[DirIdentity] = frozenset()

def stat_function_for(links: LinksPolicy) -> StatFunction:
    # manage never dereferences links; follow does.
    return os.lstat if links == LinksPolicy.MANAGE else os.stat

def safe_stat(path: str, stat_function: StatFunction) -> Optional[os.stat_result]:
    # a broken link, a permission error or an entry that vanished after listing.
    try:
        return stat_function(path)
    except OSError as e:
        log.debug("fileset_stat_failed_entry_skipped", path=path, error=str(e))
        return None

def perform_recursion(
    root: str,
    stat_function: StatFunction,
    should_ignore: Callable[[str], bool],
    admit: Callable[[int], bool],
) -> List[str]:
    """
    Breadth-first walk from ``root`` returning admitted absolute paths.

    Entries are recorded when their parent is listed, so an admitted entry is
    reported even if it later fails to stat or is not a directory. Rejected
    entries are never enqueued, which keeps the walk from touching anything
    below the depth limit.
    """
    current_dirs: Deque[Traversal] = deque([Traversal(0, root)])
    result: List[str] = []

    while current_dirs:
        traversal = current_dirs.popleft()
        dir_path = traversal.path

        st = safe_stat(dir_path, stat_function)
        if st is None or not stat_module.S_ISDIR(st.st_mode):
            continue

        identity = (st.st_dev, st.st_ino)
        if identity in traversal.ancestors:
            log.debug("fileset_directory_cycle_not_expanded", path=dir_path)
            continue
        ancestors = traversal.ancestors | {identity}

        try:
            entries = os.listdir(dir_path)
        except OSError as e:
            log.debug("fileset_listing_failed_directory_skipped", path=dir_path, error=str(e))
            continue

        child_depth = traversal.depth + 1
        for name in entries:
            # this also keeps matching directories from being recursed into.
            if should_ignore(name):
                continue

            if not admit(child_depth):
                continue

            child_path = os.path.join(dir_path, name)
            result.append(child_path)
            current_dirs.append(Traversal(child_depth, child_path, ancestors))

    log.debug("fileset_recursion_complete", root=root, count=len(result))
    return result
