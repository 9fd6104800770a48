# filesets/core/merge.py
from typing import TYPE_CHECKING, Dict

from filesets.logging_setup import get_logger

if TYPE_CHECKING:
    from filesets.core.fileset import Fileset

log = get_logger(__name__)

def merge(*filesets: "Fileset") -> Dict[str, str]:
    """
    Produces a dict of relative path -> root path across several filesets.

    Earlier filesets win, e.g. /dir1/subfile beats /dir2/subfile. A dict is
    used because callers need both the relative path of each file and the
    base directory it was found in.
    """
    result: Dict[str, str] = {}

    for fileset in filesets:
        for file in fileset.files():
            result.setdefault(file, fileset.path)

    log.debug("filesets_merged", fileset_count=len(filesets), file_count=len(result))
    return result
