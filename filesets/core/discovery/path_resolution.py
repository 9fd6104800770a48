import os
import re
from typing import Iterable, List, Optional

ROOT_MARKER = "."

_WINDOWS_DRIVE_ROOT = re.compile(r"^[A-Za-z]:[\\/]$")
_WINDOWS_ABSOLUTE = re.compile(r"^(?:[A-Za-z]:[\\/]|[\\/]{2}[^\\/]+[\\/][^\\/]+)")

def _is_windows(windows: Optional[bool]) -> bool:
    return os.name == "nt" if windows is None else windows

def _separators(windows: bool) -> str:
    return "\\/" if windows else "/"

def is_absolute_path(path: str, windows: Optional[bool] = None) -> bool:
    # drive-letter and UNC forms count as absolute on windows.
    if _is_windows(windows):
        return bool(_WINDOWS_ABSOLUTE.match(path))
    return path.startswith("/")

def normalize_root_path(path: str, windows: Optional[bool] = None) -> str:
    # strips trailing separators, keeping '/' and drive roots like 'C:/' intact.
    windows = _is_windows(windows)
    if windows:
        if _WINDOWS_DRIVE_ROOT.match(path):
            return path
        stripped = path.rstrip(_separators(True))
        if re.match(r"^[A-Za-z]:$", stripped):
            return path[:3]
    else:
        stripped = path.rstrip("/")
    return stripped or path[:1]

def relativize_paths(root: str, absolute_paths: Iterable[str], windows: Optional[bool] = None) -> List[str]:
    """
    Turns traversal results into paths relative to ``root``.

    The root prefix and any separators following it are removed from each
    path, and the root marker '.' is placed first.
    """
    seps = re.escape(_separators(_is_windows(windows)))
    prefix = re.compile("^" + re.escape(root) + "[" + seps + "]*")
    result = [prefix.sub("", p, count=1) for p in absolute_paths]
    result.insert(0, ROOT_MARKER)
    return result
