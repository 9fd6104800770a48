"""
filesets: bounded, configurable directory traversal.

A ``Fileset`` pairs an absolute root path with a traversal policy (ignore
globs, symlink handling, recursion depth) and lists the tree beneath it as
root-relative paths. ``merge`` folds several filesets together, earlier
ones taking precedence.
"""
__version__ = "0.1.0"

import logging

# silent until an application (or the cli) configures logging.
logging.getLogger("filesets").addHandler(logging.NullHandler())

from filesets.config.request import OptionsRequest
from filesets.config.settings import INFINITE, FilesetOption, LinksPolicy
from filesets.core.fileset import Fileset
from filesets.core.merge import merge
from filesets.exceptions import ConfigError, FilesetError, InvalidArgument

__all__ = [
    "ConfigError",
    "Fileset",
    "FilesetError",
    "FilesetOption",
    "INFINITE",
    "InvalidArgument",
    "LinksPolicy",
    "OptionsRequest",
    "merge",
]
