"""
Script module file importer.

This module provides the file loader a script module system uses to
import sources by path. Module names are resolved to absolute paths,
which double as cache keys, and every imported module gets a child
importer rooted at its own directory so that nested relative imports
resolve against the importing file.
"""

import os
from typing import Callable, Optional

from .utils.exceptions import ImportLoadError

FileReader = Callable[[str], bytes]

_SHEBANG = b"#!"


def shebang_to_slashes(data: bytes) -> bytes:
    """Replace a leading ``#!`` with ``//`` so the line parses as a comment."""
    if data[:2] == _SHEBANG:
        return b"//" + data[2:]
    return data


def read_file(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def shebang_read_file(path: str) -> bytes:
    """Read path, turning an interpreter line into a comment."""
    return shebang_to_slashes(read_file(path))


class FileImporter:
    """
    Imports script modules from the file system.

    Args:
        work_dir: Directory relative names are resolved against
        reader: Optional replacement for plain file reads, applied to
            every import (e.g. shebang_read_file)
    """

    def __init__(self, work_dir: str = ".", reader: Optional[FileReader] = None):
        self.work_dir = work_dir
        self.reader = reader

    def resolve(self, name: str) -> str:
        """
        Canonical absolute path of a module name.

        Raises:
            ImportLoadError: If name is empty
        """
        if not name:
            raise ImportLoadError("invalid import call: empty module name")
        path = name
        if not os.path.isabs(path):
            path = os.path.join(self.work_dir, path)
        return os.path.abspath(path)

    def read(self, path: str) -> bytes:
        """
        Content of a resolved module path.

        Raises:
            ImportLoadError: If path is empty
            OSError: If the file cannot be read
        """
        if not path:
            raise ImportLoadError("invalid import call: empty module path")
        if self.reader is None:
            return read_file(path)
        return self.reader(path)

    def fork(self, path: str) -> "FileImporter":
        """Importer for modules imported by the module at path."""
        return FileImporter(work_dir=os.path.dirname(path), reader=self.reader)
