"""
File resolution for @include directives.

The minifier never touches the file system itself. It asks a FileResolver to
turn the file name written in an @include directive into a GlslFile, and uses
the path of the result to resolve includes nested inside it.
"""

import posixpath
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from loguru import logger

from glsl_minify.models import GlslFile


class FileResolver(Protocol):
    """Interface for resolving and reading included files."""

    def resolve_and_read(
        self, filename: str, base_directory: str | None = None
    ) -> GlslFile:
        """Resolve a file name and read its contents.

        Args:
            filename: File name as written in the @include directive
            base_directory: Directory of the including file, if known

        Returns:
            The resolved file with its full path and contents

        Raises:
            FileNotFoundError: If the file cannot be found
            OSError: If the file cannot be read
            UnicodeDecodeError: If the file is not valid text
        """
        ...


class FileSystemResolver:
    """Resolves includes against the local file system.

    Relative names are tried against the base directory (or the working
    directory) first and then against each include path in order. Every file
    read is recorded in ``dependencies`` so build tools can watch it.
    """

    def __init__(
        self, include_paths: Iterable[str | Path] = (), encoding: str = "utf-8"
    ):
        self.include_paths = [Path(p) for p in include_paths]
        self.encoding = encoding
        self._dependencies: dict[str, None] = {}

    @property
    def dependencies(self) -> list[str]:
        """Paths of all files read so far, in first-read order."""
        return list(self._dependencies)

    def _candidates(self, filename: str, base_directory: str | None) -> list[Path]:
        path = Path(filename)
        if path.is_absolute():
            return [path]

        base = Path(base_directory) if base_directory else Path.cwd()
        return [base / path] + [include_path / path for include_path in self.include_paths]

    def resolve(self, filename: str, base_directory: str | None = None) -> Path:
        """Find the file an include name refers to.

        Raises:
            FileNotFoundError: If no candidate location holds the file
        """
        candidates = self._candidates(filename, base_directory)
        for candidate in candidates:
            if candidate.is_file():
                return candidate.resolve()

        searched = ", ".join(str(c) for c in candidates)
        raise FileNotFoundError(f"{filename} not found (searched: {searched})")

    def resolve_and_read(
        self, filename: str, base_directory: str | None = None
    ) -> GlslFile:
        path = self.resolve(filename, base_directory)
        logger.debug(f"Reading {path}")
        contents = path.read_text(encoding=self.encoding)
        self._dependencies[str(path)] = None
        return GlslFile(contents=contents, path=str(path))


class MemoryResolver:
    """Resolves includes against an in-memory set of files.

    Keys are POSIX-style paths. Relative include names are joined to the base
    directory before lookup, so nested includes behave as on disk.

    Examples:
        >>> resolver = MemoryResolver({"lib/noise.glsl": "float n;"})
        >>> resolver.resolve_and_read("noise.glsl", "lib").path
        'lib/noise.glsl'
    """

    def __init__(self, files: dict[str, str] | None = None):
        self.files: dict[str, str] = {}
        for name, contents in (files or {}).items():
            self.add(name, contents)
        self.requests: list[str] = []

    def add(self, name: str, contents: str) -> None:
        """Register a virtual file."""
        self.files[posixpath.normpath(name)] = contents

    def resolve_and_read(
        self, filename: str, base_directory: str | None = None
    ) -> GlslFile:
        if base_directory and not posixpath.isabs(filename):
            path = posixpath.normpath(posixpath.join(base_directory, filename))
        else:
            path = posixpath.normpath(filename)

        self.requests.append(path)
        if path not in self.files:
            raise FileNotFoundError(f"{filename} not found")
        return GlslFile(contents=self.files[path], path=path)
