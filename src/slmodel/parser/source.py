# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Content sources: where the parser reads model files from.

The parser only ever asks a source for the text at a logical path, so the
same parsing code runs against a directory on disk, an in-memory mapping, or
the entries of a ``.slx`` archive.
"""

from __future__ import annotations

import zipfile
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path, PurePath, PurePosixPath
from typing import BinaryIO

# ###############
# Public Interface
# ###############


class ContentSourceError(Exception):
    """Raised when a content source cannot deliver the text at a path.

    Attributes:
        path: The logical path that was requested.
    """

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class ContentNotFoundError(ContentSourceError):
    """Raised when the requested path does not exist in the source."""


class ContentSource(ABC):
    """Read-only access to the files of one model."""

    @abstractmethod
    def read(self, path: str | PurePath) -> str:
        """Return the text stored at *path*.

        Raises:
            ContentNotFoundError: If nothing is stored at *path*.
            ContentSourceError: If the content exists but cannot be read or decoded.
        """

    @abstractmethod
    def list_dir(self, path: str | PurePath) -> list[PurePosixPath]:
        """Return the files directly inside directory *path*, sorted by name.

        Raises:
            ContentNotFoundError: If the directory does not exist.
        """

    def exists(self, path: str | PurePath) -> bool:
        """Return True if *path* can be read from this source."""
        try:
            self.read(path)
        except ContentSourceError:
            return False
        return True


class FsSource(ContentSource):
    """Reads files from the local filesystem; relative paths resolve against *root*."""

    def __init__(self, root: str | Path = ".") -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def read(self, path: str | PurePath) -> str:
        target = self._resolve(path)
        try:
            return target.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise ContentNotFoundError(f"File not found: {target}", str(path)) from None
        except UnicodeDecodeError as exc:
            raise ContentSourceError(f"File is not valid UTF-8: {target}: {exc}", str(path)) from exc
        except OSError as exc:
            raise ContentSourceError(f"Cannot read file {target}: {exc}", str(path)) from exc

    def list_dir(self, path: str | PurePath) -> list[PurePosixPath]:
        target = self._resolve(path)
        if not target.is_dir():
            raise ContentNotFoundError(f"Directory not found: {target}", str(path))
        logical = _normalize(path)
        return sorted(logical / entry.name for entry in target.iterdir() if entry.is_file())

    def exists(self, path: str | PurePath) -> bool:
        return self._resolve(path).is_file()

    def _resolve(self, path: str | PurePath) -> Path:
        candidate = Path(path)
        if candidate.is_absolute():
            return candidate
        return self._root / candidate


class MemorySource(ContentSource):
    """Serves files from an in-memory ``path -> text`` mapping.

    Keys are normalised to POSIX form, so ``"./a/b.xml"`` and ``"a/b.xml"``
    address the same entry.
    """

    def __init__(self, files: Mapping[str, str] | None = None) -> None:
        self._files: dict[str, str] = {}
        for key, text in (files or {}).items():
            self._files[str(_normalize(key))] = text

    def add(self, path: str | PurePath, text: str) -> None:
        """Store *text* at *path*, replacing any existing entry."""
        self._files[str(_normalize(path))] = text

    def read(self, path: str | PurePath) -> str:
        key = str(_normalize(path))
        if key not in self._files:
            raise ContentNotFoundError(f"Not found in memory source: {key}", str(path))
        return self._files[key]

    def list_dir(self, path: str | PurePath) -> list[PurePosixPath]:
        directory = _normalize(path)
        entries = [PurePosixPath(key) for key in self._files]
        children = sorted(entry for entry in entries if entry.parent == directory)
        if not children and not any(directory in entry.parents for entry in entries):
            raise ContentNotFoundError(f"Directory not found in memory source: {directory}", str(path))
        return children

    def exists(self, path: str | PurePath) -> bool:
        return str(_normalize(path)) in self._files


class ZipSource(ContentSource):
    """Reads the entries of a ZIP archive such as an ``.slx`` model or library file."""

    def __init__(self, archive: str | Path | BinaryIO) -> None:
        try:
            self._zip = zipfile.ZipFile(archive)
        except (zipfile.BadZipFile, OSError) as exc:
            raise ContentSourceError(f"Cannot open archive {archive}: {exc}", str(archive)) from exc

    def close(self) -> None:
        self._zip.close()

    def __enter__(self) -> ZipSource:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def read(self, path: str | PurePath) -> str:
        name = _entry_name(path)
        try:
            data = self._zip.read(name)
        except KeyError:
            raise ContentNotFoundError(f"Entry not found in archive: {name}", str(path)) from None
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ContentSourceError(f"Archive entry is not valid UTF-8: {name}: {exc}", str(path)) from exc

    def list_dir(self, path: str | PurePath) -> list[PurePosixPath]:
        prefix = _entry_name(path)
        if prefix and not prefix.endswith("/"):
            prefix += "/"
        names = [
            name
            for name in self._zip.namelist()
            if name.startswith(prefix) and not name.endswith("/") and "/" not in name[len(prefix) :]
        ]
        if not names:
            raise ContentNotFoundError(f"Directory not found in archive: {prefix}", str(path))
        return sorted(PurePosixPath(name) for name in names)

    def exists(self, path: str | PurePath) -> bool:
        return _entry_name(path) in self._zip.namelist()


# ################
# Implementation
# ################


def _normalize(path: str | PurePath) -> PurePosixPath:
    """Return *path* as a POSIX path with ``.`` segments and backslashes removed."""
    return PurePosixPath(str(path).replace("\\", "/"))


def _entry_name(path: str | PurePath) -> str:
    """Return the archive entry name for *path* (no leading ``./`` or ``/``)."""
    name = str(_normalize(path))
    if name == ".":
        return ""
    return name.lstrip("/")
