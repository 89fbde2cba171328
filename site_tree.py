"""
Source tree loading for the markdown site builder.

Walks a content directory (conventionally ``articles/``) and produces an
intermediate tree of SourceFile / SourceDirectory nodes:
- files hold their raw markdown text
- directories hold their optional README.md text plus child nodes
- every node carries its ancestor chain (root first, excluding itself)

Also defines the rendered counterparts and the error hierarchy shared by the
render and write phases.
"""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

logger = logging.getLogger(__name__)

README_NAME = "README.md"
MARKDOWN_SUFFIX = ".md"


# -- errors --
class SiteBuildError(Exception):
    """Fatal build failure tied to a filesystem path."""

    def __init__(self, reason: str, path: Union[str, os.PathLike], cause: Optional[BaseException] = None):
        self.reason = reason
        self.path = Path(path)
        self.cause = cause
        message = f"{reason}: '{self.path}'"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class LoadError(SiteBuildError):
    """Failure while reading the source tree."""


class MetadataReadError(LoadError):
    pass


class DirectoryReadError(LoadError):
    pass


class FileReadError(LoadError):
    pass


class PathCollisionError(SiteBuildError):
    """Two nodes of the same directory map to one output path."""


class WriteError(SiteBuildError):
    """Failure while writing the output tree."""


class IoWriteError(WriteError):
    pass


class DirectoryCreateError(WriteError):
    pass


class AssetCopyError(WriteError):
    pass


class OutputCleanError(WriteError):
    pass


# -- data structures --
@dataclass(frozen=True)
class Ancestor:
    """One directory step above a node: breadcrumb label plus URL segment."""

    name: str
    path_segment: str


@dataclass(frozen=True)
class SourceFile:
    """Markdown file as read from disk."""

    file_name: str
    ancestors: Tuple[Ancestor, ...]
    content: str


@dataclass(frozen=True)
class SourceDirectory:
    """Directory with its optional README.md text and its children."""

    file_name: str
    ancestors: Tuple[Ancestor, ...]
    readme: Optional[str]
    children: Tuple["SourceNode", ...]

    @property
    def is_root(self) -> bool:
        return not self.ancestors

    def as_ancestor(self) -> Ancestor:
        """Ancestor entry this directory contributes to its children."""
        return directory_ancestor(self.file_name, self.ancestors)


SourceNode = Union[SourceFile, SourceDirectory]


@dataclass(frozen=True)
class RenderedFile:
    path: Path
    html: str


@dataclass(frozen=True)
class RenderedDirectory:
    path: Path
    html: str
    children: Tuple["RenderedNode", ...]


RenderedNode = Union[RenderedFile, RenderedDirectory]


def directory_ancestor(name: str, ancestors: Tuple[Ancestor, ...]) -> Ancestor:
    # only the root contributes an empty URL segment
    segment = "" if not ancestors else name
    return Ancestor(name=name, path_segment=segment)


# -- helpers: reading --
def is_markdown_name(name: str) -> bool:
    return name.endswith(MARKDOWN_SUFFIX)


def invalid_name_placeholder(raw_name: str) -> str:
    return f"invalid UTF-8 filename: {raw_name!r}"


def _decode_check(name: str) -> Optional[UnicodeError]:
    """Return the encoding error for names holding undecodable bytes, else None."""
    try:
        name.encode("utf-8")
    except UnicodeEncodeError as exc:
        return exc
    return None


def read_text_file(path: Path) -> str:
    """Read a whole file as UTF-8 text, mapping failures to FileReadError."""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise FileReadError("unable to decode file as UTF-8", path, exc) from exc
    except OSError as exc:
        raise FileReadError("unable to read file", path, exc) from exc


def read_readme(directory: Path) -> Optional[str]:
    """Return the README.md text of a directory, or None if it has none."""
    readme_path = directory / README_NAME
    try:
        mode = os.stat(readme_path).st_mode
    except (FileNotFoundError, NotADirectoryError):
        return None
    except OSError as exc:
        raise MetadataReadError("unable to read metadata", readme_path, exc) from exc
    # a README.md directory is loaded as an ordinary child instead
    if not stat.S_ISREG(mode):
        return None
    return read_text_file(readme_path)


def _list_entries(directory: Path) -> list:
    try:
        with os.scandir(directory) as it:
            entries = list(it)
    except OSError as exc:
        raise DirectoryReadError("unable to read directory", directory, exc) from exc
    entries.sort(key=lambda e: e.name)
    return entries


# -- tree loading --
def load_directory(directory: Path, name: str, ancestors: Tuple[Ancestor, ...] = ()) -> SourceDirectory:
    """Recursively load ``directory`` into a SourceDirectory named ``name``."""
    logger.info('parsing dir:  "%s"', name)
    readme = read_readme(directory)
    entries = _list_entries(directory)

    child_ancestors = ancestors + (directory_ancestor(name, ancestors),)

    children = []
    for entry in entries:
        child = load_entry(entry, child_ancestors)
        if child is not None:
            children.append(child)

    return SourceDirectory(
        file_name=name,
        ancestors=ancestors,
        readme=readme,
        children=tuple(children),
    )


def load_entry(entry: os.DirEntry, ancestors: Tuple[Ancestor, ...]) -> Optional[SourceNode]:
    """Load one directory entry; returns None for entries that are skipped."""
    path = Path(entry.path)

    name_error = _decode_check(entry.name)
    if name_error is not None:
        placeholder = invalid_name_placeholder(entry.name)
        logger.warning("replacing undecodable file name in %r with placeholder", str(path.parent))
        return SourceFile(file_name=placeholder, ancestors=ancestors, content=str(name_error))

    try:
        mode = entry.stat().st_mode
    except OSError as exc:
        raise MetadataReadError("unable to read metadata", path, exc) from exc

    if stat.S_ISDIR(mode):
        return load_directory(path, entry.name, ancestors)

    if entry.name == README_NAME:
        return None

    if not is_markdown_name(entry.name):
        logger.warning('skipping non-markdown file: "%s"', path)
        return None

    logger.info('parsing file: "%s"', entry.name)
    return SourceFile(file_name=entry.name, ancestors=ancestors, content=read_text_file(path))


def load_tree(source_dir: Union[str, os.PathLike], root_title: str = "root") -> SourceDirectory:
    """Load the whole content tree rooted at ``source_dir``.

    The root gets ``root_title`` as its display name and an empty ancestor chain.
    """
    source_dir = Path(source_dir)
    try:
        mode = os.stat(source_dir).st_mode
    except OSError as exc:
        raise DirectoryReadError("source directory not found", source_dir, exc) from exc
    if not stat.S_ISDIR(mode):
        raise DirectoryReadError("source directory not found", source_dir)
    return load_directory(source_dir, root_title)
