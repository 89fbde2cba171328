"""Write the rendered site to disk and copy static assets next to it."""

from __future__ import annotations

import logging
import os
import shutil
import stat
from pathlib import Path
from typing import Union

from site_render import INDEX_NAME
from site_tree import (
    AssetCopyError,
    DirectoryCreateError,
    IoWriteError,
    OutputCleanError,
    RenderedFile,
    RenderedNode,
)

logger = logging.getLogger(__name__)


# -- output directory lifecycle --
def clean_output(output_root: Union[str, os.PathLike]) -> bool:
    """Remove the output directory tree. Returns False if there was nothing to remove.

    A regular file in place of the output directory is an error, not a cleanup target.
    """
    output_root = Path(output_root)
    if not output_root.exists():
        logger.info("%s/ directory already empty", output_root)
        return False
    if not output_root.is_dir():
        raise OutputCleanError("output path is not a directory", output_root)

    def _handle_remove_readonly(func, path, exc_info):  # Windows: clear read-only then retry
        os.chmod(path, stat.S_IWRITE)
        func(path)

    try:
        shutil.rmtree(output_root, onerror=_handle_remove_readonly)
    except OSError as exc:
        raise OutputCleanError("unable to remove output directory", output_root, exc) from exc
    return True


# -- materializer --
def _write_html(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise IoWriteError("unable to write file", path, exc) from exc


def write_tree(node: RenderedNode) -> None:
    """Recursively write a RenderedNode tree to its computed paths.

    Directories are created with a plain mkdir: an existing directory or a
    missing parent aborts the build.
    """
    logger.info("writing to %s", node.path)
    if isinstance(node, RenderedFile):
        _write_html(node.path, node.html)
        return

    try:
        node.path.mkdir()
    except OSError as exc:
        raise DirectoryCreateError("unable to create directory", node.path, exc) from exc
    _write_html(node.path / INDEX_NAME, node.html)
    for child in node.children:
        write_tree(child)


# -- asset copying --
def copy_tree(source_dir: Union[str, os.PathLike], dest_dir: Union[str, os.PathLike]) -> int:
    """Mirror every entry of ``source_dir`` into ``dest_dir`` byte for byte.

    Existing directories in the destination are merged into; existing files
    are overwritten. Returns the number of files copied.
    """
    source_dir = Path(source_dir)
    dest_dir = Path(dest_dir)
    try:
        with os.scandir(source_dir) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        raise AssetCopyError("unable to read directory", source_dir, exc) from exc

    copied = 0
    for entry in entries:
        src = Path(entry.path)
        dst = dest_dir / entry.name
        try:
            is_dir = entry.is_dir()
        except OSError as exc:
            raise AssetCopyError("unable to read metadata", src, exc) from exc

        if is_dir:
            try:
                dst.mkdir(exist_ok=True)
            except OSError as exc:
                raise AssetCopyError("unable to create directory", dst, exc) from exc
            copied += copy_tree(src, dst)
            continue

        logger.info("copying %s to %s", src, dst)
        try:
            shutil.copyfile(src, dst)
        except OSError as exc:
            raise AssetCopyError("unable to copy file", src, exc) from exc
        copied += 1
    return copied
