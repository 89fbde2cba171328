"""
HTML rendering for the markdown site builder.

Turns the SourceNode tree from ``site_tree`` into a RenderedNode tree:
- output paths follow README.md -> index.html and *.md -> *.html
- every page is wrapped in the page template with breadcrumbs
- directories without a README.md get a generated listing page
"""

from __future__ import annotations

import html
import logging
import re
from pathlib import Path, PurePosixPath
from typing import Dict, Iterable, List, Sequence

import markdown

from site_tree import (
    README_NAME,
    Ancestor,
    PathCollisionError,
    RenderedDirectory,
    RenderedFile,
    RenderedNode,
    SourceDirectory,
    SourceFile,
    SourceNode,
)

logger = logging.getLogger(__name__)

INDEX_NAME = "index.html"
BREADCRUMB_SEPARATOR = " / "

PAGE_TEMPLATE = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <link rel="stylesheet" href="/style.css">
  </head>
  <body>
    <nav class="breadcrumbs">{{breadcrumbs}}</nav>
    <main class="content">
{{content}}
    </main>
  </body>
</html>
"""

DIRECTORY_LIST_TEMPLATE = """<h1>{{name}}</h1>
{{content}}
"""

_PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}")


# -- helpers: templates --
def fill_template(template: str, values: Dict[str, str]) -> str:
    """Substitute ``{{key}}`` placeholders in one pass; unknown keys are left as-is."""

    def _repl(match: re.Match[str]) -> str:
        return values.get(match.group(1), match.group(0))

    return _PLACEHOLDER_RE.sub(_repl, template)


def wrap_page(breadcrumbs: str, content: str) -> str:
    return fill_template(PAGE_TEMPLATE, {"breadcrumbs": breadcrumbs, "content": content})


def wrap_directory(name: str, listing: str) -> str:
    return fill_template(DIRECTORY_LIST_TEMPLATE, {"name": html.escape(name), "content": listing})


def convert_markdown_to_html(md_text: str) -> str:
    """Convert markdown to HTML with minimal extensions."""
    return markdown.markdown(md_text, extensions=["extra", "fenced_code", "tables"])


# -- path naming --
def output_name(file_name: str) -> str:
    """Rewrite a source name to its generated name (README.md -> index.html, .md -> .html)."""
    if file_name.endswith(README_NAME):
        return file_name[: -len(README_NAME)] + INDEX_NAME
    return file_name.replace(".md", ".html", 1)


def compute_path(ancestors: Sequence[Ancestor], file_name: str) -> str:
    """Output-relative path of a node, joined with ``/``.

    Ancestors with an empty path segment (the root) contribute nothing.
    The result doubles as the site URL once prefixed with ``/``.
    """
    segments = [a.path_segment for a in ancestors if a.path_segment]
    segments.append(output_name(file_name))
    return "/".join(segments)


def node_output_name(node: SourceNode) -> str:
    """Generated name of a node; directories keep their own name, matching their children's segment."""
    if isinstance(node, SourceDirectory):
        return node.file_name
    return output_name(node.file_name)


def node_relative_path(node: SourceNode) -> str:
    if isinstance(node, SourceDirectory):
        if node.is_root:
            return ""
        return "/".join([a.path_segment for a in node.ancestors if a.path_segment] + [node.file_name])
    return compute_path(node.ancestors, node.file_name)


def node_url(node: SourceNode) -> str:
    return "/" + node_relative_path(node)


def node_output_path(node: SourceNode, output_root: Path) -> Path:
    return output_root.joinpath(*PurePosixPath(node_relative_path(node)).parts)


# -- breadcrumbs --
def render_breadcrumbs(ancestors: Sequence[Ancestor], current_file_name: str) -> str:
    """Render the breadcrumb trail for a page.

    Every ancestor but the last is a link. The last one is a plain label when
    the page is that directory's own README.md; otherwise it is a link followed
    by a label for the current file.
    """
    parts: List[str] = []
    prefix = ""
    last = len(ancestors) - 1
    for i, ancestor in enumerate(ancestors):
        prefix = prefix.rstrip("/") + "/" + ancestor.path_segment
        name = html.escape(ancestor.name)
        href = html.escape(prefix)
        if i < last:
            parts.append(f'<a href="{href}">{name}</a>')
        elif current_file_name == README_NAME:
            parts.append(f"<span>{name}</span>")
        else:
            parts.append(f'<a href="{href}">{name}</a>')
            parts.append(f"<span>{html.escape(current_file_name)}</span>")
    return BREADCRUMB_SEPARATOR.join(parts)


def directory_breadcrumbs(node: SourceDirectory) -> str:
    """Breadcrumbs for a directory's own page; the root page has none."""
    if node.is_root:
        return ""
    if node.readme is not None:
        return render_breadcrumbs(node.ancestors + (node.as_ancestor(),), README_NAME)
    return render_breadcrumbs(node.ancestors, node.file_name)


# -- directory listing --
def directory_listing_html(children: Iterable[SourceNode]) -> str:
    """Generated ``<ul>`` listing of a directory's children, sorted by name."""
    items = []
    for child in sorted(children, key=lambda c: c.file_name):
        css_class = "directory-listing" if isinstance(child, SourceDirectory) else "file-listing"
        href = html.escape(node_url(child))
        items.append(f'<li class="{css_class}"><a href="{href}">{html.escape(child.file_name)}</a></li>')
    return f"<ul>{''.join(items)}</ul>"


def check_collisions(node: SourceDirectory) -> None:
    """Reject children that would overwrite each other or the directory's index.html."""
    seen: Dict[str, str] = {INDEX_NAME: f"{node.file_name}/{INDEX_NAME}"}
    for child in node.children:
        target = node_output_name(child)
        if target in seen:
            raise PathCollisionError(
                f"'{child.file_name}' collides with '{seen[target]}'",
                node_relative_path(child),
            )
        seen[target] = child.file_name


# -- tree rendering --
def render_tree(node: SourceNode, output_root: Path = Path("build")) -> RenderedNode:
    """Recursively convert a SourceNode tree into a RenderedNode tree."""
    path = node_output_path(node, Path(output_root))

    if isinstance(node, SourceFile):
        logger.debug("rendering file: %s", path)
        breadcrumbs = render_breadcrumbs(node.ancestors, node.file_name)
        return RenderedFile(path=path, html=wrap_page(breadcrumbs, convert_markdown_to_html(node.content)))

    check_collisions(node)
    logger.debug("rendering dir:  %s", path)
    if node.readme is not None:
        content = convert_markdown_to_html(node.readme)
    else:
        content = wrap_directory(node.file_name, directory_listing_html(node.children))

    children = tuple(render_tree(child, output_root) for child in node.children)
    return RenderedDirectory(
        path=path,
        html=wrap_page(directory_breadcrumbs(node), content),
        children=children,
    )
