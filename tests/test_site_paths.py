"""Output path naming and breadcrumb rendering."""

import pytest

from site_render import compute_path, output_name, render_breadcrumbs
from site_tree import Ancestor

ROOT = Ancestor(name="root", path_segment="")
A = Ancestor(name="a", path_segment="a")
B = Ancestor(name="b", path_segment="b")


# -----------------------------------------------------------------------------
# PATH NAMING
# -----------------------------------------------------------------------------

@pytest.mark.parametrize(
    "name, expected",
    [
        ("README.md", "index.html"),
        ("page.md", "page.html"),
        ("notes", "notes"),
        ("styles.css", "styles.css"),
    ],
)
def test_output_name_rewrites(name: str, expected: str) -> None:
    assert output_name(name) == expected


@pytest.mark.parametrize("chain", [(), (ROOT,), (ROOT, A), (ROOT, A, B)])
def test_readme_always_maps_to_index(chain) -> None:
    path = compute_path(chain, "README.md")
    assert path.endswith("index.html")
    assert path != compute_path(chain, "other.md")


def test_compute_path_skips_root_segment() -> None:
    assert compute_path((ROOT,), "intro.md") == "intro.html"
    assert compute_path((ROOT, A, B), "c.md") == "a/b/c.html"
    assert compute_path((ROOT, A), "README.md") == "a/index.html"


def test_compute_path_for_directory_name() -> None:
    assert compute_path((ROOT, A), "b") == "a/b"


# -----------------------------------------------------------------------------
# BREADCRUMBS
# -----------------------------------------------------------------------------

def test_breadcrumbs_for_nested_file() -> None:
    assert render_breadcrumbs((A, B), "c.md") == (
        '<a href="/a">a</a> / <a href="/a/b">b</a> / <span>c.md</span>'
    )


def test_breadcrumbs_for_directory_readme() -> None:
    assert render_breadcrumbs((A, B), "README.md") == '<a href="/a">a</a> / <span>b</span>'


def test_breadcrumbs_empty_chain() -> None:
    assert render_breadcrumbs((), "README.md") == ""
    assert render_breadcrumbs((), "page.md") == ""


def test_breadcrumbs_with_root_ancestor() -> None:
    assert render_breadcrumbs((ROOT, A), "c.md") == (
        '<a href="/">root</a> / <a href="/a">a</a> / <span>c.md</span>'
    )
    assert render_breadcrumbs((ROOT,), "README.md") == "<span>root</span>"


def test_breadcrumbs_escape_names() -> None:
    chain = (Ancestor(name="R&D", path_segment="R&D"),)
    assert render_breadcrumbs(chain, "<x>.md") == (
        '<a href="/R&amp;D">R&amp;D</a> / <span>&lt;x&gt;.md</span>'
    )
