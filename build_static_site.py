#!/usr/bin/env python3
"""
Static site generator for a directory tree of markdown files.

Features:
- Converts every .md file under the source directory to a .html page
- README.md becomes the directory's index.html; directories without one get a
  generated listing page
- Breadcrumb navigation on every page, following the directory structure
- Copies the static assets folder (public/) verbatim into the output

Usage:
  python build_static_site.py
  OUT_DIR=site ROOT_TITLE=Home python build_static_site.py --source articles

Notes:
- The output directory is removed and rebuilt from scratch on every run
- Requires the "markdown" package: pip install markdown
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from site_config import SiteConfig, configure_logging
from site_render import render_tree
from site_tree import SiteBuildError, load_tree
from site_write import clean_output, copy_tree, write_tree

logger = logging.getLogger(__name__)


# -- build phases --
def build_site(config: SiteConfig) -> None:
    """Run clean, load, render, write and copy in order; raises SiteBuildError on failure."""
    out_dir = config.out_dir

    logger.info("cleaning %s/ directory", out_dir)
    clean_output(out_dir)

    logger.info("parsing markdown")
    source_root = load_tree(config.source_dir, config.root_title)

    logger.info("compiling to html")
    rendered_root = render_tree(source_root, out_dir)

    write_tree(rendered_root)

    if config.assets_dir.is_dir():
        logger.info("copying contents of %s/ to %s/", config.assets_dir, out_dir)
        copy_tree(config.assets_dir, out_dir)
    else:
        logger.warning("assets directory %s/ not found; skipping copy", config.assets_dir)

    logger.info("done")


# -- CLI --
def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a static HTML site from a directory of markdown files.")
    parser.add_argument("--source", type=Path, default=None, help="Markdown source directory (env SOURCE_DIR, default: articles)")
    parser.add_argument("--assets", type=Path, default=None, help="Static assets directory (env ASSETS_DIR, default: public)")
    parser.add_argument("--output", type=Path, default=None, help="Output directory (env OUT_DIR, default: build)")
    parser.add_argument("--root-title", type=str, default=None, help="Display name of the root directory (env ROOT_TITLE, default: root)")
    parser.add_argument("--log-level", type=str.upper, default=None, help="Logging level (env LOG_LEVEL, default: INFO)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    config = SiteConfig.from_env().with_overrides(
        source_dir=args.source,
        assets_dir=args.assets,
        out_dir=args.output,
        root_title=args.root_title,
        log_level=args.log_level,
    )
    configure_logging(config.log_level)

    try:
        build_site(config)
    except SiteBuildError as exc:
        logger.error("build failed: %s", exc)
        raise SystemExit(f"build failed: {exc}") from exc

    print(f"Site generated at: {config.out_dir.resolve()}")


if __name__ == "__main__":
    main()
