#!/usr/bin/env python3
"""
Simple HTTP server to preview the generated site.
Run this after building the site so absolute links (/a/b.html) resolve.
"""

from __future__ import annotations

import functools
import http.server
import socketserver
import sys
import webbrowser
from pathlib import Path

from site_config import SiteConfig


def make_handler(site_dir: Path):
    """Request handler class serving files from ``site_dir``."""
    return functools.partial(http.server.SimpleHTTPRequestHandler, directory=str(site_dir))


def serve_site(site_dir=None, port: int = 8000, open_browser: bool = True) -> bool:
    site_path = Path(site_dir) if site_dir is not None else SiteConfig.from_env().out_dir
    if not site_path.is_dir():
        print(f"Site directory '{site_path}' doesn't exist. Run build_static_site.py first.")
        return False

    with socketserver.TCPServer(("", port), make_handler(site_path)) as httpd:
        url = f"http://localhost:{port}"
        print(f"Serving {site_path} at {url}")
        print("Press Ctrl+C to stop")

        if open_browser:
            webbrowser.open(url)

        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            print("\nServer stopped.")
    return True


def main() -> None:
    port = 8000
    if len(sys.argv) > 1:
        try:
            port = int(sys.argv[1])
        except ValueError:
            pass
    serve_site(port=port)


if __name__ == "__main__":
    main()
