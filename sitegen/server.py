from __future__ import annotations

import functools
import sys
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

from .config import Settings
from .utils import SiteError


class SiteRequestHandler(SimpleHTTPRequestHandler):
    index_path = "/index.html"

    def send_head(self):
        # the site root always maps to the generated index page
        path, sep, query = self.path.partition("?")
        if path == "/":
            self.path = self.index_path + sep + query
        return super().send_head()


class SiteServer(ThreadingHTTPServer):
    daemon_threads = True
    allow_reuse_port = False


def make_server(directory: Path, host: str, port: int) -> SiteServer:
    handler = functools.partial(SiteRequestHandler, directory=str(directory))
    try:
        return SiteServer((host, port), handler)
    except OSError as exc:
        raise SiteError(f"Cannot listen on {host or '*'}:{port}: {exc}") from exc


def serve(settings: Settings) -> None:
    output_dir = settings.output_dir
    if not output_dir.is_dir():
        print(f"Output directory not found: {output_dir}. Run generate first.", file=sys.stderr)
    httpd = make_server(output_dir, settings.host, settings.port)
    with httpd:
        print(f"Serving files from {output_dir}/ on http://localhost:{httpd.server_address[1]}")
        print("Press Ctrl+C to stop")
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            print("\nServer stopped.")
