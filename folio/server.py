"""Static file server for Folio.

Serves the generated output directory as it is on disk. A request path maps
to the file with the same base name inside the output directory, and the root
path serves ``index.html``. Nothing is rendered or rewritten on the way out.

Key classes:
- SiteServer: Binds and runs the HTTP server.
- _OutputHandler: Request handler restricted to the output directory.
"""

from __future__ import annotations

import functools
import logging
import posixpath
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from urllib.parse import unquote, urlsplit

logger = logging.getLogger(__name__)

INDEX_PAGE = "index.html"


def resolve_request_path(output_dir: Path, request_path: str) -> Path:
    """Map a request path to a file inside the output directory.

    Only the last path segment is used, so requests can never reach outside
    the output directory.

    Examples:
        >>> resolve_request_path(Path("output"), "/about.md.html")
        PosixPath('output/about.md.html')

        >>> resolve_request_path(Path("output"), "/")
        PosixPath('output/index.html')
    """
    path = unquote(urlsplit(request_path).path)
    name = posixpath.basename(path.rstrip("/"))
    if name in ("", ".", ".."):
        name = INDEX_PAGE
    return output_dir / name


class _OutputHandler(SimpleHTTPRequestHandler):
    """Serves files from the output directory by base name."""

    def end_headers(self):
        self.send_header("Cache-Control", "no-cache, no-store, must-revalidate")
        super().end_headers()

    def translate_path(self, path):
        return str(resolve_request_path(Path(self.directory), path))

    def list_directory(self, path):
        # Directory listings are never exposed.
        self.send_error(404, "File not found")
        return None

    def log_message(self, format, *args):
        logger.info("%s - %s", self.address_string(), format % args)


class SiteServer:
    """HTTP server for a generated site.

    Attributes:
        output_dir: Directory being served.
        host: Interface to bind.
        port: Port to bind.
    """

    def __init__(self, output_dir: Path, port: int = 8080, host: str = ""):
        self.output_dir = output_dir
        self.port = port
        self.host = host
        self._httpd: ThreadingHTTPServer | None = None

    def make_server(self) -> ThreadingHTTPServer:
        handler = functools.partial(_OutputHandler, directory=str(self.output_dir))
        self._httpd = ThreadingHTTPServer((self.host, self.port), handler)
        return self._httpd

    @property
    def url(self) -> str:
        return f"http://localhost:{self.port}"

    def serve_forever(self) -> None:  # pragma: no cover - integration path
        httpd = self._httpd or self.make_server()
        logger.info("Serving %s at %s", self.output_dir, self.url)
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            logger.info("Stopping server")
        finally:
            self.stop()

    def stop(self) -> None:
        if self._httpd is not None:
            self._httpd.server_close()
            self._httpd = None
