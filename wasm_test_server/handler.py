from __future__ import annotations

import os
import urllib.parse
from dataclasses import dataclass, field
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler
from pathlib import Path

from .resolver import classify, resolve
from .templates import root_page

HTML_CONTENT_TYPE = 'text/html'
DISCONNECT_ERRORS = (BrokenPipeError, ConnectionResetError, ConnectionAbortedError)


@dataclass(frozen=True)
class HandlerState:
    """Read-only configuration shared by every worker thread."""
    work_dir: Path
    project_dir: Path = field(default_factory=lambda: Path(os.curdir))
    headless: bool = False

    def __post_init__(self):
        object.__setattr__(self, 'work_dir', Path(self.work_dir))
        object.__setattr__(self, 'project_dir', Path(self.project_dir))

    @property
    def roots(self):
        # Generated artifacts shadow project files of the same name.
        return (self.work_dir, self.project_dir)


@dataclass(frozen=True)
class Response:
    status: int
    body: bytes = b''
    content_type: str | None = None


NOT_FOUND = Response(HTTPStatus.NOT_FOUND)


def request_path(raw: str) -> str | None:
    """Return the decoded path of an origin-form request target, or None."""
    try:
        parts = urllib.parse.urlsplit(raw)
    except ValueError:
        return None
    if parts.scheme or parts.netloc or not parts.path.startswith('/'):
        return None
    return urllib.parse.unquote(parts.path)


def handle(state: HandlerState, raw_path: str) -> Response:
    path = request_path(raw_path)
    if path is None:
        return NOT_FOUND
    if path == '/':
        body = root_page(state.headless).encode('utf-8')
        return Response(HTTPStatus.OK, body, HTML_CONTENT_TYPE)
    found = resolve(path, *state.roots)
    if found is None:
        return NOT_FOUND
    try:
        body = found.read_bytes()
    except OSError:
        return NOT_FOUND
    return Response(HTTPStatus.OK, body, classify(found))


class WasmTestRequestHandler(BaseHTTPRequestHandler):
    # Set to True by main() to get the stock http.server access log on stderr.
    access_log = False

    def __init__(self, *args, state: HandlerState, **kwargs):
        self.state = state
        super().__init__(*args, **kwargs)

    def log_message(self, format, *args):
        if self.access_log:
            super().log_message(format, *args)

    def _respond(self, include_body=True):
        res = handle(self.state, self.path)
        try:
            self.send_response(res.status)
            if res.content_type:
                self.send_header('Content-Type', res.content_type)
            self.send_header('Content-Length', str(len(res.body)))
            self.send_header('Connection', 'close')
            self.end_headers()
            if include_body and res.body:
                self.wfile.write(res.body)
        except DISCONNECT_ERRORS:
            pass

    def do_HEAD(self):  # noqa: N802
        self._respond(include_body=False)

    def do_GET(self):  # noqa: N802
        self._respond()

    def __getattr__(self, name):
        # Any other method (POST, TRACE, FOO, ...) is just another asset lookup.
        if name.startswith('do_'):
            return self.do_GET
        raise AttributeError(name)
