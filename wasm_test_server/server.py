from __future__ import annotations

from functools import partial
from http.server import ThreadingHTTPServer

from .bootstrap import write_bootstrap
from .handler import HandlerState, WasmTestRequestHandler


class StartupError(RuntimeError):
    """The bootstrap script could not be written or the socket not bound."""


class TestServer:
    """A bound server that has not started serving yet."""

    __test__ = False  # not a pytest test class

    def __init__(self, httpd: ThreadingHTTPServer, state: HandlerState):
        self.httpd = httpd
        self.state = state

    @property
    def server_addr(self) -> tuple[str, int]:
        host, port = self.httpd.server_address[:2]
        return host, port

    @property
    def url(self) -> str:
        host, port = self.server_addr
        return f"http://{host}:{port}"

    def run(self):
        """Accept connections until the process exits (or close() is called)."""
        self.httpd.serve_forever()

    def close(self):
        self.httpd.shutdown()
        self.httpd.server_close()


def spawn(addr, headless: bool, module: str, work_dir, args, tests,
          project_dir=None) -> TestServer:
    """Write run.js into ``work_dir`` and bind a server at ``addr``.

    ``addr`` is a ``(host, port)`` pair; port 0 picks a free port, read it
    back from ``server_addr``. Invalid module or test names raise
    InvalidNameError, filesystem and socket failures raise StartupError.
    """
    try:
        write_bootstrap(work_dir, module, args, tests)
    except OSError as e:
        raise StartupError(f"failed to write JS file: {e}") from e

    if project_dir is None:
        state = HandlerState(work_dir=work_dir, headless=headless)
    else:
        state = HandlerState(work_dir=work_dir, project_dir=project_dir, headless=headless)
    try:
        httpd = ThreadingHTTPServer(addr, partial(WasmTestRequestHandler, state=state))
    except OSError as e:
        raise StartupError(f"failed to bind {addr}: {e}") from e
    httpd.daemon_threads = True
    return TestServer(httpd, state)
