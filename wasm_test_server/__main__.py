"""Serve a compiled wasm test module to a browser.
Usage: python -m wasm_test_server my_tests --work-dir target/wbg --test test_a --test test_b
       python -m wasm_test_server my_tests --work-dir target/wbg --headless -- --filter foo
"""
from __future__ import annotations

import argparse
import os
import sys

from .bootstrap import InvalidNameError
from .handler import WasmTestRequestHandler
from .server import StartupError, spawn

DEFAULT_HOST = '127.0.0.1'
DEFAULT_PORT = 0


def parse_args(argv=None):
    ap = argparse.ArgumentParser(prog='wasm_test_server')
    ap.add_argument('module', help='Base name of the wasm-bindgen output, e.g. my_tests')
    ap.add_argument('--test', dest='tests', action='append', default=[],
                    help='Test export to run; repeat to run several, in order')
    ap.add_argument('--work-dir', required=True,
                    help='Directory holding the wasm artifacts; run.js is written here')
    ap.add_argument('--project-dir', default=os.curdir,
                    help='Secondary directory to serve files from when not found in --work-dir')
    ap.add_argument('--headless', action='store_true',
                    help='Mirror console output into the page for scraping')
    ap.add_argument('--host', default=os.getenv('WASM_TEST_SERVER_HOST') or DEFAULT_HOST)
    # A string default goes through type=int too, so a bad env value is a usage error.
    ap.add_argument('--port', type=int,
                    default=os.getenv('WASM_TEST_SERVER_PORT') or DEFAULT_PORT)
    ap.add_argument('--verbose', action='store_true', help='Log every request to stderr')
    # Everything after a bare -- is forwarded to the test harness untouched.
    argv = list(sys.argv[1:] if argv is None else argv)
    runtime_args = []
    if '--' in argv:
        split = argv.index('--')
        argv, runtime_args = argv[:split], argv[split + 1:]
    a = ap.parse_args(argv)
    a.runtime_args = runtime_args
    return a


def main(argv=None):
    a = parse_args(argv)
    work_dir = os.path.abspath(a.work_dir)
    if not os.path.isdir(work_dir):
        raise SystemExit(f"Missing work dir '{work_dir}'. Build the test module first.")
    project_dir = os.path.abspath(a.project_dir)
    if a.verbose:
        WasmTestRequestHandler.access_log = True
    try:
        server = spawn((a.host, a.port), a.headless, a.module, work_dir,
                       a.runtime_args, a.tests, project_dir=project_dir)
    except (InvalidNameError, StartupError) as e:
        raise SystemExit(str(e))
    print(f"Serving {work_dir} (fallback: {project_dir}) on {server.url}")
    try:
        server.run()
    except KeyboardInterrupt:
        print('\nStop')
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
