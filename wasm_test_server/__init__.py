"""Serve a wasm-bindgen test module to a real browser.

The server hands out a canned index page, a generated ``run.js`` that drives
the requested tests, and whatever artifacts the page imports from the work
directory or the project directory.
"""
from .bootstrap import InvalidNameError, generate, write_bootstrap
from .handler import HandlerState, Response
from .resolver import classify, resolve
from .server import StartupError, TestServer, spawn

__all__ = [
    'HandlerState', 'InvalidNameError', 'Response', 'StartupError',
    'TestServer', 'classify', 'generate', 'resolve', 'spawn',
    'write_bootstrap',
]
