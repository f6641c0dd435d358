"""Locate requested assets across the work and project directories."""
from __future__ import annotations

import os
from pathlib import Path

SCRIPT_EXT = '.js'

CONTENT_TYPES = {
    '.js': 'text/javascript',
    '.wasm': 'application/wasm',
    '.html': 'text/html',
}
DEFAULT_CONTENT_TYPE = 'application/octet-stream'


def classify(path) -> str:
    return CONTENT_TYPES.get(Path(path).suffix, DEFAULT_CONTENT_TYPE)


def _readable(candidate: Path) -> Path | None:
    if candidate.is_file() and os.access(candidate, os.R_OK):
        return candidate
    return None


def as_requested(rel: str, root: Path) -> Path | None:
    return _readable(root / rel)


def with_script_ext(rel: str, root: Path) -> Path | None:
    # ES module imports say `from './foo'`, the file on disk is foo.js.
    if Path(rel).suffix:
        return None
    return _readable(root / (rel + SCRIPT_EXT))


STRATEGIES = (as_requested, with_script_ext)


def resolve(requested_path: str, *roots, strategies=STRATEGIES) -> Path | None:
    """Find a readable file for ``requested_path`` under one of ``roots``.

    Each strategy is tried against every root, in order, before the next
    strategy gets a turn. Returns None when nothing matches.
    """
    rel = requested_path.lstrip('/')
    if not rel:
        return None
    for strategy in strategies:
        for root in roots:
            found = strategy(rel, Path(root))
            if found is not None:
                return found
    return None
