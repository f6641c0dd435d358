"""Generate ``run.js``, the module that drives a test run in the browser.

The script imports the compiled test module, installs the console hooks the
index page forwards to, hands the runtime arguments to the test context and
runs the requested tests in the order given.
"""
from __future__ import annotations

import json
import re
from pathlib import Path
from string import Template

BOOTSTRAP_NAME = 'run.js'
WASM_EXT = '.wasm'
CONSOLE_LEVELS = ('debug', 'log', 'info', 'warn', 'error')

_MODULE_RE = re.compile(r'[A-Za-z0-9_-][A-Za-z0-9_.-]*')
_IDENT_RE = re.compile(r'[A-Za-z_$][A-Za-z0-9_$]*')

_PRELUDE = Template("""\
import {
    WasmBindgenTestContext as Context,
$hook_imports
    default as init,
} from './$module';

// JS is running, so the wasm module is being fetched asynchronously now.
document.getElementById('output').textContent = "Loading wasm module...";

async function main(test) {
    const wasm = await init('./$binary');

    const cx = new Context();
$hook_installs

    // Runtime arguments, mostly test filters.
    cx.args($args);

    await cx.run(test.map(s => wasm[s]));
}

const tests = [];
""")


class InvalidNameError(ValueError):
    pass


def _check(kind: str, value: str, pattern: re.Pattern) -> str:
    if not isinstance(value, str) or not pattern.fullmatch(value):
        raise InvalidNameError(f"invalid {kind} name: {value!r}")
    return value


def generate(module: str, args, tests) -> str:
    module = _check('module', module, _MODULE_RE)
    tests = [_check('test', name, _IDENT_RE) for name in tests]
    script = _PRELUDE.substitute(
        module=module,
        binary=f"{module}_bg{WASM_EXT}",
        hook_imports='\n'.join(f"    __wbgtest_console_{lvl}," for lvl in CONSOLE_LEVELS),
        hook_installs='\n'.join(
            f"    window.on_console_{lvl} = __wbgtest_console_{lvl};" for lvl in CONSOLE_LEVELS),
        args=json.dumps([str(a) for a in args], separators=(',', ':')),
    )
    lines = [script]
    lines.extend(f"tests.push('{name}');\n" for name in tests)
    lines.append('main(tests);\n')
    return ''.join(lines)


def write_bootstrap(work_dir, module: str, args, tests) -> Path:
    """Write ``run.js`` into ``work_dir`` and return its path.

    Name errors surface before anything touches the disk; OSError from the
    write propagates to the caller.
    """
    text = generate(module, args, tests)
    path = Path(work_dir) / BOOTSTRAP_NAME
    path.write_text(text, encoding='utf-8')
    return path
