from pathlib import Path

import pytest

from wasm_test_server.handler import HandlerState, handle, request_path
from wasm_test_server.templates import INDEX_HEADLESS_HTML, INDEX_HTML


@pytest.fixture
def state(tmp_path):
    work = tmp_path / 'work'
    project = tmp_path / 'project'
    work.mkdir()
    project.mkdir()
    (work / 'm.js').write_text('export default function init() {}')
    (work / 'm_bg.wasm').write_bytes(b'\x00asm\x01\x00\x00\x00')
    (project / 'snippets').mkdir()
    (project / 'snippets' / 'helper.js').write_text('export const x = 1;')
    (project / 'notes.txt').write_bytes(b'plain')
    return HandlerState(work_dir=work, project_dir=project)


def test_root_page_depends_on_headless_flag(state):
    interactive = handle(state, '/')
    headless = handle(HandlerState(state.work_dir, state.project_dir, headless=True), '/')
    assert interactive.status == 200
    assert interactive.content_type == 'text/html'
    assert interactive.body == INDEX_HTML.encode('utf-8')
    assert headless.body == INDEX_HEADLESS_HTML.encode('utf-8')
    assert interactive.body != headless.body


def test_templates_load_run_js_and_forward_console():
    for page in (INDEX_HTML, INDEX_HEADLESS_HTML):
        assert 'src="run.js" type="module"' in page
        assert 'on_console_${method}' in page
        assert 'id="output"' in page
    assert 'id="console_log"' in INDEX_HEADLESS_HTML
    assert 'id="console_log"' not in INDEX_HTML


def test_root_ignores_query(state):
    assert handle(state, '/?seed=1').body == INDEX_HTML.encode('utf-8')


def test_serves_file_bytes_with_content_type(state):
    res = handle(state, '/m_bg.wasm')
    assert res.status == 200
    assert res.body == b'\x00asm\x01\x00\x00\x00'
    assert res.content_type == 'application/wasm'

    res = handle(state, '/notes.txt?x=1#frag')
    assert res.body == b'plain'
    assert res.content_type == 'application/octet-stream'


def test_bare_specifier_resolves_to_script(state):
    res = handle(state, '/snippets/helper')
    assert res.status == 200
    assert res.content_type == 'text/javascript'
    assert res.body == b'export const x = 1;'


def test_percent_encoded_paths_are_decoded(state):
    (state.project_dir / 'with space.js').write_text('ok')
    assert handle(state, '/with%20space.js').body == b'ok'


@pytest.mark.parametrize('raw', ['/missing.js', '/missing', 'http://[::1', 'relative.js',
                                 'http://example.com/m.js', '*'])
def test_not_found_is_empty(state, raw):
    res = handle(state, raw)
    assert res.status == 404
    assert res.body == b''
    assert res.content_type is None


def test_repeated_requests_are_identical(state):
    assert handle(state, '/m.js') == handle(state, '/m.js')


def test_request_path():
    assert request_path('/a/b.js?q=1#f') == '/a/b.js'
    assert request_path('http://[::1') is None


def test_state_is_frozen(tmp_path):
    state = HandlerState(work_dir=str(tmp_path))
    assert state.work_dir == tmp_path
    assert state.project_dir == Path('.')
    with pytest.raises(AttributeError):
        state.headless = True
