import os, stat
import pytest
from envseal.lib.files import write_atomic

pytestmark = pytest.mark.skipif(os.name != 'posix', reason='POSIX permissions')

def test_new_file_default_mode(tmp_path):
    p = tmp_path / 'meta.json'
    write_atomic(p, b'{}')
    assert p.read_bytes() == b'{}'
    assert stat.S_IMODE(p.stat().st_mode) == 0o644

def test_existing_mode_kept(tmp_path):
    p = tmp_path / 'meta.json'
    p.write_bytes(b'old')
    os.chmod(p, 0o600)
    write_atomic(p, b'new')
    assert p.read_bytes() == b'new'
    assert stat.S_IMODE(p.stat().st_mode) == 0o600

def test_explicit_mode(tmp_path):
    p = tmp_path / 'key.json'
    write_atomic(p, b'k', mode=0o600)
    assert stat.S_IMODE(p.stat().st_mode) == 0o600

def test_no_temp_files_left(tmp_path):
    p = tmp_path / 'meta.json'
    write_atomic(p, b'a'); write_atomic(p, b'b')
    assert [x.name for x in tmp_path.iterdir()] == ['meta.json']

def test_stale_tmp_name_does_not_collide(tmp_path):
    p = tmp_path / 'meta.json'
    (tmp_path / 'meta.json.tmp').mkdir()
    write_atomic(p, b'ok')
    assert p.read_bytes() == b'ok'
