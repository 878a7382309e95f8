import json

import pytest

from gamecore.store import JsonStore


def test_missing_file_reads_default(tmp_path):
    store = JsonStore(str(tmp_path / 'nope.json'), {'a': 1})
    data = store.load()
    data['a'] = 2
    # default is never mutated through a loaded copy
    assert store.load() == {'a': 1}


def test_corrupt_file_reads_default(tmp_path):
    path = tmp_path / 'bad.json'
    path.write_text('{not json', encoding='utf-8')
    assert JsonStore(str(path), []).load() == []


def test_save_creates_directory(tmp_path):
    path = tmp_path / 'nested' / 'data' / 'x.json'
    JsonStore(str(path), {}).save({'k': 'v'})
    assert json.loads(path.read_text(encoding='utf-8')) == {'k': 'v'}
    assert not (path.parent / '.tmp_x.json').exists()


def test_update_round_trip(tmp_path):
    store = JsonStore(str(tmp_path / 'x.json'), {})
    with store.update() as data:
        data['n'] = 1
    with store.update() as data:
        data['n'] += 1
    assert store.load() == {'n': 2}


def test_update_not_saved_on_error(tmp_path):
    store = JsonStore(str(tmp_path / 'x.json'), {})
    store.save({'n': 1})
    with pytest.raises(KeyError):
        with store.update() as data:
            data['n'] = 99
            raise KeyError('boom')
    assert store.load() == {'n': 1}


def test_invalid_utf8_reads_default(tmp_path):
    path = tmp_path / 'bin.json'
    path.write_bytes(b'{"1": 5\xff\xfe')
    assert JsonStore(str(path), {}).load() == {}


def test_directory_at_path_reads_default(tmp_path):
    (tmp_path / 'dir.json').mkdir()
    assert JsonStore(str(tmp_path / 'dir.json'), []).load() == []
