import os

import calpod
import pytest

from calpod.__main__ import parse_arguments, settings


def test_defaults(tmp_path):

    environ = {'HOME': str(tmp_path)}
    found = calpod.config.Settings.from_environment(environ)

    assert found.log_level == 'WARNING'
    assert found.grant_access == True
    assert found.chunk == 1
    assert found.data_file.endswith(os.path.join('.calpod', 'calendars.json'))


def test_environment(tmp_path):

    environ = dict()
    environ['CALPOD_LOG_LEVEL'] = 'debug'
    environ['CALPOD_DATA'] = str(tmp_path / 'elsewhere.json')
    environ['CALPOD_ACCESS'] = 'DENY'
    environ['CALPOD_CHUNK'] = '16'

    found = calpod.config.Settings.from_environment(environ)

    assert found.log_level == 'DEBUG'
    assert found.data_file == str(tmp_path / 'elsewhere.json')
    assert found.grant_access == False
    assert found.chunk == 16


def test_home(tmp_path):

    environ = {'CALPOD_HOME': str(tmp_path)}
    found = calpod.config.Settings.from_environment(environ)

    assert found.data_file == os.path.join(str(tmp_path), 'calendars.json')
    assert calpod.config.directory(environ=environ) == str(tmp_path)


def test_bad_environment():

    with pytest.raises(ValueError):
        calpod.config.Settings.from_environment({'CALPOD_ACCESS': 'maybe', 'CALPOD_HOME': '/tmp'})

    with pytest.raises(ValueError):
        calpod.config.Settings.from_environment({'CALPOD_CHUNK': '0', 'CALPOD_HOME': '/tmp'})


def test_directory_is_not_created(tmp_path):

    target = tmp_path / 'later'
    assert calpod.config.directory(environ={'CALPOD_HOME': str(target)}) == str(target)
    assert not target.exists()


def test_chunk_must_be_integer():

    with pytest.raises(ValueError) as caught:
        calpod.config.Settings.from_environment({'CALPOD_CHUNK': 'lots', 'CALPOD_HOME': '/tmp'})

    assert 'CALPOD_CHUNK' in str(caught.value)


def test_arguments_override(tmp_path, monkeypatch):

    monkeypatch.setenv('CALPOD_HOME', str(tmp_path))
    monkeypatch.setenv('CALPOD_ACCESS', 'grant')
    monkeypatch.delenv('CALPOD_DATA', raising=False)

    arguments = parse_arguments(['--log-level', 'info', '--deny-access', '--chunk', '8', '--data', '/x/y.json'])
    found = settings(arguments)

    assert found.log_level == 'INFO'
    assert found.grant_access == False
    assert found.chunk == 8
    assert found.data_file == '/x/y.json'

    arguments = parse_arguments(['--memory', '--data', '/x/y.json'])
    found = settings(arguments)
    assert found.data_file is None

    with pytest.raises(ValueError):
        settings(parse_arguments(['--chunk', '0']))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
