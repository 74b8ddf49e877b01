# -*- coding: utf-8 -*-

import logging
import os

import pytest

from defer.common import config
from defer.common.config import get, load, set


class catchLogging(logging.NullHandler):

    def __init__(self):
        logging.NullHandler.__init__(self)
        self.lastLogRecord = None

    def handle(self, record):
        self.lastLogRecord = record


@pytest.fixture(autouse=True)
def config_file(monkeypatch, tmp_path):
    """Use a temporary config file, and an empty config."""
    config_path = str(tmp_path / 'defer.ini')
    monkeypatch.setattr(config, '_get_config_file_path', lambda: config_path)
    config._config_parser.remove_section('config')
    config._config_parser.add_section('config')
    return config_path


@pytest.fixture
def catcher():
    catcher = catchLogging()
    logger = logging.getLogger()
    logger.addHandler(catcher)
    old_level = logger.level
    logger.setLevel(logging.DEBUG)
    config._logger.setLevel(logging.DEBUG)
    yield catcher
    logger.removeHandler(catcher)
    logger.setLevel(old_level)
    config._logger.setLevel(logging.NOTSET)


class TestConfigLoad(object):

    def test_load_without_existing_file(self, config_file, catcher):
        assert not os.path.exists(config_file)
        load()
        assert catcher.lastLogRecord is not None
        assert catcher.lastLogRecord.levelno == logging.WARNING

    def test_load_with_existing_file(self, config_file):
        with open(config_file, 'w') as f:
            f.write('[config]\ndebug_mode = yes\nlog_file = other.log\n')

        load()
        assert get('debug_mode') is True
        assert get('log_file') == 'other.log'

    def test_load_file_written_by_set(self):
        set('log_file', 'plop.log')
        config._config_parser.remove_section('config')
        config._config_parser.add_section('config')
        assert get('log_file') == 'defer.log'

        load()
        assert get('log_file') == 'plop.log'

    def test_load_invalid_file(self, config_file, catcher):
        with open(config_file, 'w') as f:
            f.write('not an ini file')

        load()
        assert catcher.lastLogRecord.levelno == logging.WARNING
        assert get('debug_mode') is False


class TestConfigGet(object):

    def test_key_does_not_exist(self):
        with pytest.raises(KeyError):
            get('plop')

    def test_default_values(self):
        assert get('debug_mode') is False
        assert get('log_levels') == {}
        assert get('log_file') == 'defer.log'

    def test_default_dict_is_not_shared(self):
        levels = get('log_levels')
        levels['defer'] = 'debug'
        assert get('log_levels') == {}
        assert config._default_config['log_levels']['default'] == {}

    def test_get_a_bool_value(self):
        set('debug_mode', True)
        assert get('debug_mode') is True

        set('debug_mode', 'False')
        assert get('debug_mode') is False

    def test_get_a_bool_with_invalid_value(self, catcher):
        config._config_parser.set('config', 'debug_mode', 'plop')
        assert get('debug_mode') is False
        assert catcher.lastLogRecord is not None

    def test_get_a_dict_value(self):
        set('log_levels', 'aa=bb;cc=dd')
        assert get('log_levels') == {'aa': 'bb', 'cc': 'dd'}

    def test_get_a_dict_with_invalid_pair(self, catcher):
        config._config_parser.set('config', 'log_levels', 'plop;toto=tata')
        assert get('log_levels') == {'toto': 'tata'}
        assert catcher.lastLogRecord is not None


class TestConfigSet(object):

    def test_key_does_not_exist(self):
        with pytest.raises(KeyError):
            set('plop', 42)

    def test_set_a_dict(self):
        set('log_levels', {'defer': 'info', 'defer.promise': 'debug'})
        assert get('log_levels') == {'defer': 'info',
                                     'defer.promise': 'debug'}

    def test_set_a_not_string(self):
        set('log_file', 42)
        assert get('log_file') == '42'

    def test_none_value_reset_to_default(self):
        set('debug_mode', True)
        set('debug_mode', None)
        assert get('debug_mode') is False

    def test_set_writes_the_file(self, config_file):
        set('log_file', 'plop.log')
        set('debug_mode', True)

        with open(config_file) as f:
            content = f.read()
        assert 'log_file = plop.log' in content
        assert 'debug_mode = True' in content
