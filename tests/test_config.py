import io
import logging

import pytest

from md5kit.util.config import load_config, get_config
from md5kit.util.log import ColorFormatter, setup_logging, RD, X


def test_defaults():
    config = load_config(env = {})
    assert config == {'chunk_size': 4096, 'log_level': 'WARNING', 'log_color': True}


def test_yaml_overlay(tmp_path):
    p = tmp_path / 'md5kit.yaml'
    p.write_text('chunk_size: 512\nlog_level: debug\n', encoding = 'utf-8')
    config = load_config(p, env = {})
    assert config['chunk_size'] == 512
    assert config['log_level'] == 'DEBUG'
    assert config['log_color'] is True


def test_env_overrides_file(tmp_path):
    p = tmp_path / 'md5kit.yaml'
    p.write_text('chunk_size: 512\n', encoding = 'utf-8')
    config = load_config(p, env = {'MD5KIT_CHUNK_SIZE': '64', 'MD5KIT_LOG_COLOR': 'off'})
    assert config['chunk_size'] == 64
    assert config['log_color'] is False


def test_empty_file_keeps_defaults(tmp_path):
    p = tmp_path / 'empty.yaml'
    p.write_text('', encoding = 'utf-8')
    assert load_config(p, env = {}) == load_config(env = {})


@pytest.mark.parametrize('text', [
    'unknown_key: 1\n',
    'chunk_size: 0\n',
    'chunk_size: lots\n',
    '- not\n- a mapping\n',
])
def test_invalid_files(tmp_path, text):
    p = tmp_path / 'bad.yaml'
    p.write_text(text, encoding = 'utf-8')
    with pytest.raises(ValueError):
        load_config(p, env = {})


def test_invalid_env_boolean():
    with pytest.raises(ValueError):
        load_config(env = {'MD5KIT_LOG_COLOR': 'maybe'})


def test_log_level_validated_at_load(tmp_path):
    with pytest.raises(ValueError, match = 'log_level'):
        load_config(env = {'MD5KIT_LOG_LEVEL': 'verbose'})

    p = tmp_path / 'md5kit.yaml'
    p.write_text('log_level: loud\n', encoding = 'utf-8')
    with pytest.raises(ValueError, match = 'log_level'):
        load_config(p, env = {})

    assert load_config(env = {'MD5KIT_LOG_LEVEL': ' error '})['log_level'] == 'ERROR'


def test_malformed_yaml_names_file(tmp_path):
    p = tmp_path / 'broken.yaml'
    p.write_text('chunk_size: [1, 2\n', encoding = 'utf-8')
    with pytest.raises(ValueError, match = 'broken.yaml'):
        load_config(p, env = {})


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / 'absent.yaml', env = {})


def test_get_config_is_cached():
    assert get_config() is get_config()


def test_setup_logging_plain():
    stream = io.StringIO()
    logger = setup_logging(level = 'INFO', color = False, stream = stream)
    logging.getLogger('md5kit.engine.md5').info('hello')
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert 'INFO - hello' in stream.getvalue()


def test_setup_logging_replaces_handler():
    setup_logging(stream = io.StringIO())
    logger = setup_logging(stream = io.StringIO())
    assert len(logger.handlers) == 1


def test_color_formatter():
    record = logging.LogRecord('md5kit', logging.ERROR, __file__, 1, 'boom', None, None)
    text = ColorFormatter('%(levelname)s %(message)s').format(record)
    assert text == f'{RD}ERROR{X} boom'
    assert record.levelname == 'ERROR'
