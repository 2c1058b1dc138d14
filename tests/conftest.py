import pytest

from md5kit.util.config import reset_config


@pytest.fixture(autouse = True)
def fresh_config(monkeypatch):
    # settings are cached per process; keep tests independent of the caller's environment
    for key in ('MD5KIT_CHUNK_SIZE', 'MD5KIT_LOG_LEVEL', 'MD5KIT_LOG_COLOR'):
        monkeypatch.delenv(key, raising = False)
    reset_config()
    yield
    reset_config()
