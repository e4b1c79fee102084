import pytest

from flightstates import config as config_module
from flightstates.config import DEFAULT_BASE_URL, OpenSkyConfig, load_config

ENV_VARS = (
    'OPENSKY_CLIENT_ID',
    'OPENSKY_CLIENT_SECRET',
    'OPENSKY_BASE_URL',
    'OPENSKY_TIMEOUT_SECONDS',
    'FLIGHTSTATES_DEBUG',
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        # setenv first so teardown also removes values loaded from a .env file
        monkeypatch.setenv(name, '')
        monkeypatch.delenv(name)

    # Only read .env files the test names explicitly
    real_load_dotenv = config_module.load_dotenv
    monkeypatch.setattr(
        config_module,
        'load_dotenv',
        lambda dotenv_path=None: dotenv_path is not None and real_load_dotenv(dotenv_path),
    )
    return monkeypatch


def test_defaults(clean_env):
    config = load_config()

    assert config.opensky == OpenSkyConfig()
    assert config.opensky.base_url == DEFAULT_BASE_URL
    assert config.opensky.timeout_seconds == 30.0
    assert not config.opensky.is_authenticated
    assert config.opensky.rate_limit_seconds == 10
    assert config.debug is False


def test_reads_environment(clean_env):
    clean_env.setenv('OPENSKY_CLIENT_ID', 'alice')
    clean_env.setenv('OPENSKY_CLIENT_SECRET', 's3cret')
    clean_env.setenv('OPENSKY_BASE_URL', 'https://example.test/api')
    clean_env.setenv('OPENSKY_TIMEOUT_SECONDS', '12.5')
    clean_env.setenv('FLIGHTSTATES_DEBUG', '1')

    config = load_config()

    assert config.opensky.client_id == 'alice'
    assert config.opensky.base_url == 'https://example.test/api'
    assert config.opensky.timeout_seconds == 12.5
    assert config.opensky.is_authenticated
    assert config.opensky.rate_limit_seconds == 5
    assert config.debug is True


def test_empty_credentials_are_unset(clean_env):
    clean_env.setenv('OPENSKY_CLIENT_ID', '')
    clean_env.setenv('OPENSKY_CLIENT_SECRET', 's3cret')

    config = load_config()

    assert config.opensky.client_id is None
    assert not config.opensky.is_authenticated


def test_reads_dotenv_file(clean_env, tmp_path):
    dotenv_path = tmp_path / '.env'
    dotenv_path.write_text(
        'OPENSKY_CLIENT_ID=bob\n'
        'OPENSKY_CLIENT_SECRET=hunter2\n'
        'OPENSKY_TIMEOUT_SECONDS=7\n'
    )

    config = load_config(dotenv_path=str(dotenv_path))

    assert config.opensky.client_id == 'bob'
    assert config.opensky.client_secret == 'hunter2'
    assert config.opensky.timeout_seconds == 7.0
    assert config.opensky.is_authenticated


def test_environment_wins_over_dotenv_file(clean_env, tmp_path):
    dotenv_path = tmp_path / '.env'
    dotenv_path.write_text('OPENSKY_CLIENT_ID=bob\n')
    clean_env.setenv('OPENSKY_CLIENT_ID', 'alice')

    assert load_config(dotenv_path=str(dotenv_path)).opensky.client_id == 'alice'
