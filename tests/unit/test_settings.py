"""
Unit Tests for configuration loading and the logs manager
"""

import pytest

from config.settings import load_settings
from constants import PortalDefaults
from storage.logs_manager import LogsManager

@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ('LANDLORD_EMAIL', 'SUBMIT_REDIRECT_DELAY', 'APPLICATIONS_COLLECTION',
                 'UPLOAD_PREFIX', 'OBJECT_STORE_DIR', 'PUBLIC_BASE_URL', 'LOG_LEVEL'):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv('DATA_DIR', str(tmp_path / 'data'))
    # Keep a developer's .env out of the picture
    monkeypatch.setattr('config.settings.load_dotenv', lambda: None)
    return tmp_path

def test_defaults(clean_env):
    settings = load_settings()

    assert settings['portal']['landlord_email'] == PortalDefaults.LANDLORD_EMAIL
    assert settings['portal']['redirect_delay'] == 2.0
    assert settings['portal']['collection'] == 'applications'
    assert (clean_env / 'data' / 'logs').is_dir()
    assert (clean_env / 'data' / 'uploads').is_dir()

def test_overrides(clean_env, monkeypatch):
    monkeypatch.setenv('LANDLORD_EMAIL', ' owner@example.com ')
    monkeypatch.setenv('SUBMIT_REDIRECT_DELAY', '0.5')
    monkeypatch.setenv('PUBLIC_BASE_URL', 'https://files.example.com/')

    settings = load_settings()

    assert settings['portal']['landlord_email'] == 'owner@example.com'
    assert settings['portal']['redirect_delay'] == 0.5
    assert settings['providers']['public_base_url'] == 'https://files.example.com'

@pytest.mark.parametrize("raw, expected", [("-3", 0.0), ("soon", 2.0)])
def test_invalid_redirect_delay(clean_env, monkeypatch, capsys, raw, expected):
    monkeypatch.setenv('SUBMIT_REDIRECT_DELAY', raw)

    settings = load_settings()

    assert settings['portal']['redirect_delay'] == expected
    assert "[Settings] WARNING:" in capsys.readouterr().out

def test_malformed_landlord_email_falls_back(clean_env, monkeypatch):
    monkeypatch.setenv('LANDLORD_EMAIL', 'nobody')
    assert load_settings()['portal']['landlord_email'] == PortalDefaults.LANDLORD_EMAIL

async def test_logs_manager_writes_daily_file(test_settings):
    logs = LogsManager(test_settings)
    await logs.initialize()
    await logs.info("[Test] hello")
    await logs.shutdown()

    assert logs.log_file.name.startswith("portal_")
    assert logs.log_file.exists()
    assert not logs.is_initialized
