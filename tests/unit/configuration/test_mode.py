import pytest

from config.mode import Mode, resolve_mode
from config.settings import Settings


def make_settings(**overrides) -> Settings:
    values = {"ENVIRONMENT": "production", "MOCK_OPENAI": False, "OPENAI_API_KEY": None}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_live_mode_by_default_in_production():
    assert resolve_mode(make_settings()) is Mode.LIVE


def test_mock_flag_selects_mock_mode():
    assert resolve_mode(make_settings(MOCK_OPENAI=True)) is Mode.MOCK


@pytest.mark.parametrize("environment", ["development", "Development"])
def test_development_environment_selects_mock_mode(environment):
    assert resolve_mode(make_settings(ENVIRONMENT=environment)) is Mode.MOCK


def test_api_key_does_not_change_mode():
    assert resolve_mode(make_settings(OPENAI_API_KEY="sk-test")) is Mode.LIVE


def test_shared_env_file_with_client_settings_is_accepted(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("BATCHQUERY_DEMO_MODE=true\nBATCHQUERY_API_BASE_URL=http://localhost:9000\nMOCK_OPENAI=true\n")

    settings = Settings(_env_file=env_file)

    assert not hasattr(settings, "BATCHQUERY_DEMO_MODE")
    assert settings.APP_NAME == "BatchQuery Image Analysis"
