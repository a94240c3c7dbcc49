from notifier.config import Settings


def test_discord_settings_required_when_enabled():
    cfg = Settings(_env_file=None, enable_discord=True, discord_token="", discord_channel_id="")

    assert cfg.missing_discord_settings() == ["DISCORD_TOKEN", "DISCORD_CHANNEL_ID"]


def test_partial_discord_settings():
    cfg = Settings(_env_file=None, enable_discord=True, discord_token="abc", discord_channel_id="")

    assert cfg.missing_discord_settings() == ["DISCORD_CHANNEL_ID"]


def test_nothing_required_when_disabled():
    cfg = Settings(_env_file=None, enable_discord=False)

    assert cfg.missing_discord_settings() == []


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "9090")
    monkeypatch.setenv("ENABLE_DISCORD", "0")
    monkeypatch.setenv("SHUTDOWN_TIMEOUT", "30")

    cfg = Settings(_env_file=None)

    assert cfg.port == 9090
    assert cfg.enable_discord is False
    assert cfg.shutdown_timeout == 30
