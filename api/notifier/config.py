import sys

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 8080

    app_name: str = "Seerr Notifier"
    log_level: str = "INFO"

    # Discord delivery
    enable_discord: bool = True
    discord_token: str = ""
    discord_channel_id: str = ""
    discord_api_url: str = "https://discord.com/api/v10"
    discord_timeout: float = 10

    # User mapping store
    database_url: str = "sqlite+aiosqlite:///./data/userdb.sqlite"
    auto_create_tables: bool = True

    # Grace period for in-flight requests on shutdown (seconds)
    shutdown_timeout: int = 15

    max_body_size: int = 1024 * 1024

    model_config = {"env_file": ".env", "extra": "ignore"}

    def missing_discord_settings(self) -> list[str]:
        """Names of the variables required for Discord delivery that are unset."""
        if not self.enable_discord:
            return []
        missing = []
        if not self.discord_token:
            missing.append("DISCORD_TOKEN")
        if not self.discord_channel_id:
            missing.append("DISCORD_CHANNEL_ID")
        return missing


settings = Settings()

_missing = settings.missing_discord_settings()
if _missing:
    print(
        f"FATAL: {', '.join(_missing)} must be set when ENABLE_DISCORD is true. Refusing to start.",
        file=sys.stderr,
    )
    sys.exit(1)
