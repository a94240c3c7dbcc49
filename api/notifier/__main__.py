"""Run the notifier under uvicorn: ``python -m notifier``."""

import logging

import uvicorn

from notifier.config import settings


def main() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger = logging.getLogger("notifier")
    logger.info("Starting %s on %s:%d", settings.app_name, settings.host, settings.port)
    logger.info(
        "Discord delivery %s (token present: %s, channel present: %s)",
        "enabled" if settings.enable_discord else "disabled",
        bool(settings.discord_token),
        bool(settings.discord_channel_id),
    )

    uvicorn.run(
        "notifier.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        timeout_graceful_shutdown=settings.shutdown_timeout,
        log_config=None,
    )
    logger.info("Server stopped")


if __name__ == "__main__":
    main()
