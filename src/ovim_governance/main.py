"""OVIM governance main entry point."""

import uvicorn

from .config.logging_config import LoggingConfig
from .config.settings import get_settings

# Configure logging based on environment
LoggingConfig.configure()

logger = LoggingConfig.get_logger(__name__)


def main() -> None:
    """Run the application."""
    from .app import create_app

    settings = get_settings()
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
        access_log=True,
        log_config=None,
        ssl_certfile=settings.tls_cert_file,
        ssl_keyfile=settings.tls_key_file,
    )


if __name__ == "__main__":
    main()
