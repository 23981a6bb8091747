import uvicorn

from urlshortener.core.config import ENV_PROD, settings
from urlshortener.core.logging_config import configure_logging


def run():
    logger = configure_logging(settings.log_level)

    ssl_options = {}
    if settings.ENV == ENV_PROD:
        if not (settings.TLS_CERT_FILE and settings.TLS_KEY_FILE):
            raise SystemExit("TLS_CERT_FILE and TLS_KEY_FILE are required when ENV=prod")
        ssl_options = {"ssl_certfile": settings.TLS_CERT_FILE, "ssl_keyfile": settings.TLS_KEY_FILE}

    logger.info(f"Serving on {settings.HOST}:{settings.PORT} (env={settings.ENV}, tls={bool(ssl_options)})")
    uvicorn.run(
        "urlshortener.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
        **ssl_options,
    )


if __name__ == "__main__":
    run()
