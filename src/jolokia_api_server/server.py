# src/jolokia_api_server/server.py

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import uvicorn

from .config import DEV_CERT_PATH, DEV_KEY_PATH, Settings, get_settings
from .logging_config import get_logging_config, setup_logging
from .main import create_app

logger = logging.getLogger(__name__)

LISTEN_HOST = "0.0.0.0"
LISTEN_PORT = 9443


class TLSConfigurationError(Exception):
    """Raised when the server key or certificate cannot be used."""


@dataclass(frozen=True)
class TLSMaterials:
    keyfile: Path
    certfile: Path


def _readable(path: Path) -> Path:
    try:
        with path.open("rb") as f:
            f.read(1)
    except OSError as e:
        raise TLSConfigurationError(f"Cannot read {path}: {e}") from e
    return path


def load_tls_materials(settings: Settings) -> TLSMaterials:
    """
    Production reads SERVER_KEY/SERVER_CERT; everything else uses the
    bundled development certificate.
    """
    if settings.is_production:
        logger.info("setting up tls in production mode, cert %s", settings.SERVER_CERT)
        if not settings.SERVER_KEY or not settings.SERVER_CERT:
            raise TLSConfigurationError("Missing cert/key files")
        keyfile, certfile = Path(settings.SERVER_KEY), Path(settings.SERVER_CERT)
    else:
        logger.info("setting up tls using dev certs")
        keyfile, certfile = DEV_KEY_PATH, DEV_CERT_PATH

    return TLSMaterials(keyfile=_readable(keyfile), certfile=_readable(certfile))


def serve(settings: Settings) -> None:
    tls = load_tls_materials(settings)
    app = create_app(settings)

    logger.info("Listening on https://%s:%d", LISTEN_HOST, LISTEN_PORT)
    uvicorn.run(
        app,
        host=LISTEN_HOST,
        port=LISTEN_PORT,
        ssl_keyfile=str(tls.keyfile),
        ssl_certfile=str(tls.certfile),
        log_config=get_logging_config(settings.LOG_LEVEL),
    )


def main() -> None:
    try:
        settings = get_settings()
        setup_logging(settings.LOG_LEVEL)
        logger.info("Starting plugin %s %s", settings.PLUGIN_NAME, settings.PLUGIN_VERSION)
        serve(settings)
    except Exception as e:
        # Logging may not be configured yet if Settings failed to load
        logging.basicConfig()
        logger.error("Error: %s", e, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
