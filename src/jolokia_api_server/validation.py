# src/jolokia_api_server/validation.py

import logging
from typing import Optional

from .config import Settings

logger = logging.getLogger(__name__)

VALID_SCHEMES = ("http", "https")
MIN_PORT = 1
MAX_PORT = 65535


class InputValidator:
    """
    Checks the Jolokia connection parameters submitted at login.

    Host and scheme are only restricted in production mode. The port is
    always checked. Each method returns the accepted value, or None after
    logging a warning.
    """

    def __init__(self, settings: Settings):
        self.production = settings.is_production
        self.host_marker = settings.PRODUCTION_HOST_MARKER

    def validate_host(self, host: Optional[str]) -> Optional[str]:
        if self.production and (host is None or self.host_marker not in host):
            logger.warning("invalid host %r", host)
            return None
        return host

    def validate_scheme(self, scheme: Optional[str]) -> Optional[str]:
        if self.production and scheme not in VALID_SCHEMES:
            logger.warning("invalid scheme %r", scheme)
            return None
        return scheme

    def validate_port(self, port: Optional[str]) -> Optional[str]:
        try:
            num = int(port)
        except (TypeError, ValueError):
            num = None

        # str(int(...)) round trip rejects signs, padding, "_" and non-ASCII digits
        if num is None or not MIN_PORT <= num <= MAX_PORT or str(num) != port:
            logger.warning("invalid port %r", port)
            return None
        return port
