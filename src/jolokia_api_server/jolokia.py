# src/jolokia_api_server/jolokia.py

import logging
from typing import Any, Dict, List, Optional

import httpx
from fastapi import status

logger = logging.getLogger(__name__)

JOLOKIA_PATH = "/console/jolokia/"
BROKER_SEARCH_PATTERN = "org.apache.activemq.artemis:broker=*"

# Jolokia rejects requests without an Origin header when CORS strict checking is on
DEFAULT_ORIGIN = "http://localhost"


class ArtemisJolokia:
    """
    Handle to a remote Artemis broker's Jolokia endpoint.

    Holds the validated connection parameters and credentials submitted at
    login. A new httpx.AsyncClient is opened for each call.
    """

    def __init__(
        self,
        username: Optional[str],
        password: Optional[str],
        host: str,
        scheme: str,
        port: str,
        verify_tls: bool = False,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.username = username
        self.password = password
        self.host = host
        self.scheme = scheme
        self.port = port
        self.verify_tls = verify_tls
        self.timeout = timeout
        self._transport = transport

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}{JOLOKIA_PATH}"

    def __repr__(self) -> str:
        return f"ArtemisJolokia(user={self.username!r}, url={self.base_url!r})"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            auth=(self.username or "", self.password or ""),
            headers={"Origin": DEFAULT_ORIGIN},
            verify=self.verify_tls,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def _search(self, client: httpx.AsyncClient) -> httpx.Response:
        url = f"{self.base_url}search/{BROKER_SEARCH_PATTERN}"
        logger.debug("Jolokia search: %s", url)
        return await client.get(url)

    async def validate_user(self) -> bool:
        """
        Returns True if the credentials are accepted by the remote endpoint.

        401/403 from the server, or a non-200 status inside the Jolokia
        envelope, mean the credentials were refused. Any other HTTP error or
        a transport failure is raised to the caller.
        """
        async with self._client() as client:
            response = await self._search(client)

        if response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN):
            logger.info("Jolokia at %s refused credentials for user %r", self.base_url, self.username)
            return False
        response.raise_for_status()

        envelope: Dict[str, Any] = response.json()
        if envelope.get("status") != status.HTTP_200_OK:
            logger.info("Jolokia at %s returned status %s: %s",
                        self.base_url, envelope.get("status"), envelope.get("error"))
            return False
        return True

    async def list_brokers(self) -> List[str]:
        """Returns the broker MBean names visible to this user."""
        async with self._client() as client:
            response = await self._search(client)
        response.raise_for_status()

        envelope: Dict[str, Any] = response.json()
        if envelope.get("status") != status.HTTP_200_OK:
            raise httpx.HTTPStatusError(
                f"Jolokia search failed: {envelope.get('error')}",
                request=response.request,
                response=response,
            )
        return list(envelope.get("value") or [])
