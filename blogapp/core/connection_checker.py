"""
BlogApp Client Core — Connectivity Check
=========================================

What:  Reports whether the device is currently online.
How:   Sends an HTTP HEAD to each configured probe URL in order and answers
       True on the first successful response. Nothing is cached; every call
       probes again.
Who:   Consulted by repositories before choosing the remote or local path.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Sequence

import httpx

logger = logging.getLogger(__name__)


class ConnectionChecker(ABC):
    """Boolean connectivity oracle. No degraded or partial state exists."""

    @abstractmethod
    async def is_connected(self) -> bool:
        ...


class InternetConnectionChecker(ConnectionChecker):
    """
    Connectivity check backed by HTTP reachability probes.

    Args:
        client:   Shared httpx.AsyncClient (owned by the composition root)
        urls:     Probe URLs, tried one after another
        timeout:  Per-probe timeout in seconds
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        urls: Sequence[str],
        timeout: float = 5.0,
    ):
        if not urls:
            raise ValueError("At least one connectivity probe URL is required")
        self._client = client
        self._urls: List[str] = list(urls)
        self._timeout = timeout

    async def is_connected(self) -> bool:
        for url in self._urls:
            try:
                response = await self._client.head(
                    url, timeout=self._timeout, follow_redirects=True
                )
            except httpx.HTTPError as e:
                logger.debug("Connectivity probe %s failed: %s", url, e)
                continue

            if response.status_code < 500:
                return True
            logger.debug("Connectivity probe %s answered %d", url, response.status_code)

        logger.info("All %d connectivity probes failed, treating device as offline", len(self._urls))
        return False
