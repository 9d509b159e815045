#!/usr/bin/env python3
"""
Collaborator Messaging

Uniform request/reply contract used to reach sibling services (order management,
marketplace, mail). The core only depends on the abstract MessageClient; the
HTTP implementation here is the transport shipped with the CLI.

Replies are validated at the boundary: a malformed envelope or payload raises
ResponseDecodeError instead of being treated as an empty result.
"""

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from .json_utils import loads_payload

logger = logging.getLogger(__name__)


class WaybillSyncError(Exception):
    """Base class for errors raised by the waybill sync core."""

    pass


class CollaboratorError(WaybillSyncError):
    """Raised when a collaborator call fails (transport error or remote error reply)."""

    pass


class ResponseDecodeError(WaybillSyncError):
    """Raised when a collaborator reply does not match its expected contract."""

    pass


@dataclass(frozen=True)
class Reply:
    """Decoded reply envelope: ``{"status": ..., "data": ...}``."""

    status: str
    data: Any = None

    @classmethod
    def from_raw(cls, raw: Any, source: str = "collaborator") -> "Reply":
        """
        Validate and wrap a raw reply body.

        Args:
            raw: Parsed reply body
            source: ``queue/pattern`` label used in error messages

        Returns:
            Reply instance

        Raises:
            ResponseDecodeError: If the body is not an object with a string status
            CollaboratorError: If the collaborator answered with status "error"
        """
        if not isinstance(raw, Mapping):
            raise ResponseDecodeError(f"{source}: expected an object reply, got {type(raw).__name__}")

        status = raw.get("status")
        if not isinstance(status, str):
            raise ResponseDecodeError(f"{source}: reply has no status field")

        if status == "error":
            message = raw.get("message") or raw.get("data") or "remote error"
            raise CollaboratorError(f"{source}: {message}")

        return cls(status=status, data=raw.get("data"))

    def records(self, source: str = "collaborator") -> list[Any]:
        """
        Return the reply data as a list of records.

        Absent data is an empty list. Data may also arrive as JSON text.

        Raises:
            ResponseDecodeError: If the data is present but is not a list
        """
        try:
            data = loads_payload(self.data)
        except json.JSONDecodeError as e:
            raise ResponseDecodeError(f"{source}: data is not valid JSON: {e}") from e

        if data is None:
            return []
        if not isinstance(data, list):
            raise ResponseDecodeError(f"{source}: expected a list of records, got {type(data).__name__}")
        return data


class MessageClient(ABC):
    """Request/reply access to sibling services, addressed by queue and pattern."""

    @abstractmethod
    async def send(self, queue: str, pattern: str, payload: dict[str, Any]) -> Reply:
        """Send a request and wait for its reply."""
        pass

    @abstractmethod
    async def emit(self, queue: str, pattern: str, payload: dict[str, Any]) -> None:
        """Publish an event without expecting a reply."""
        pass


class HttpMessageClient(MessageClient):
    """
    MessageClient over HTTP.

    Each queue maps to a service base URL; a message is POSTed as
    ``{"pattern": ..., "data": ...}`` to ``<base>/<pattern>``.
    """

    def __init__(
        self,
        queue_urls: dict[str, str],
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            queue_urls: Mapping of queue name to service base URL
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.queue_urls = dict(queue_urls)
        self.timeout = timeout
        self._transport = transport

    def _url_for(self, queue: str, pattern: str) -> str:
        base = self.queue_urls.get(queue)
        if not base:
            raise CollaboratorError(f"No endpoint configured for queue '{queue}'")
        return f"{base.rstrip('/')}/{pattern}"

    async def _post(self, queue: str, pattern: str, payload: dict[str, Any]) -> httpx.Response:
        url = self._url_for(queue, pattern)
        logger.debug(f"POST {url}")
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(url, json={"pattern": pattern, "data": payload})
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise CollaboratorError(f"{queue}/{pattern} failed: {e}") from e
        return response

    async def send(self, queue: str, pattern: str, payload: dict[str, Any]) -> Reply:
        source = f"{queue}/{pattern}"
        response = await self._post(queue, pattern, payload)
        try:
            body = response.json()
        except ValueError as e:
            raise ResponseDecodeError(f"{source}: reply is not JSON") from e
        return Reply.from_raw(body, source=source)

    async def emit(self, queue: str, pattern: str, payload: dict[str, Any]) -> None:
        await self._post(queue, pattern, payload)
