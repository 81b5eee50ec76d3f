"""
HTTP transports for the CloudBucket SDK.

A transport turns ``post(path, body)`` into an authenticated HTTP request
against the configured endpoint and wraps the outcome in an
:class:`~cloudbucket_sdk.models.APIResponse`. Service and network failures
are reported in the envelope and never raised.

``RequestsTransport`` is synchronous and built on requests;
``AiohttpTransport`` is the asyncio counterpart built on aiohttp.
"""

import json
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional, Dict, Any

import aiohttp
import requests

from . import __version__
from .config import ClientConfig
from .models import APIResponse, APIError, ErrorEntry

logger = logging.getLogger(__name__)

USER_AGENT = f"CloudBucket-Python-SDK/{__version__}"


class Transport(ABC):
    """
    Base class holding configuration and envelope conversion.

    Subclasses implement :meth:`post`, either as a plain method or as a
    coroutine.
    """

    def __init__(self, config: ClientConfig):
        self.config = config

    @property
    def endpoint(self) -> str:
        return self.config.endpoint

    def _url(self, path: str) -> str:
        return f"{self.config.endpoint}{path}"

    def _headers(self) -> Dict[str, str]:
        headers = {
            "User-Agent": USER_AGENT,
            "Content-Type": "application/json",
        }
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        if self.config.session_token:
            headers["Session"] = self.config.session_token
        return headers

    @abstractmethod
    def post(self, path: str, body: Optional[Dict[str, Any]] = None):
        """Send a POST request to ``path`` and return the response envelope."""
        raise NotImplementedError

    @staticmethod
    def _decode(text: str, content_type: str) -> Any:
        if not text:
            return None
        if "json" in (content_type or ""):
            try:
                return json.loads(text)
            except ValueError:
                return text
        return text

    @classmethod
    def _build_response(cls, status: int, reason: str, payload: Any) -> APIResponse:
        """Wrap a completed HTTP exchange in an envelope."""
        if 200 <= status < 300:
            return APIResponse(data=payload, errors=None)
        return APIResponse(
            data=None,
            errors=APIError(status=status, status_text=reason or "", items=cls._error_items(payload)),
        )

    @staticmethod
    def _error_items(payload: Any) -> list:
        if isinstance(payload, dict) and isinstance(payload.get("errors"), list):
            raw_items = payload["errors"]
        elif isinstance(payload, list):
            raw_items = payload
        elif payload:
            raw_items = [payload]
        else:
            raw_items = []

        items = []
        for raw in raw_items:
            if isinstance(raw, dict):
                items.append(ErrorEntry.from_dict(raw))
            else:
                items.append(ErrorEntry(origin="server_error", code="unknown_error", message=str(raw)))
        return items

    @staticmethod
    def _network_failure(error: Exception) -> APIResponse:
        return APIResponse(
            data=None,
            errors=APIError(
                status=0,
                status_text="Network Error",
                items=[ErrorEntry(origin="client_error", code="network_error", message=str(error))],
            ),
        )


class RequestsTransport(Transport):
    """Synchronous transport backed by a ``requests.Session``."""

    def __init__(self, config: ClientConfig, session: Optional[requests.Session] = None):
        super().__init__(config)
        self.session = session or requests.Session()
        self.session.headers.update(self._headers())

    def post(self, path: str, body: Optional[Dict[str, Any]] = None) -> APIResponse:
        """Send a POST request and return the response envelope."""
        url = self._url(path)
        logger.debug("POST %s", path)

        try:
            response = self.session.request(
                method="POST",
                url=url,
                json=body,
                timeout=self.config.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.warning("POST %s failed: %s", path, e)
            return self._network_failure(e)

        logger.debug("POST %s -> %s", path, response.status_code)
        payload = self._decode(response.text, response.headers.get("Content-Type", ""))
        return self._build_response(response.status_code, response.reason, payload)

    def close(self):
        """Close the HTTP session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class AiohttpTransport(Transport):
    """Asynchronous transport backed by an ``aiohttp.ClientSession``."""

    def __init__(self, config: ClientConfig, session: Optional[aiohttp.ClientSession] = None):
        super().__init__(config)
        self.timeout = aiohttp.ClientTimeout(total=config.timeout)
        self._session = session

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers=self._headers(),
                timeout=self.timeout,
            )
        return self._session

    async def post(self, path: str, body: Optional[Dict[str, Any]] = None) -> APIResponse:
        """Send a POST request and return the response envelope."""
        session = await self._get_session()
        url = self._url(path)
        logger.debug("POST %s", path)

        try:
            async with session.request("POST", url, json=body) as response:
                text = await response.text()
                logger.debug("POST %s -> %s", path, response.status)
                payload = self._decode(text, response.headers.get("Content-Type", ""))
                return self._build_response(response.status, response.reason, payload)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning("POST %s failed: %r", path, e)
            return self._network_failure(e)

    async def close(self):
        """Close the client session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
