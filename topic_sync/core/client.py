"""
Transport to execute operations against the catalog API.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from logging import Logger
from typing import Any

import requests

from .exceptions import TransportError

__all__ = [
    "Executor",
    "ApiClient",
]


REQUEST_TIMEOUT = 30.0
"""
Default timeout for requests, in seconds.
"""


class Executor(ABC):
    """
    Executes a named operation against the catalog.
    """

    @abstractmethod
    def execute(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """
        Execute operation and return the `data` object of its response.

        :raises TransportError: Operation could not be executed
        """
        ...


class ApiClient(Executor):
    """
    GraphQL client posting operations over HTTP.

    Any credentials required by the API are passed as static `headers`.
    """

    _api_url: str
    """
    Endpoint as configured by user.
    """

    _http: requests.Session
    """
    Underlying HTTP session, reused across requests.
    """

    _timeout: float

    _logger: Logger

    def __init__(
        self,
        api_url: str,
        *,
        headers: dict[str, str] | None = None,
        timeout: float = REQUEST_TIMEOUT,
        logger: Logger | None = None,
    ):
        """
        :param api_url: URL of GraphQL endpoint
        :param headers: Headers sent with each request
        :param timeout: Timeout for each request, in seconds
        :param logger: Logger to use, or `None` to use default logger
        """
        self._api_url = api_url
        self._timeout = timeout
        self._logger = logger or logging.getLogger()

        self._http = requests.Session()
        self._http.headers.update({"Content-Type": "application/json"})
        if headers:
            self._http.headers.update(headers)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, traceback):
        self.close()

    @property
    def api_url(self) -> str:
        return self._api_url

    def close(self):
        self._http.close()

    def execute(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        try:
            response: requests.Response = self._http.post(
                self._api_url,
                json={"query": query, "variables": variables},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            self._logger.error(f"Request to '{self._api_url}' failed: {e}")
            raise TransportError(str(e)) from e

        if not response.ok:
            raise TransportError(
                f"Request to '{self._api_url}' returned status code {response.status_code}: {response.text}",
                status=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(
                f"Invalid JSON in response from '{self._api_url}'",
                status=response.status_code,
            ) from e

        if not isinstance(body, dict):
            raise TransportError(
                f"Unexpected response from '{self._api_url}': {body}",
                status=response.status_code,
            )

        if errors := body.get("errors"):
            messages = "; ".join(
                str(err.get("message", err)) if isinstance(err, dict) else str(err)
                for err in errors
            )
            raise TransportError(
                f"API returned errors: {messages}",
                status=response.status_code,
            )

        data = body.get("data")

        if not isinstance(data, dict):
            raise TransportError(
                f"Response from '{self._api_url}' contained no data",
                status=response.status_code,
            )

        return data
