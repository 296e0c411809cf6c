from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests
from requests import Response


class ProviderError(RuntimeError):
    """Base provider error: transport, HTTP status or decoding failure."""


class NotFound(ProviderError):
    """Raised when the provider answered but had nothing for the request."""


class LocationNotFound(NotFound):
    """The geocoder returned an empty result list."""


class MissingCurrentConditions(NotFound):
    """The weather response carried no current-conditions section."""


class InvalidLocationQuery(ValueError):
    """Raised before any request when city or country is missing."""


@dataclass
class RequestConfig:
    # None means the request waits indefinitely.
    timeout: Optional[float] = None


class HttpProvider:
    """Base class for single-shot JSON-over-HTTP providers."""

    name = "http"

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()
        self._log = logging.getLogger(self.__class__.__name__)

    def _handle_response(self, response: Response) -> Response:
        if response.status_code >= 400:
            self._log.error("Provider returned %s: %s", response.status_code, response.text)
            raise ProviderError(f"HTTP {response.status_code}")
        return response

    def _request(self, method: str, url: str, **kwargs) -> Response:
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.request_config.timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            self._log.error("Request timed out", exc_info=exc)
            raise ProviderError("timeout") from exc
        except requests.RequestException as exc:
            self._log.error("Request failed", exc_info=exc)
            raise ProviderError("request failed") from exc
        return self._handle_response(response)

    def _json(self, response: Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON", exc_info=exc)
            raise ProviderError("invalid json") from exc


__all__ = [
    "HttpProvider",
    "InvalidLocationQuery",
    "LocationNotFound",
    "MissingCurrentConditions",
    "NotFound",
    "ProviderError",
    "RequestConfig",
]
