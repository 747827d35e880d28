from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests
from requests import Response


class SourceError(RuntimeError):
    """Raised when a weather source cannot produce data for a request."""


@dataclass
class RequestConfig:
    timeout: float = 10.0
    user_agent: str = "WeatherCheck-App/1.0"


class HttpSource:
    """Base class for clients backed by a single HTTP request per call.

    One attempt per call: there are no retries, and every request is bounded
    by ``request_config.timeout``.
    """

    name = "http"

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or self._build_session(self.request_config)
        self._log = logging.getLogger(self.__class__.__name__)

    def _build_session(self, config: RequestConfig) -> requests.Session:
        session = requests.Session()
        session.headers["User-Agent"] = config.user_agent
        return session

    def _handle_response(self, response: Response) -> Response:
        if response.status_code >= 400:
            self._log.warning("%s returned %s: %s", self.name, response.status_code, response.text[:200])
            raise SourceError(f"HTTP {response.status_code}")
        return response

    def _get(self, url: str, **kwargs) -> Response:
        return self._request("GET", url, **kwargs)

    def _post(self, url: str, **kwargs) -> Response:
        return self._request("POST", url, **kwargs)

    def _request(self, method: str, url: str, **kwargs) -> Response:
        try:
            response = self.session.request(method, url, timeout=self.request_config.timeout, **kwargs)
        except requests.Timeout as exc:
            raise SourceError("timeout") from exc
        except requests.RequestException as exc:
            raise SourceError(f"request failed: {exc}") from exc
        return self._handle_response(response)

    def _json(self, response: Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise SourceError("invalid json") from exc


__all__ = ["HttpSource", "SourceError", "RequestConfig"]
