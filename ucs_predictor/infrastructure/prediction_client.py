"""
HTTP client for the remote UCS prediction backend.
"""

from __future__ import annotations

import math
from typing import Any

import requests

from ucs_predictor.utils.config import backend_url, request_timeout
from ucs_predictor.utils.logger import get_logger

logger = get_logger()

_MAX_DEBUG_BODY_CHARS = 500


class PredictionError(RuntimeError):
    """Base error for a failed prediction round trip."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


class BackendUnreachableError(PredictionError):
    """Transport failure, non-2xx status, timeout, or non-JSON body."""


class InvalidResponseError(PredictionError):
    """Backend answered with JSON that has no numeric `ucs` field."""


def redact_url(url: str) -> str:
    # Avoid leaking tokens if one is ever put into the URL.
    if not url:
        return url
    for marker in ("token=", "api_key=", "apikey="):
        if marker in url.lower():
            return url.split("?", 1)[0] + "?REDACTED=1"
    return url


def _reject_constant(name: str) -> float:
    # NaN, Infinity and -Infinity are not JSON; the stdlib decoder accepts them.
    raise ValueError(f"Invalid JSON constant: {name}")


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def parse_prediction(data: Any) -> float:
    """
    Extract the UCS value from a decoded response body.

    Raises:
        InvalidResponseError: If data is not an object or `ucs` is missing/non-numeric.
    """
    if not isinstance(data, dict):
        raise InvalidResponseError(f"Expected JSON object, got {type(data).__name__}")
    ucs = data.get("ucs")
    if not _is_number(ucs):
        raise InvalidResponseError(f"Missing or non-finite 'ucs' in response: {ucs!r}")
    return float(ucs)


class PredictionClient:
    """
    Single-shot POST to the prediction endpoint. No retries.

    The URL and timeout default to UCS_BACKEND_URL / UCS_REQUEST_TIMEOUT.
    A timeout of None waits for the backend indefinitely.
    """

    def __init__(self, url: str | None = None, timeout: float | None = None) -> None:
        self.url = url or backend_url()
        self.timeout = timeout if timeout is not None else request_timeout()

    @property
    def display_url(self) -> str:
        """Endpoint URL safe to show in logs and the UI."""
        return redact_url(self.url)

    def _headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json"}

    def predict(self, values: dict[str, float]) -> float:
        """
        Send the numeric record and return the predicted UCS (MPa).

        Args:
            values: Field name -> float for every form field.

        Returns:
            The raw `ucs` value from the backend.

        Raises:
            BackendUnreachableError: On any transport error, HTTP error, or undecodable body.
            InvalidResponseError: If the body lacks a numeric `ucs`.
        """
        logger.info("POST prediction request to %s", self.display_url)
        logger.debug("Payload: %s", values)
        try:
            r = requests.post(
                self.url,
                json=values,
                headers=self._headers(),
                timeout=self.timeout,
            )
            r.raise_for_status()
        except requests.RequestException as e:
            logger.exception("Prediction request failed: %s (%s)", e, type(e).__name__)
            raise BackendUnreachableError(f"{type(e).__name__}: {e}", original=e) from e

        try:
            data = r.json(parse_constant=_reject_constant)
        except ValueError as e:
            # requests' JSONDecodeError subclasses ValueError
            body = (r.text or "")[:_MAX_DEBUG_BODY_CHARS]
            logger.warning("Prediction backend returned non-JSON body: %r", body)
            raise BackendUnreachableError("Backend returned a non-JSON body", original=e) from e

        try:
            ucs = parse_prediction(data)
        except InvalidResponseError:
            logger.warning("Prediction backend returned unexpected payload: %r", data)
            raise
        logger.info("Prediction backend responded with ucs=%s", ucs)
        return ucs
