"""
Tests for PredictionClient: request shape, response parsing, error mapping.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from ucs_predictor.infrastructure.prediction_client import (
    BackendUnreachableError,
    InvalidResponseError,
    PredictionClient,
    redact_url,
    parse_prediction,
)

URL = "http://backend.test/predict"
PAYLOAD = {"Clay": 30.0, "Silt": 25.0, "PI": 25.0}


@pytest.fixture
def client() -> PredictionClient:
    return PredictionClient(url=URL, timeout=5.0)


def _response(json_value=None, json_error: Exception | None = None) -> MagicMock:
    r = MagicMock()
    r.status_code = 200
    r.text = "not json"
    r.raise_for_status = MagicMock()
    if json_error is not None:
        r.json.side_effect = json_error
    else:
        r.json.return_value = json_value
    return r


def test_predict_posts_json(client: PredictionClient) -> None:
    with patch(
        "ucs_predictor.infrastructure.prediction_client.requests.post",
        return_value=_response({"ucs": 3.14159}),
    ) as mock_post:
        ucs = client.predict(PAYLOAD)

    assert ucs == pytest.approx(3.14159)
    mock_post.assert_called_once()
    args, kwargs = mock_post.call_args
    assert args[0] == URL
    assert kwargs["json"] == PAYLOAD
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert kwargs["timeout"] == 5.0


def test_predict_accepts_integer_ucs(client: PredictionClient) -> None:
    with patch(
        "ucs_predictor.infrastructure.prediction_client.requests.post",
        return_value=_response({"ucs": 2, "model": "rf"}),
    ):
        assert client.predict(PAYLOAD) == 2.0


@pytest.mark.parametrize("body", [{}, {"ucs": None}, {"ucs": "3.1"}, {"ucs": True}, [1, 2]])
def test_predict_invalid_payload(client: PredictionClient, body) -> None:
    with patch(
        "ucs_predictor.infrastructure.prediction_client.requests.post",
        return_value=_response(body),
    ):
        with pytest.raises(InvalidResponseError):
            client.predict(PAYLOAD)


def test_predict_connection_error(client: PredictionClient) -> None:
    err = requests.exceptions.ConnectionError("refused")
    with patch("ucs_predictor.infrastructure.prediction_client.requests.post", side_effect=err):
        with pytest.raises(BackendUnreachableError) as exc:
            client.predict(PAYLOAD)
    assert exc.value.original is err


def test_predict_timeout(client: PredictionClient) -> None:
    with patch(
        "ucs_predictor.infrastructure.prediction_client.requests.post",
        side_effect=requests.exceptions.Timeout("slow"),
    ):
        with pytest.raises(BackendUnreachableError):
            client.predict(PAYLOAD)


def test_predict_http_error(client: PredictionClient) -> None:
    r = _response({"ucs": 1.0})
    r.status_code = 500
    r.raise_for_status.side_effect = requests.exceptions.HTTPError("500 Server Error")
    with patch("ucs_predictor.infrastructure.prediction_client.requests.post", return_value=r):
        with pytest.raises(BackendUnreachableError, match="HTTPError"):
            client.predict(PAYLOAD)


def test_predict_non_json_body(client: PredictionClient) -> None:
    with patch(
        "ucs_predictor.infrastructure.prediction_client.requests.post",
        return_value=_response(json_error=ValueError("Expecting value")),
    ):
        with pytest.raises(BackendUnreachableError, match="non-JSON"):
            client.predict(PAYLOAD)


def test_parse_prediction() -> None:
    assert parse_prediction({"ucs": 1.5}) == 1.5
    with pytest.raises(InvalidResponseError):
        parse_prediction({"strength": 1.5})


def test_client_defaults_from_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "ucs_predictor.infrastructure.prediction_client.backend_url", lambda: "http://cfg/predict"
    )
    monkeypatch.setattr("ucs_predictor.infrastructure.prediction_client.request_timeout", lambda: None)
    c = PredictionClient()
    assert c.url == "http://cfg/predict"
    assert c.timeout is None


def test_redact_url() -> None:
    assert redact_url("http://x/predict?token=abc") == "http://x/predict?REDACTED=1"
    assert redact_url(URL) == URL


def _raw_response(body: bytes) -> requests.Response:
    r = requests.Response()
    r.status_code = 200
    r._content = body
    r.headers["Content-Type"] = "application/json"
    return r


@pytest.mark.parametrize("body", [b'{"ucs": NaN}', b'{"ucs": Infinity}', b'{"ucs": -Infinity}'])
def test_predict_rejects_non_json_constants(client: PredictionClient, body: bytes) -> None:
    with patch(
        "ucs_predictor.infrastructure.prediction_client.requests.post",
        return_value=_raw_response(body),
    ):
        with pytest.raises(BackendUnreachableError, match="non-JSON"):
            client.predict(PAYLOAD)


def test_predict_rejects_overflowing_ucs(client: PredictionClient) -> None:
    # 1e400 is valid JSON but decodes to inf.
    with patch(
        "ucs_predictor.infrastructure.prediction_client.requests.post",
        return_value=_raw_response(b'{"ucs": 1e400}'),
    ):
        with pytest.raises(InvalidResponseError):
            client.predict(PAYLOAD)


def test_predict_real_response_body(client: PredictionClient) -> None:
    with patch(
        "ucs_predictor.infrastructure.prediction_client.requests.post",
        return_value=_raw_response(b'{"ucs": 3.14159}'),
    ):
        assert client.predict(PAYLOAD) == pytest.approx(3.14159)


def test_display_url_redacted() -> None:
    c = PredictionClient(url="http://x/predict?apikey=secret", timeout=1.0)
    assert c.display_url == "http://x/predict?REDACTED=1"
    assert "secret" not in c.display_url
