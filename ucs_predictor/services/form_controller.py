"""
Form state and submit/reset handling for the UCS predictor.
"""

from __future__ import annotations

from typing import Any

from ucs_predictor.domains.form.rules import Record, initial_record, update_field
from ucs_predictor.domains.form.validation import to_numeric, validate_record
from ucs_predictor.infrastructure.prediction_client import (
    BackendUnreachableError,
    InvalidResponseError,
)
from ucs_predictor.utils.logger import get_logger

logger = get_logger()

STATUS_IDLE = "idle"
STATUS_SUBMITTING = "submitting"
STATUS_SETTLED = "settled"

INVALID_RESPONSE_MESSAGE = "Invalid response from backend"
UNREACHABLE_MESSAGE = "Backend not reachable"


class FormController:
    """
    Owns the input record, the formatted prediction and the submit status.

    Lifecycle: idle -> submitting -> settled; reset() returns to idle.
    request_submit() flags a pending submit so the UI can render the busy
    state before submit() blocks on the network.
    A submit() while another is in flight is ignored. A response that lands
    after reset() is dropped.
    """

    def __init__(self, prediction_client: Any | None = None) -> None:
        self._client = prediction_client
        self._inputs: Record = initial_record()
        self._result: str | None = None
        self._status = STATUS_IDLE
        self._notifications: list[str] = []
        # Set by request_submit(); the UI draws one busy frame before calling submit().
        self._pending = False
        # Bumped by reset() so an in-flight submit can tell its response is stale.
        self._generation = 0

    @property
    def inputs(self) -> Record:
        return dict(self._inputs)

    @property
    def result(self) -> str | None:
        """Predicted UCS formatted to two decimals, or None."""
        return self._result

    @property
    def status(self) -> str:
        return self._status

    @property
    def submitting(self) -> bool:
        return self._status == STATUS_SUBMITTING

    @property
    def pending(self) -> bool:
        return self._pending

    @property
    def busy(self) -> bool:
        """True from request_submit() until the submission settles."""
        return self._pending or self.submitting

    def request_submit(self) -> None:
        """Mark a submission as requested; submit() is expected on the next run."""
        if self.busy:
            logger.warning("Submit request ignored: a prediction is already pending")
            return
        self._pending = True

    def _ensure_client(self) -> Any:
        if self._client is None:
            from ucs_predictor.infrastructure.prediction_client import PredictionClient
            self._client = PredictionClient()
        return self._client

    def notify(self, message: str) -> None:
        logger.info("User notification: %s", message)
        self._notifications.append(message)

    def pop_notifications(self) -> list[str]:
        out, self._notifications = self._notifications, []
        return out

    def update_field(self, name: str, raw_value: Any) -> None:
        """Store raw_value and re-apply PI / Mixing rules. No validation, no IO."""
        self._inputs = update_field(self._inputs, name, raw_value)

    def submit(self) -> bool:
        """
        Validate and request one prediction.

        Returns:
            True if a result was stored, False otherwise (validation failure,
            backend error, ignored double submit, or response dropped after reset).
        """
        if self.submitting:
            logger.warning("Submit ignored: a prediction request is already in flight")
            return False
        self._pending = False

        message = validate_record(self._inputs)
        if message:
            logger.info("Submit rejected by validation: %s", message)
            self.notify(message)
            return False

        payload = to_numeric(self._inputs)
        generation = self._generation
        self._result = None
        self._status = STATUS_SUBMITTING
        logger.info("Submitting prediction request")

        ucs: float | None = None
        error: str | None = None
        try:
            ucs = self._ensure_client().predict(payload)
        except InvalidResponseError as e:
            logger.warning("Prediction failed: %s", e)
            error = INVALID_RESPONSE_MESSAGE
        except BackendUnreachableError as e:
            logger.warning("Prediction failed: %s", e)
            error = UNREACHABLE_MESSAGE
        finally:
            if generation == self._generation:
                self._status = STATUS_SETTLED

        if generation != self._generation:
            logger.warning("Dropping prediction response received after reset")
            return False

        if error:
            self.notify(error)
            return False

        self._result = f"{ucs:.2f}"
        logger.info("Predicted UCS: %s MPa", self._result)
        return True

    def reset(self) -> None:
        """Clear every field and the result. Does not cancel an in-flight request."""
        self._inputs = initial_record()
        self._result = None
        self._notifications = []
        self._pending = False
        self._status = STATUS_IDLE
        self._generation += 1
        logger.info("Form reset")
