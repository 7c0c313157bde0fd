"""Aggregated failure report of a partially failed batch."""

from typing import Any, Sequence

from sqs_batch.batch.models import SqsMessage
from sqs_batch.core.errors import SqsBatchError


class BatchProcessingError(SqsBatchError):
    """Raised when one or more messages of a batch failed processing.

    Carries, in discovery order, the errors raised by the message handler,
    the messages that failed and the values returned for the messages that
    succeeded. The three collections are immutable.
    """

    def __init__(
        self,
        exceptions: Sequence[Exception],
        failures: Sequence[SqsMessage],
        success_return_values: Sequence[Any],
    ):
        if len(exceptions) != len(failures):
            raise ValueError("Each failed message needs exactly one exception")
        self._exceptions = tuple(exceptions)
        self._failures = tuple(failures)
        self._success_return_values = tuple(success_return_values)
        super().__init__(
            "\n".join(repr(e) for e in self._exceptions),
            error_code="BATCH_PROCESSING",
            details={
                "failed_count": len(self._failures),
                "success_count": len(self._success_return_values),
            },
        )

    @property
    def exceptions(self) -> tuple:
        """Errors raised while processing messages."""
        return self._exceptions

    @property
    def failures(self) -> tuple:
        """Messages that failed processing."""
        return self._failures

    @property
    def success_return_values(self) -> tuple:
        """Values returned for successfully processed messages."""
        return self._success_return_values

    @property
    def failed_message_ids(self) -> list[str]:
        return [message.message_id for message in self._failures]

    def to_dict(self) -> dict:
        """Convert to dictionary for logging."""
        return {
            "message": self.message,
            "error_code": self.error_code,
            "failures": [
                {
                    "message_id": message.message_id,
                    "error_type": type(error).__name__,
                    "error": str(error),
                }
                for message, error in zip(self._failures, self._exceptions)
            ],
            "success_count": len(self._success_return_values),
        }
