"""Options controlling how a partially failed batch is reconciled."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from sqs_batch.batch.chunker import SQS_MAX_BATCH_SIZE

ENV_SUPPRESS_EXCEPTION = "SQS_BATCH_SUPPRESS_EXCEPTION"
ENV_DELETE_NON_RETRYABLE = "SQS_BATCH_DELETE_NON_RETRYABLE"
ENV_NON_RETRYABLE_ERROR_CODES = "SQS_BATCH_NON_RETRYABLE_ERROR_CODES"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class BatchOptions:
    """Configuration for one batch processing call.

    Attributes:
        suppress_exception: Return the successful values instead of raising
            BatchProcessingError when some messages failed.
        non_retryable_exceptions: Exception classes or error code tags whose
            messages are moved to the dead-letter queue (or deleted) instead
            of being left for redelivery.
        delete_non_retryable_messages: Delete non-retryable messages from the
            source queue instead of sending them to its dead-letter queue.
        max_batch_size: Entries per DeleteMessageBatch/SendMessageBatch call.
    """

    suppress_exception: bool = False
    non_retryable_exceptions: tuple = ()
    delete_non_retryable_messages: bool = False
    max_batch_size: int = SQS_MAX_BATCH_SIZE

    def __post_init__(self):
        if not 1 <= self.max_batch_size <= SQS_MAX_BATCH_SIZE:
            raise ValueError(
                f"max_batch_size must be between 1 and {SQS_MAX_BATCH_SIZE}, "
                f"got {self.max_batch_size}"
            )
        # Stored as a tuple so options stay hashable
        object.__setattr__(self, "non_retryable_exceptions", tuple(self.non_retryable_exceptions))

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        non_retryable_exceptions: tuple = (),
    ) -> "BatchOptions":
        """Build options from environment variables.

        Error codes listed in SQS_BATCH_NON_RETRYABLE_ERROR_CODES are added to
        the given non-retryable exception classes.
        """
        environ = os.environ if environ is None else environ
        codes = tuple(
            code.strip()
            for code in environ.get(ENV_NON_RETRYABLE_ERROR_CODES, "").split(",")
            if code.strip()
        )
        return cls(
            suppress_exception=_env_flag(environ, ENV_SUPPRESS_EXCEPTION),
            non_retryable_exceptions=tuple(non_retryable_exceptions) + codes,
            delete_non_retryable_messages=_env_flag(environ, ENV_DELETE_NON_RETRYABLE),
        )


def _env_flag(environ: Mapping[str, str], name: str) -> bool:
    return environ.get(name, "").strip().lower() in _TRUE_VALUES
