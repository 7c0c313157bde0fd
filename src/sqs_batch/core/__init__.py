"""Core utilities shared by the batch processing engine."""

from sqs_batch.core.logging import (
    get_logger,
    configure_logging,
    bind_invocation,
    clear_invocation,
)
from sqs_batch.core.errors import (
    SqsBatchError,
    RedrivePolicyError,
    InvalidMessageError,
)
from sqs_batch.core.classification import (
    ErrorClass,
    ExceptionClassifier,
    classify,
)

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "bind_invocation",
    "clear_invocation",
    # Errors
    "SqsBatchError",
    "RedrivePolicyError",
    "InvalidMessageError",
    # Classification
    "ErrorClass",
    "ExceptionClassifier",
    "classify",
]
