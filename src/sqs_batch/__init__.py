"""Partial-failure batch processing for SQS-triggered Lambda functions."""

from sqs_batch.batch import (
    BatchOptions,
    BatchProcessingError,
    MessageFailure,
    MessageSuccess,
    RedrivePolicy,
    SqsBatchProcessor,
    SqsGateway,
    SqsMessage,
    SqsMessageHandler,
    batch_processor,
    chunk,
    parse_sqs_event,
)
from sqs_batch.core import (
    ErrorClass,
    ExceptionClassifier,
    SqsBatchError,
    classify,
    configure_logging,
    get_logger,
)

__version__ = "0.1.0"

__all__ = [
    "BatchOptions",
    "BatchProcessingError",
    "MessageFailure",
    "MessageSuccess",
    "RedrivePolicy",
    "SqsBatchProcessor",
    "SqsGateway",
    "SqsMessage",
    "SqsMessageHandler",
    "batch_processor",
    "chunk",
    "parse_sqs_event",
    "ErrorClass",
    "ExceptionClassifier",
    "SqsBatchError",
    "classify",
    "configure_logging",
    "get_logger",
]
