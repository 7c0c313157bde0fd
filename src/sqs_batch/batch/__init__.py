"""SQS batch processing with partial failure handling."""

from sqs_batch.batch.chunker import SQS_MAX_BATCH_SIZE, chunk
from sqs_batch.batch.config import BatchOptions
from sqs_batch.batch.gateway import SqsGateway
from sqs_batch.batch.handler import SqsMessageHandler, resolve_handler
from sqs_batch.batch.models import (
    MessageFailure,
    MessageSuccess,
    RedrivePolicy,
    SqsMessage,
    parse_sqs_event,
    queue_url_from_arn,
)
from sqs_batch.batch.processor import SqsBatchProcessor, batch_processor
from sqs_batch.batch.report import BatchProcessingError

__all__ = [
    "SQS_MAX_BATCH_SIZE",
    "chunk",
    "BatchOptions",
    "SqsGateway",
    "SqsMessageHandler",
    "resolve_handler",
    "MessageFailure",
    "MessageSuccess",
    "RedrivePolicy",
    "SqsMessage",
    "parse_sqs_event",
    "queue_url_from_arn",
    "SqsBatchProcessor",
    "batch_processor",
    "BatchProcessingError",
]
