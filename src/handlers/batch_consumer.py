"""SQS batch consumer Lambda handler.

Consumes messages from a source queue with partial failure handling:
- Each record body is decoded as JSON and handed to the record handler
- Successful records of a partially failed batch are deleted explicitly
- Malformed records are non-retryable and go to the dead-letter queue
- Remaining failures are reported so the batch is redelivered
"""

import json
import os
from typing import Any, Optional

from sqs_batch.batch import (
    BatchOptions,
    BatchProcessingError,
    SqsBatchProcessor,
    SqsGateway,
    SqsMessage,
)
from sqs_batch.core import (
    SqsBatchError,
    bind_invocation,
    clear_invocation,
    configure_logging,
    get_logger,
)

configure_logging(level=os.environ.get("LOG_LEVEL", "INFO"))
logger = get_logger(__name__)

# Global service instances
_sqs_gateway: Optional[SqsGateway] = None


def _get_sqs_gateway() -> SqsGateway:
    """Get or create the SQS gateway."""
    global _sqs_gateway
    if _sqs_gateway is None:
        _sqs_gateway = SqsGateway()
    return _sqs_gateway


class MalformedRecordError(SqsBatchError):
    """Record body is not a JSON object; redelivery cannot fix it."""

    def __init__(self, message: str, message_id: Optional[str] = None, **kwargs):
        super().__init__(message, error_code="MALFORMED_RECORD", **kwargs)
        self.message_id = message_id
        self.details.update({"message_id": message_id})


def record_handler(message: SqsMessage) -> dict:
    """Decode and process a single record.

    Raises:
        MalformedRecordError: If the body is not a JSON object.
    """
    try:
        payload = json.loads(message.body)
    except json.JSONDecodeError as e:
        raise MalformedRecordError(
            f"Invalid message format: {str(e)}",
            message_id=message.message_id,
        ) from e

    if not isinstance(payload, dict):
        raise MalformedRecordError(
            "Message body must be a JSON object",
            message_id=message.message_id,
        )

    logger.info(
        "record_processed",
        message_id=message.message_id,
        keys=sorted(payload),
    )
    return {"messageId": message.message_id, "status": "success"}


def process_handler(event: dict, context: Any) -> dict:
    """Lambda handler for SQS batches.

    Triggered by the source queue's event source mapping.

    Args:
        event: SQS event containing the batch records.
        context: Lambda context.

    Returns:
        Processing summary.

    Raises:
        BatchProcessingError: If records failed and exceptions are not
            suppressed, so Lambda redelivers the remaining messages.
    """
    bind_invocation(aws_request_id=getattr(context, "aws_request_id", None))
    logger.info("batch_consumer_invoked", record_count=len(event.get("Records", [])))

    options = BatchOptions.from_env(non_retryable_exceptions=(MalformedRecordError,))
    processor = SqsBatchProcessor(options=options, gateway=_get_sqs_gateway())

    try:
        results = processor.process_event(event, record_handler)
    except BatchProcessingError as e:
        logger.error("batch_partially_failed", **e.to_dict())
        raise
    finally:
        clear_invocation()

    return {
        "processed": len(results),
        "results": results,
    }
