"""SQS gateway used by the batch processor for queue cleanup."""

from typing import Any, Optional

import boto3
import structlog

from sqs_batch.batch.chunker import SQS_MAX_BATCH_SIZE
from sqs_batch.batch.models import RedrivePolicy

logger = structlog.get_logger(__name__)

REDRIVE_POLICY_ATTRIBUTE = "RedrivePolicy"


class SqsGateway:
    """Thin adapter over a boto3 SQS client.

    Every call is a single synchronous request. Client errors are not caught
    here; they propagate to the caller.
    """

    def __init__(self, sqs_client: Optional[Any] = None):
        """Initialize the gateway.

        Args:
            sqs_client: Optional SQS client (for testing).
        """
        self._sqs_client = sqs_client

    @property
    def sqs_client(self):
        """Get SQS client."""
        if self._sqs_client is None:
            self._sqs_client = boto3.client("sqs")
        return self._sqs_client

    def delete_message_batch(self, queue_url: str, entries: list[dict]) -> list[dict]:
        """Delete up to 10 messages from a queue.

        Args:
            queue_url: URL of the queue holding the messages.
            entries: ``{"Id", "ReceiptHandle"}`` entries.

        Returns:
            Entries the service reported as failed.
        """
        _check_entry_count(entries)
        response = self.sqs_client.delete_message_batch(
            QueueUrl=queue_url,
            Entries=entries,
        )
        failed = list(response.get("Failed") or [])
        logger.debug(
            "delete_message_batch_completed",
            queue_url=queue_url,
            requested=len(entries),
            failed=len(failed),
        )
        return failed

    def send_message_batch(self, queue_url: str, entries: list[dict]) -> list[dict]:
        """Send up to 10 messages to a queue.

        Args:
            queue_url: URL of the target queue.
            entries: ``{"Id", "MessageBody", "MessageAttributes"?}`` entries.

        Returns:
            Entries the service reported as failed.
        """
        _check_entry_count(entries)
        response = self.sqs_client.send_message_batch(
            QueueUrl=queue_url,
            Entries=entries,
        )
        failed = list(response.get("Failed") or [])
        logger.debug(
            "send_message_batch_completed",
            queue_url=queue_url,
            requested=len(entries),
            failed=len(failed),
        )
        return failed

    def get_redrive_policy(self, queue_url: str) -> Optional[RedrivePolicy]:
        """Fetch the redrive policy of a queue.

        Returns:
            The parsed policy, or None when the queue has no dead-letter queue.

        Raises:
            RedrivePolicyError: If the attribute value cannot be parsed.
        """
        response = self.sqs_client.get_queue_attributes(
            QueueUrl=queue_url,
            AttributeNames=[REDRIVE_POLICY_ATTRIBUTE],
        )
        raw_policy = (response.get("Attributes") or {}).get(REDRIVE_POLICY_ATTRIBUTE)
        if not raw_policy:
            return None
        return RedrivePolicy.from_json(raw_policy, queue_url=queue_url)


def _check_entry_count(entries: list[dict]) -> None:
    if not entries:
        raise ValueError("At least one entry is required")
    if len(entries) > SQS_MAX_BATCH_SIZE:
        raise ValueError(
            f"At most {SQS_MAX_BATCH_SIZE} entries are allowed per request, got {len(entries)}"
        )
