"""Batch processor for SQS messages with partial failure handling.

Messages are processed one at a time in the order they were received. When
every message succeeds the values are returned and the queue is left alone:
the Lambda event source mapping deletes the batch. When some messages fail
the invocation will not be acknowledged, so the processor reconciles the
source queue itself before reporting the failure:

1. Successfully processed messages are deleted from the source queue.
2. Non-retryable failures are sent to the queue's dead-letter queue and then
   deleted, or only deleted when configured to do so.
3. Retryable failures stay on the queue for native redelivery.
"""

from typing import Any, Callable, Iterable, Optional, Union

import structlog

from sqs_batch.batch.chunker import chunk
from sqs_batch.batch.config import BatchOptions
from sqs_batch.batch.gateway import SqsGateway
from sqs_batch.batch.handler import HandlerLike, resolve_handler
from sqs_batch.batch.models import (
    MessageFailure,
    MessageSuccess,
    RedrivePolicy,
    SqsMessage,
    parse_sqs_event,
)
from sqs_batch.batch.report import BatchProcessingError
from sqs_batch.core.classification import ExceptionClassifier

logger = structlog.get_logger(__name__)

SuccessHook = Callable[[SqsMessage, Any], None]
FailureHook = Callable[[SqsMessage, Exception], None]


class SqsBatchProcessor:
    """Processes a batch of SQS messages with per-message isolation."""

    def __init__(
        self,
        options: Optional[BatchOptions] = None,
        gateway: Optional[SqsGateway] = None,
        sqs_client: Optional[Any] = None,
        on_success: Optional[SuccessHook] = None,
        on_failure: Optional[FailureHook] = None,
    ):
        """Initialize the batch processor.

        Args:
            options: Batch options; defaults raise on any failure.
            gateway: SQS gateway used for cleanup.
            sqs_client: Optional SQS client (for testing), used when no
                gateway is given.
            on_success: Called with each message and its result value.
                Raising from it fails the message.
            on_failure: Called with each failed message and its error.
                Errors raised from it are logged and ignored.
        """
        self.options = options or BatchOptions()
        self.gateway = gateway or SqsGateway(sqs_client=sqs_client)
        self.classifier = ExceptionClassifier(self.options.non_retryable_exceptions)
        self.on_success = on_success
        self.on_failure = on_failure

    def process_event(self, event: dict, handler: HandlerLike) -> list:
        """Process the records of a Lambda SQS event."""
        return self.process(parse_sqs_event(event), handler)

    def process(self, messages: Iterable[SqsMessage], handler: HandlerLike) -> list:
        """Process every message of a batch with the given handler.

        Args:
            messages: Messages in processing order.
            handler: Function, handler instance or handler class.

        Returns:
            Values returned by the handler for the successful messages, in
            input order.

        Raises:
            BatchProcessingError: If any message failed and exceptions are
                not suppressed.
            botocore.exceptions.ClientError: If a cleanup call fails.
        """
        process_message = resolve_handler(handler)
        successes: list[MessageSuccess] = []
        failures: list[MessageFailure] = []

        for message in messages:
            outcome = self._process_message(message, process_message)
            if isinstance(outcome, MessageSuccess):
                successes.append(outcome)
            else:
                failures.append(outcome)

        values = [success.value for success in successes]

        logger.info(
            "batch_processed",
            total=len(successes) + len(failures),
            succeeded=len(successes),
            failed=len(failures),
        )

        if not failures:
            return values

        self._reconcile_queue(successes, failures)

        error = BatchProcessingError(
            exceptions=[failure.error for failure in failures],
            failures=[failure.message for failure in failures],
            success_return_values=values,
        )

        if self.options.suppress_exception:
            logger.debug(
                "batch_failures_suppressed",
                failed_count=len(failures),
                message_ids=error.failed_message_ids,
            )
            return values

        raise error

    def _process_message(
        self,
        message: SqsMessage,
        process_message: Callable[[SqsMessage], Any],
    ) -> Union[MessageSuccess, MessageFailure]:
        try:
            value = process_message(message)
            if self.on_success is not None:
                self.on_success(message, value)
            return MessageSuccess(message=message, value=value)
        except Exception as e:
            logger.error(
                "message_processing_failed",
                message_id=message.message_id,
                error_type=type(e).__name__,
                error=str(e),
            )
            self._notify_failure(message, e)
            return MessageFailure(message=message, error=e)

    def _notify_failure(self, message: SqsMessage, error: Exception) -> None:
        if self.on_failure is None:
            return
        try:
            self.on_failure(message, error)
        except Exception as hook_error:
            # A failing failure hook must not fail the batch
            logger.warning(
                "failure_hook_failed",
                message_id=message.message_id,
                error=str(hook_error),
            )

    def _reconcile_queue(
        self,
        successes: list[MessageSuccess],
        failures: list[MessageFailure],
    ) -> None:
        """Delete, redrive or keep messages of a partially failed batch."""
        non_retryable = [
            failure.message
            for failure in failures
            if self.classifier.is_non_retryable(failure.error)
        ]
        retryable_count = len(failures) - len(non_retryable)

        # Each source queue is cleaned up against its own URL
        success_groups = _group_by_queue(success.message for success in successes)
        non_retryable_groups = _group_by_queue(non_retryable)
        delete_directly = self.options.delete_non_retryable_messages

        # Successes are deleted before any redrive call is made
        for queue_url, queue_successes in success_groups.items():
            to_delete = list(queue_successes)
            if delete_directly:
                to_delete.extend(non_retryable_groups.pop(queue_url, []))
            self._delete_messages(queue_url, to_delete)

        for queue_url, queue_non_retryable in non_retryable_groups.items():
            if delete_directly:
                self._delete_messages(queue_url, queue_non_retryable)
            else:
                moved = self._move_to_dead_letter_queue(queue_url, queue_non_retryable)
                self._delete_messages(queue_url, moved)

        if non_retryable and delete_directly:
            logger.info("non_retryable_messages_deleted", count=len(non_retryable))

        if retryable_count:
            logger.info("retryable_messages_left_on_queue", count=retryable_count)

    def _move_to_dead_letter_queue(
        self,
        queue_url: str,
        messages: list[SqsMessage],
    ) -> list[SqsMessage]:
        """Send messages to the dead-letter queue of their source queue.

        Returns:
            Messages that were sent and can be deleted from the source queue.
        """
        redrive_policy: Optional[RedrivePolicy] = self.gateway.get_redrive_policy(queue_url)
        if redrive_policy is None:
            logger.error(
                "dead_letter_queue_not_configured",
                queue_url=queue_url,
                message_ids=[message.message_id for message in messages],
            )
            return []

        dlq_url = redrive_policy.dead_letter_queue_url
        failed_ids: set[str] = set()

        for entries in chunk([m.send_entry() for m in messages], self.options.max_batch_size):
            failed = self.gateway.send_message_batch(dlq_url, entries)
            if failed:
                logger.error(
                    "dead_letter_send_failed",
                    queue_url=dlq_url,
                    failed=failed,
                )
                failed_ids.update(entry["Id"] for entry in failed)

        moved = [message for message in messages if message.message_id not in failed_ids]
        logger.info(
            "non_retryable_messages_moved",
            queue_url=queue_url,
            dead_letter_queue_url=dlq_url,
            moved=len(moved),
            failed=len(failed_ids),
        )
        return moved

    def _delete_messages(self, queue_url: str, messages: list[SqsMessage]) -> None:
        if not messages:
            return

        for entries in chunk([m.delete_entry() for m in messages], self.options.max_batch_size):
            failed = self.gateway.delete_message_batch(queue_url, entries)
            if failed:
                logger.warning(
                    "message_delete_failed",
                    queue_url=queue_url,
                    failed=failed,
                )

        logger.info("messages_deleted", queue_url=queue_url, count=len(messages))


def _group_by_queue(messages: Iterable[SqsMessage]) -> dict[str, list[SqsMessage]]:
    groups: dict[str, list[SqsMessage]] = {}
    for message in messages:
        groups.setdefault(message.queue_url, []).append(message)
    return groups


def batch_processor(
    messages: Union[dict, Iterable[SqsMessage]],
    handler: HandlerLike,
    suppress_exception: bool = False,
    non_retryable_exceptions: Iterable = (),
    delete_non_retryable_messages: bool = False,
    sqs_client: Optional[Any] = None,
) -> list:
    """Process an SQS event or a list of messages in one call.

    Args:
        messages: Lambda SQS event or messages in processing order.
        handler: Function, handler instance or handler class.
        suppress_exception: Return successful values instead of raising.
        non_retryable_exceptions: Exception classes or error code tags.
        delete_non_retryable_messages: Delete non-retryable messages instead
            of moving them to the dead-letter queue.
        sqs_client: Optional SQS client (for testing).

    Returns:
        Values returned for the successful messages.
    """
    processor = SqsBatchProcessor(
        options=BatchOptions(
            suppress_exception=suppress_exception,
            non_retryable_exceptions=tuple(non_retryable_exceptions),
            delete_non_retryable_messages=delete_non_retryable_messages,
        ),
        sqs_client=sqs_client,
    )
    if isinstance(messages, dict):
        return processor.process_event(messages, handler)
    return processor.process(messages, handler)
