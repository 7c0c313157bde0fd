"""Data models for SQS batch processing.

- Queue messages parsed from Lambda SQS event records
- Per-message outcomes (success / failure)
- Redrive (dead-letter) policy of a source queue
"""

import base64
import json
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from sqs_batch.core.errors import InvalidMessageError, RedrivePolicyError


def queue_url_from_arn(queue_arn: str) -> str:
    """Convert an SQS queue ARN into its queue URL.

    ``arn:aws:sqs:us-east-2:123456789012:my-queue`` becomes
    ``https://sqs.us-east-2.amazonaws.com/123456789012/my-queue``.

    Raises:
        ValueError: If the value is not an SQS queue ARN.
    """
    parts = queue_arn.split(":")
    if len(parts) != 6 or parts[0] != "arn" or parts[2] != "sqs":
        raise ValueError(f"Not an SQS queue ARN: {queue_arn!r}")
    region, account_id, queue_name = parts[3], parts[4], parts[5]
    return f"https://sqs.{region}.amazonaws.com/{account_id}/{queue_name}"


class SqsMessage(BaseModel):
    """One message of an SQS batch, as delivered to a Lambda function."""

    model_config = {"frozen": True, "populate_by_name": True}

    message_id: str = Field(..., alias="messageId", description="Unique message identifier")
    receipt_handle: str = Field(..., alias="receiptHandle", description="Handle used to delete the message")
    body: str = Field("", description="Opaque message body")
    event_source_arn: str = Field(..., alias="eventSourceARN", description="ARN of the origin queue")
    attributes: dict[str, str] = Field(default_factory=dict, description="System attributes")
    message_attributes: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        alias="messageAttributes",
        description="User message attributes in Lambda event format",
    )
    md5_of_body: Optional[str] = Field(None, alias="md5OfBody")
    aws_region: Optional[str] = Field(None, alias="awsRegion")

    @classmethod
    def from_record(cls, record: dict) -> "SqsMessage":
        """Build a message from one ``Records`` entry of an SQS event.

        Raises:
            InvalidMessageError: If a required field is missing or malformed.
        """
        try:
            return cls.model_validate(record)
        except ValidationError as e:
            first = e.errors()[0]
            raise InvalidMessageError(
                f"Invalid SQS record: {first['msg']}",
                message_id=record.get("messageId") if isinstance(record, dict) else None,
                field=".".join(str(loc) for loc in first["loc"]),
            ) from e

    @property
    def queue_url(self) -> str:
        """URL of the queue the message was received from."""
        return queue_url_from_arn(self.event_source_arn)

    def delete_entry(self) -> dict:
        """Entry for a DeleteMessageBatch request."""
        return {"Id": self.message_id, "ReceiptHandle": self.receipt_handle}

    def send_entry(self) -> dict:
        """Entry for a SendMessageBatch request carrying the original body."""
        entry: dict[str, Any] = {"Id": self.message_id, "MessageBody": self.body}
        attributes = _to_api_message_attributes(self.message_attributes)
        if attributes:
            entry["MessageAttributes"] = attributes
        return entry


def _to_api_message_attributes(event_attributes: dict[str, dict[str, Any]]) -> dict:
    """Convert Lambda event message attributes to the SQS API shape.

    Lambda delivers ``{"stringValue", "binaryValue", "dataType", ...}`` with
    base64 encoded binary values; SendMessageBatch expects ``DataType`` plus
    ``StringValue`` or raw ``BinaryValue`` bytes.
    """
    converted = {}
    for name, value in event_attributes.items():
        data_type = value.get("dataType") or value.get("DataType")
        if not data_type:
            continue
        attribute: dict[str, Any] = {"DataType": data_type}
        string_value = value.get("stringValue")
        binary_value = value.get("binaryValue")
        if string_value is not None:
            attribute["StringValue"] = string_value
        elif binary_value is not None:
            attribute["BinaryValue"] = (
                base64.b64decode(binary_value) if isinstance(binary_value, str) else binary_value
            )
        else:
            continue
        converted[name] = attribute
    return converted


def parse_sqs_event(event: dict) -> list[SqsMessage]:
    """Parse the records of a Lambda SQS event, preserving their order."""
    return [SqsMessage.from_record(record) for record in event.get("Records", [])]


class RedrivePolicy(BaseModel):
    """Dead-letter configuration of a source queue.

    ``max_receive_count`` is informational: the queue service counts
    receives, not this engine.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    dead_letter_target_arn: str = Field(..., alias="deadLetterTargetArn")
    max_receive_count: Optional[int] = Field(None, alias="maxReceiveCount")

    @classmethod
    def from_json(cls, raw_policy: str, queue_url: Optional[str] = None) -> "RedrivePolicy":
        """Parse the ``RedrivePolicy`` queue attribute.

        Raises:
            RedrivePolicyError: If the attribute is not a valid policy.
        """
        try:
            return cls.model_validate(json.loads(raw_policy))
        except (ValueError, TypeError) as e:
            # pydantic's ValidationError is a ValueError
            raise RedrivePolicyError(
                f"Malformed redrive policy: {e}",
                queue_url=queue_url,
                raw_policy=raw_policy,
            ) from e

    @property
    def dead_letter_queue_url(self) -> str:
        try:
            return queue_url_from_arn(self.dead_letter_target_arn)
        except ValueError as e:
            raise RedrivePolicyError(str(e), raw_policy=self.dead_letter_target_arn) from e


@dataclass(frozen=True)
class MessageSuccess:
    """A message whose handler returned a value."""

    message: SqsMessage
    value: Any


@dataclass(frozen=True)
class MessageFailure:
    """A message whose handler raised."""

    message: SqsMessage
    error: Exception
