"""Custom exception classes for SQS batch processing."""

from typing import Optional


class SqsBatchError(Exception):
    """Base exception for all batch processing errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class RedrivePolicyError(SqsBatchError):
    """Error reading the redrive policy of a source queue."""

    def __init__(
        self,
        message: str,
        queue_url: Optional[str] = None,
        raw_policy: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, error_code="REDRIVE_POLICY", **kwargs)
        self.queue_url = queue_url
        self.raw_policy = raw_policy
        self.details.update({
            "queue_url": queue_url,
            "raw_policy": raw_policy,
        })


class InvalidMessageError(SqsBatchError):
    """Error converting an event record into a queue message."""

    def __init__(
        self,
        message: str,
        message_id: Optional[str] = None,
        field: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, error_code="INVALID_MESSAGE", **kwargs)
        self.message_id = message_id
        self.field = field
        self.details.update({
            "message_id": message_id,
            "field": field,
        })
