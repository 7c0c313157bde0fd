"""Retryable / non-retryable classification of message processing errors.

A failed message is retryable unless its error matches one of the
configured non-retryable kinds. A kind is either an exception class,
matched with ``isinstance`` so subclasses match too, or an error code tag
matched against the ``error_code`` attribute carried by ``SqsBatchError``
and its subclasses. Error messages are never inspected.
"""

from enum import Enum
from typing import Iterable, Optional, Union


ErrorKind = Union[type, str]


class ErrorClass(str, Enum):
    """Outcome of classifying a message processing error."""

    RETRYABLE = "retryable"
    NON_RETRYABLE = "non_retryable"


class ExceptionClassifier:
    """Classifies errors against a fixed set of non-retryable kinds."""

    def __init__(self, non_retryable: Optional[Iterable[ErrorKind]] = None):
        """Initialize the classifier.

        Args:
            non_retryable: Exception classes and/or error code tags that mark
                an error as non-retryable.

        Raises:
            TypeError: If a kind is neither an exception class nor a string.
        """
        exception_types = []
        error_codes = set()
        for kind in non_retryable or ():
            if isinstance(kind, str):
                error_codes.add(kind)
            elif isinstance(kind, type) and issubclass(kind, BaseException):
                exception_types.append(kind)
            else:
                raise TypeError(
                    f"Non-retryable kind must be an exception class or an "
                    f"error code, got {kind!r}"
                )
        self._exception_types = tuple(exception_types)
        self._error_codes = frozenset(error_codes)

    def classify(self, error: BaseException) -> ErrorClass:
        """Classify an error.

        Args:
            error: The error raised by a message handler.

        Returns:
            ErrorClass.NON_RETRYABLE if the error matches a configured kind,
            otherwise ErrorClass.RETRYABLE.
        """
        if self._exception_types and isinstance(error, self._exception_types):
            return ErrorClass.NON_RETRYABLE

        error_code = getattr(error, "error_code", None)
        if error_code is not None and error_code in self._error_codes:
            return ErrorClass.NON_RETRYABLE

        return ErrorClass.RETRYABLE

    def is_non_retryable(self, error: BaseException) -> bool:
        """Determine if an error must not be left for queue redelivery."""
        return self.classify(error) is ErrorClass.NON_RETRYABLE


def classify(
    error: BaseException,
    non_retryable: Optional[Iterable[ErrorKind]] = None,
) -> ErrorClass:
    """Classify a single error against a set of non-retryable kinds."""
    return ExceptionClassifier(non_retryable).classify(error)
