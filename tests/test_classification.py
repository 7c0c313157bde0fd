"""Tests for retryable / non-retryable error classification."""

import pytest

from sqs_batch.core.classification import ErrorClass, ExceptionClassifier, classify
from sqs_batch.core.errors import InvalidMessageError, RedrivePolicyError, SqsBatchError


class IllegalStateError(Exception):
    pass


class PaymentDeclinedError(SqsBatchError):
    """Application error tagged with an error code."""

    def __init__(self, message: str):
        super().__init__(message, error_code="PAYMENT_DECLINED")


class TestExceptionClassifier:
    """Tests for ExceptionClassifier class."""

    def test_unregistered_error_is_retryable(self):
        """Test that classification is opt-in."""
        classifier = ExceptionClassifier()
        assert classifier.classify(RuntimeError("boom")) == ErrorClass.RETRYABLE
        assert classifier.is_non_retryable(ValueError("bad")) is False

    def test_exact_type_match(self):
        """Test that a configured exception class is non-retryable."""
        classifier = ExceptionClassifier([ValueError])
        assert classifier.classify(ValueError("bad")) == ErrorClass.NON_RETRYABLE

    def test_subclass_match(self):
        """Test that subclasses of a configured class match."""
        classifier = ExceptionClassifier([LookupError])
        assert classifier.is_non_retryable(KeyError("missing")) is True
        assert classifier.is_non_retryable(IndexError("out of range")) is True

    def test_parent_class_does_not_match(self):
        """Test that a base class of a configured kind does not match."""
        classifier = ExceptionClassifier([KeyError])
        assert classifier.is_non_retryable(LookupError("missing")) is False

    def test_multiple_kinds(self):
        """Test several configured kinds."""
        classifier = ExceptionClassifier([ValueError, PermissionError])
        assert classifier.is_non_retryable(PermissionError("denied")) is True
        assert classifier.is_non_retryable(TimeoutError("slow")) is False

    def test_error_code_match(self):
        """Test matching by error code tag."""
        classifier = ExceptionClassifier(["PAYMENT_DECLINED"])
        assert classifier.is_non_retryable(PaymentDeclinedError("card expired")) is True
        assert classifier.is_non_retryable(SqsBatchError("untagged")) is False

    def test_error_code_of_builtin_errors(self):
        """Test that custom error codes classify subclasses of the base error."""
        classifier = ExceptionClassifier(["INVALID_MESSAGE"])
        assert classifier.is_non_retryable(InvalidMessageError("bad record")) is True
        assert classifier.is_non_retryable(RedrivePolicyError("bad policy")) is False

    def test_message_text_is_ignored(self):
        """Test that error messages never drive classification."""
        classifier = ExceptionClassifier(["ValueError", "PAYMENT_DECLINED"])
        assert classifier.is_non_retryable(RuntimeError("ValueError PAYMENT_DECLINED")) is False

    def test_mixed_kinds(self):
        """Test classes and codes configured together."""
        classifier = ExceptionClassifier([ValueError, "PAYMENT_DECLINED"])
        assert classifier.is_non_retryable(ValueError("bad")) is True
        assert classifier.is_non_retryable(PaymentDeclinedError("card expired")) is True
        assert classifier.is_non_retryable(KeyError("missing")) is False

    @pytest.mark.parametrize("kind", [42, None, object(), ValueError("instance")])
    def test_invalid_kind(self, kind):
        """Test that kinds must be exception classes or codes."""
        with pytest.raises(TypeError):
            ExceptionClassifier([kind])


class TestClassifyFunction:
    """Tests for the classify helper."""

    def test_classify(self):
        """Test one-off classification."""
        assert classify(IllegalStateError(), [IllegalStateError]) == ErrorClass.NON_RETRYABLE
        assert classify(IllegalStateError()) == ErrorClass.RETRYABLE
        assert ErrorClass.NON_RETRYABLE.value == "non_retryable"
