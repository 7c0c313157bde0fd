"""Shared fixtures for SQS batch processing tests."""

import pytest
from unittest.mock import MagicMock

from sample_events import DLQ_ARN, FIRST_ID, SECOND_ID, make_record


@pytest.fixture
def sqs_event():
    """Two message SQS event."""
    return {
        "Records": [
            make_record(FIRST_ID, body='{"order": 1}'),
            make_record(SECOND_ID, body='{"order": 2}'),
        ]
    }


@pytest.fixture
def sqs_event_25():
    """25 message SQS event; the second message has SECOND_ID."""
    ids = [f"{i:08d}-0000-4000-8000-000000000000" for i in range(25)]
    ids[1] = SECOND_ID
    return {"Records": [make_record(message_id) for message_id in ids]}


@pytest.fixture
def mock_sqs_client():
    """Create a mock SQS client."""
    mock = MagicMock()
    mock.delete_message_batch.return_value = {"Successful": [], "Failed": []}
    mock.send_message_batch.return_value = {"Successful": [], "Failed": []}
    mock.get_queue_attributes.return_value = {
        "Attributes": {
            "RedrivePolicy": (
                '{"deadLetterTargetArn": "' + DLQ_ARN + '", "maxReceiveCount": 2}'
            )
        }
    }
    return mock
