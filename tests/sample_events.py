"""Sample SQS events and queue identifiers shared by the tests."""

QUEUE_ARN = "arn:aws:sqs:us-east-2:123456789012:my-queue"
QUEUE_URL = "https://sqs.us-east-2.amazonaws.com/123456789012/my-queue"
DLQ_ARN = "arn:aws:sqs:us-east-2:123456789012:retry-queue"
DLQ_URL = "https://sqs.us-east-2.amazonaws.com/123456789012/retry-queue"

FIRST_ID = "059f36b4-87a3-44ab-83d2-661975830a7d"
SECOND_ID = "2e1424d4-f796-459a-8184-9c92662be6da"


def make_record(message_id: str, body: str = "test", queue_arn: str = QUEUE_ARN, **extra) -> dict:
    record = {
        "messageId": message_id,
        "receiptHandle": f"handle-{message_id}",
        "body": body,
        "attributes": {
            "ApproximateReceiveCount": "1",
            "SentTimestamp": "1545082649183",
            "SenderId": "AIDAIENQZJOLO23YVJ4VO",
            "ApproximateFirstReceiveTimestamp": "1545082649185",
        },
        "messageAttributes": {},
        "md5OfBody": "098f6bcd4621d373cade4e832627b4f6",
        "eventSource": "aws:sqs",
        "eventSourceARN": queue_arn,
        "awsRegion": "us-east-2",
    }
    record.update(extra)
    return record
