from datetime import datetime, timezone

import boto3
import pytest
from botocore.stub import Stubber
from sqs_statsd.domain.models import Dimension, MetricDescriptor
from sqs_statsd.exceptions import CloudWatchError
from sqs_statsd.infrastructure.cloudwatch.client import CloudWatchClient


@pytest.fixture
def boto_client():
    return boto3.client(
        "cloudwatch",
        region_name="us-east-1",
        aws_access_key_id="AKIDEXAMPLE",
        aws_secret_access_key="wJalrXUtnFEMI",
    )


@pytest.fixture
def stubber(boto_client):
    with Stubber(boto_client) as stub:
        yield stub
        stub.assert_no_pending_responses()


@pytest.fixture
def client(settings, boto_client):
    return CloudWatchClient(settings, client=boto_client)


def _metric(queue: str, name: str) -> dict:
    return {
        "Namespace": "AWS/SQS",
        "MetricName": name,
        "Dimensions": [{"Name": "QueueName", "Value": queue}],
    }


def test_builds_boto_client_from_settings(settings):
    cw = CloudWatchClient(settings)

    assert cw.region == "us-east-1"
    assert cw.client.meta.region_name == "us-east-1"
    assert cw.client.meta.service_model.service_name == "cloudwatch"


def test_request_timeout_applied(settings):
    settings = settings.model_copy(update={"aws_request_timeout_seconds": 5.0})

    cw = CloudWatchClient(settings)

    assert cw.client.meta.config.connect_timeout == 5.0
    assert cw.client.meta.config.read_timeout == 5.0


def test_list_metrics_follows_pages(client, stubber):
    stubber.add_response(
        "list_metrics",
        {
            "Metrics": [_metric("a", "NumberOfMessagesSent")],
            "NextToken": "page-2",
        },
        {"Namespace": "AWS/SQS"},
    )
    stubber.add_response(
        "list_metrics",
        {"Metrics": [_metric("b", "NumberOfMessagesDeleted")]},
        {"Namespace": "AWS/SQS", "NextToken": "page-2"},
    )

    metrics = client.list_metrics("AWS/SQS")

    assert [m["MetricName"] for m in metrics] == [
        "NumberOfMessagesSent",
        "NumberOfMessagesDeleted",
    ]


def test_list_metrics_error(client, stubber):
    stubber.add_client_error(
        "list_metrics",
        service_error_code="AccessDenied",
        service_message="not authorized",
        http_status_code=403,
    )

    with pytest.raises(CloudWatchError) as exc_info:
        client.list_metrics("AWS/SQS")

    assert exc_info.value.operation == "ListMetrics"
    assert exc_info.value.code == "AccessDenied"


def test_get_metric_statistics(client, stubber):
    descriptor = MetricDescriptor(
        metric_name="NumberOfMessagesSent",
        dimensions=(Dimension(name="QueueName", value="MyQueue"),),
    )
    tick = datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)
    query = descriptor.query(tick)
    stubber.add_response(
        "get_metric_statistics",
        {
            "Label": "NumberOfMessagesSent",
            "Datapoints": [
                {"Timestamp": query.start_time, "Sum": 42.9, "Unit": "Count"}
            ],
        },
        {
            "Namespace": "AWS/SQS",
            "MetricName": "NumberOfMessagesSent",
            "Dimensions": [{"Name": "QueueName", "Value": "MyQueue"}],
            "StartTime": query.start_time,
            "EndTime": tick,
            "Period": 60,
            "Statistics": ["Sum"],
        },
    )

    datapoints = client.get_metric_statistics(query)

    assert len(datapoints) == 1
    assert datapoints[0].sum == 42.9
    assert datapoints[0].unit == "Count"


def test_get_metric_statistics_no_data(client, stubber):
    descriptor = MetricDescriptor(
        metric_name="NumberOfMessagesSent",
        dimensions=(Dimension(name="QueueName", value="Idle"),),
    )
    stubber.add_response(
        "get_metric_statistics",
        {"Label": "NumberOfMessagesSent", "Datapoints": []},
    )

    query = descriptor.query(datetime(2024, 3, 1, tzinfo=timezone.utc))

    assert client.get_metric_statistics(query) == []


def test_get_metric_statistics_error(client, stubber):
    descriptor = MetricDescriptor(
        metric_name="NumberOfMessagesSent",
        dimensions=(Dimension(name="QueueName", value="MyQueue"),),
    )
    stubber.add_client_error(
        "get_metric_statistics", service_error_code="Throttling", http_status_code=400
    )

    with pytest.raises(CloudWatchError) as exc_info:
        client.get_metric_statistics(
            descriptor.query(datetime(2024, 3, 1, tzinfo=timezone.utc))
        )

    assert exc_info.value.operation == "GetMetricStatistics"
    assert exc_info.value.code == "Throttling"
