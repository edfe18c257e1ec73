from unittest.mock import MagicMock

import pytest
from sqs_statsd.exceptions import CatalogError, CloudWatchError
from sqs_statsd.services.catalog import build_catalog


def _metric(queue, name, namespace="AWS/SQS"):
    return {
        "Namespace": namespace,
        "MetricName": name,
        "Dimensions": [{"Name": "QueueName", "Value": queue}],
    }


def test_build_catalog_preserves_listing_order():
    cloudwatch = MagicMock()
    cloudwatch.list_metrics.return_value = [
        _metric("Zeta", "NumberOfMessagesSent"),
        _metric("Alpha", "NumberOfMessagesReceived"),
        _metric("Alpha", "NumberOfMessagesSent"),
    ]

    catalog = build_catalog(cloudwatch)

    cloudwatch.list_metrics.assert_called_once_with("AWS/SQS")
    assert isinstance(catalog, tuple)
    assert [d.outbound_name for d in catalog] == [
        "zeta.numberofmessagessent",
        "alpha.numberofmessagesreceived",
        "alpha.numberofmessagessent",
    ]
    assert all(d.period == 60 and d.statistics == ("Sum",) for d in catalog)


def test_build_catalog_empty_listing():
    cloudwatch = MagicMock()
    cloudwatch.list_metrics.return_value = []

    assert build_catalog(cloudwatch) == ()


def test_build_catalog_skips_series_without_dimensions(caplog):
    cloudwatch = MagicMock()
    cloudwatch.list_metrics.return_value = [
        {"Namespace": "AWS/SQS", "MetricName": "Orphan", "Dimensions": []},
        _metric("MyQueue", "NumberOfMessagesSent"),
    ]

    catalog = build_catalog(cloudwatch)

    assert [d.metric_name for d in catalog] == ["NumberOfMessagesSent"]
    assert any(r.getMessage() == "metric_skipped" for r in caplog.records)


def test_build_catalog_list_failure_raises_catalog_error():
    cloudwatch = MagicMock()
    cloudwatch.list_metrics.side_effect = CloudWatchError(
        "denied", operation="ListMetrics", code="AccessDenied"
    )

    with pytest.raises(CatalogError) as exc_info:
        build_catalog(cloudwatch)

    assert isinstance(exc_info.value.__cause__, CloudWatchError)
