class CloudWatch:
    """CloudWatch query parameters used for every SQS series"""

    NAMESPACE = "AWS/SQS"
    STATISTIC_SUM = "Sum"

    # Aggregation period and trailing query window, both one minute
    PERIOD_SECONDS = 60
    WINDOW_SECONDS = 60


class Statsd:
    """StatsD sink defaults"""

    DEFAULT_HOST = "localhost:8125"
    PREFIX = "aws.sqs"
    MAX_UDP_SIZE = 512


TICK_INTERVAL_SECONDS = 60.0
