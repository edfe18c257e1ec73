from botocore.exceptions import BotoCoreError

from sqs_statsd.core.config import Settings
from sqs_statsd.core.logger import configure_logging, get_logger
from sqs_statsd.exceptions import StartupError
from sqs_statsd.infrastructure.cloudwatch.client import CloudWatchClient
from sqs_statsd.infrastructure.statsd.client import StatsdSink
from sqs_statsd.services.catalog import build_catalog
from sqs_statsd.services.relay import Relay

logger = get_logger("startup")


def create_sink(settings: Settings) -> StatsdSink:
    host, port = settings.statsd_address
    try:
        return StatsdSink(host, port, prefix=settings.statsd_prefix)
    except StartupError as exc:
        logger.error(
            "could_not_initialize_statsd_client",
            extra={"statsd_host": settings.statsd_host, "error": str(exc)},
        )
        raise


def create_cloudwatch(settings: Settings) -> CloudWatchClient:
    try:
        return CloudWatchClient(settings)
    except (BotoCoreError, ValueError) as exc:
        logger.error(
            "could_not_open_cloudwatch",
            extra={"region": settings.aws_region, "error": str(exc)},
        )
        raise StartupError(
            f"could not open cloudwatch in {settings.aws_region}: {exc}"
        ) from exc


def initialize_application(settings: Settings) -> Relay:
    """Configure logging, open both clients and build the metric catalog.

    Order matters: the catalog is listed last, so a failure there aborts
    before any tick. Every error raised here is fatal.
    """
    configure_logging(settings)
    logger.info(
        "initializing_application",
        extra={
            "region": settings.aws_region,
            "statsd_host": settings.statsd_host,
            "verbose": settings.verbose,
        },
    )
    sink = create_sink(settings)
    cloudwatch = create_cloudwatch(settings)
    catalog = build_catalog(cloudwatch)
    logger.info(
        "application_initialized",
        extra={"num_metrics": len(catalog), "region": settings.aws_region},
    )
    return Relay(cloudwatch, sink, catalog)
