from __future__ import annotations

import argparse
import asyncio
import signal
import sys
from typing import Any, Sequence

from prometheus_client import start_http_server

from sqs_statsd import __version__
from sqs_statsd.core.config import Settings, load_settings
from sqs_statsd.core.logger import get_logger
from sqs_statsd.exceptions import ConfigurationError, StartupError
from sqs_statsd.startup import initialize_application
from sqs_statsd.utils.concurrency import run_blocking

logger = get_logger("app")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqs-statsd",
        description="Relay CloudWatch SQS metrics to StatsD every minute.",
    )
    parser.add_argument(
        "--aws-access", dest="aws_access_key", help="AWS access key [ACCESS_KEY]"
    )
    parser.add_argument(
        "--aws-secret", dest="aws_secret_key", help="AWS secret key [SECRET_KEY]"
    )
    parser.add_argument(
        "--aws-region", dest="aws_region", help="AWS region [AWS_REGION]"
    )
    parser.add_argument(
        "--statsd-host",
        dest="statsd_host",
        help="StatsD host:port [STATSD_HOST] (default: localhost:8125)",
    )
    parser.add_argument(
        "--metrics-port",
        dest="metrics_port",
        type=int,
        help="Port for the relay's Prometheus metrics, 0 disables [METRICS_PORT]",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        action="store_true",
        default=None,
        help="Debug logging [DEBUG]",
    )
    parser.add_argument("--version", action="version", version=__version__)
    return parser


def parse_args(argv: Sequence[str] | None = None) -> dict[str, Any]:
    """Flags that were given on the command line, keyed by settings field.

    Unset flags are left out so the environment and ``.env`` still apply.
    """
    namespace = build_parser().parse_args(argv)
    return {k: v for k, v in vars(namespace).items() if v is not None}


async def _run(settings: Settings) -> None:
    relay = await run_blocking(initialize_application, settings)

    shutdown_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    def _on_signal(signum, frame):  # noqa: D401
        logger.info("signal_received", extra={"signal": signum})
        loop.call_soon_threadsafe(shutdown_event.set)

    previous = {}
    try:
        if settings.metrics_port:
            _start_metrics_server(settings.metrics_port)

        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                previous[sig] = signal.signal(sig, _on_signal)
            except ValueError:  # not on the main thread
                logger.debug("signal_handler_install_failed", extra={"signal": sig})

        await relay.run(shutdown_event)
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
        relay.close()
        logger.info("relay_service_stopping")


def _start_metrics_server(port: int) -> None:
    try:
        start_http_server(port)
    except OSError as exc:
        logger.error(
            "could_not_start_metrics_server", extra={"port": port, "error": str(exc)}
        )
        raise StartupError(f"could not serve metrics on port {port}: {exc}") from exc
    logger.info("metrics_listening", extra={"port": port})


def main(argv: Sequence[str] | None = None) -> int:
    try:
        settings = load_settings(parse_args(argv))
    except ConfigurationError as exc:
        logger.error("cannot_parse_configuration", extra={"error": str(exc)})
        return 1

    try:
        asyncio.run(_run(settings))
    except StartupError as exc:
        logger.error("fatal_startup_error", extra={"error": str(exc)})
        return 1
    except KeyboardInterrupt:
        logger.info("keyboard_interrupt_shutdown")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
