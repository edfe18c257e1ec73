"""Relay CloudWatch SQS queue metrics to a StatsD daemon."""

__version__ = "0.1.0"
