from .models import Datapoint, Dimension, MetricDescriptor, MetricPoint, StatQuery

__all__ = ["Datapoint", "Dimension", "MetricDescriptor", "MetricPoint", "StatQuery"]
