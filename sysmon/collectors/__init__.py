from .errors import CollectionFailure, ProbeRejected, ProbeUnreachable
from .health_probe import HealthProbe
from .system_sampler import MetricsSampler

__all__ = [
    "CollectionFailure",
    "HealthProbe",
    "MetricsSampler",
    "ProbeRejected",
    "ProbeUnreachable",
]
