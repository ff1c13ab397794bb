"""
Shared Powertools instances for the storefront API.

The handler, logic and data access layers all log, trace and emit metrics
through the objects defined here so that a single invocation produces one
correlated set of log lines, one X-Ray segment tree and one EMF blob.
"""

from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.metrics import MetricUnit, Metrics
from aws_lambda_powertools.tracing import Tracer

METRICS_NAMESPACE = 'StorefrontSheets'

# Service name comes from POWERTOOLS_SERVICE_NAME, level from POWERTOOLS_LOG_LEVEL / LOG_LEVEL
logger: Logger = Logger()

# POWERTOOLS_TRACE_DISABLED=true turns tracing off (tests, local runs)
tracer: Tracer = Tracer()

# POWERTOOLS_METRICS_NAMESPACE overrides the namespace below
metrics: Metrics = Metrics(namespace=METRICS_NAMESPACE)


def count(name: str, value: int = 1) -> None:
    """Add a Count metric to the current invocation."""
    metrics.add_metric(name=name, unit=MetricUnit.Count, value=value)
