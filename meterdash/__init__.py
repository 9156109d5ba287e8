from . import (
    canon,
    types,
    exceptions,
    utils,
    validate,
    config,
    ingest,
    gaps,
    series,
    usage,
    chart,
    client,
    dashboard,
)

__all__ = [
    "canon",
    "types",
    "exceptions",
    "utils",
    "validate",
    "config",
    "ingest",
    "gaps",
    "series",
    "usage",
    "chart",
    "client",
    "dashboard",
]
