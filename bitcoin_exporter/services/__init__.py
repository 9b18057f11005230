"""Service layer modules."""

from .collector import (
    ExporterCollector,
    ScrapeStatus,
    create_collector,
    init_collector,
)

__all__ = ["ExporterCollector", "ScrapeStatus", "create_collector", "init_collector"]
