"""Build dispatch and tracking.

This module handles:
- Build value types (Identifier, Source, Request, Result)
- The asynchronous Builder contract and a thread pool implementation
- The BuildManager tracking the latest Result per build
- The Build resource model

Build records (ORM) live in camelk_reconciler.builds.records.
"""

from camelk_reconciler.builds.builder import Builder, ExecutorBuilder
from camelk_reconciler.builds.manager import BuildManager
from camelk_reconciler.builds.models import Identifier, Request, Result, Source
from camelk_reconciler.builds.resource import Build, build_pod_name

__all__ = [
    "Build",
    "BuildManager",
    "Builder",
    "ExecutorBuilder",
    "Identifier",
    "Request",
    "Result",
    "Source",
    "build_pod_name",
]
