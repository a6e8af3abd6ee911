"""
dagtimeline - Read-only DAG status client for the timeline service.

This package retrieves the execution status of a DAG run from a timeline
(history) service exposing a JSON-over-HTTP query API and turns the loosely
typed documents into frozen status objects.

Key modules:
- contract: Entity types, state enums and Pydantic envelope models
- core.client: TimelineDAGClient, the public query surface
- core.urls: Query URL construction
- core.parser: JSON document to status object mapping
- core.aggregator: Vertex progress roll-up
- core.counters: Hierarchical counter registry
- core.transport: requests-based JSON fetcher
- core.discovery: Timeline base URI resolution
- core.config / core.schema: dagtimeline.yaml loading and validation
- logging_utils: Logging configuration

Usage:
    from dagtimeline import StatusGetOpts, TimelineDAGClient

    with TimelineDAGClient.from_config("application_1_0001", "dag_1_0001_1") as client:
        status = client.get_dag_status({StatusGetOpts.GET_COUNTERS})
"""

__version__ = "0.1.0"

from .contract import DAGState, EntityType, StatusGetOpts, TaskState, VertexState
from .core.client import TimelineDAGClient
from .core.config import load_client_config
from .core.counters import Counter, CounterGroup, CounterRegistry
from .core.discovery import BaseUriResolver, ConfigUriResolver, StaticUriResolver
from .core.errors import (
    ApplicationNotFoundError,
    DAGClientError,
    EntityNotFoundError,
    MalformedResponseError,
    TimelineTransportError,
    UnsupportedOperationError,
)
from .core.models import (
    DAGInformation,
    DAGStatus,
    Progress,
    TaskInformation,
    VertexInformation,
    VertexStatus,
)
from .core.schema import ClientConfig
from .core.transport import JsonFetcher, RequestsJsonFetcher
from .logging_utils import setup_logging

__all__ = [
    # Version
    "__version__",
    # Logging
    "setup_logging",
    # Config
    "ClientConfig",
    "load_client_config",
    # Contract
    "DAGState",
    "EntityType",
    "StatusGetOpts",
    "TaskState",
    "VertexState",
    # Client
    "TimelineDAGClient",
    "JsonFetcher",
    "RequestsJsonFetcher",
    "BaseUriResolver",
    "ConfigUriResolver",
    "StaticUriResolver",
    # Models
    "Counter",
    "CounterGroup",
    "CounterRegistry",
    "DAGInformation",
    "DAGStatus",
    "Progress",
    "TaskInformation",
    "VertexInformation",
    "VertexStatus",
    # Errors
    "ApplicationNotFoundError",
    "DAGClientError",
    "EntityNotFoundError",
    "MalformedResponseError",
    "TimelineTransportError",
    "UnsupportedOperationError",
]
