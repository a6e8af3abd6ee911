# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Read-only DAG client backed by the timeline service.

Each public method builds the query URLs, fetches them through the injected
JsonFetcher, parses the documents and returns a frozen status object. No
retries, no caching: the first failure is raised to the caller.

Usage:
    client = TimelineDAGClient.from_config("application_1_0001", "dag_1_0001_1")
    status = client.get_dag_status({StatusGetOpts.GET_COUNTERS})
    print(status.state, status.dag_progress)

Tests inject deterministic collaborators instead:
    client = TimelineDAGClient(app_id, dag_id, fetcher=FakeFetcher(docs),
                               resolver=StaticUriResolver("http://ats/ws/v1/timeline"))
"""

import dataclasses
import threading
import time
from collections.abc import Collection

from dagtimeline.contract import EntityType, StatusGetOpts
from dagtimeline.core.aggregator import aggregate_vertex_progress
from dagtimeline.core.config import load_client_config
from dagtimeline.core.discovery import BaseUriResolver, ConfigUriResolver
from dagtimeline.core.errors import UnsupportedOperationError
from dagtimeline.core.models import DAGInformation, DAGStatus, TaskInformation, VertexStatus
from dagtimeline.core.parser import (
    parse_dag_information,
    parse_dag_status,
    parse_task_information,
    parse_task_information_list,
    parse_vertex_status,
)
from dagtimeline.core.schema import ClientConfig
from dagtimeline.core.transport import JsonFetcher, RequestsJsonFetcher
from dagtimeline.core.urls import entity_list_url, entity_url
from dagtimeline.logging_utils import get_logger

logger = get_logger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 5.0
DEFAULT_TASK_PAGE_SIZE = 100

StatusOptions = Collection[StatusGetOpts] | None


def _wants_counters(options: StatusOptions) -> bool:
    return bool(options) and StatusGetOpts.GET_COUNTERS in options


class TimelineDAGClient:
    """Status queries for one DAG of one application.

    The application id and DAG id are fixed at construction. The timeline
    base URI is resolved on first use and then kept for the lifetime of the
    client; concurrent first calls resolve it only once.
    """

    def __init__(
        self,
        application_id: str,
        dag_id: str,
        fetcher: JsonFetcher,
        resolver: BaseUriResolver,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        task_page_size: int = DEFAULT_TASK_PAGE_SIZE,
    ):
        self.application_id = application_id
        self._dag_id = dag_id
        self._fetcher = fetcher
        self._resolver = resolver
        self.poll_interval = poll_interval
        self.task_page_size = task_page_size

        self._base_uri: str | None = None
        self._base_uri_lock = threading.Lock()
        self._owns_fetcher = False

    @classmethod
    def from_config(
        cls,
        application_id: str,
        dag_id: str,
        config: ClientConfig | None = None,
    ) -> "TimelineDAGClient":
        """Create a client talking HTTP through requests.

        Args:
            application_id: Application that ran the DAG
            dag_id: DAG to query
            config: Client config (default: load_client_config())
        """
        if config is None:
            config = load_client_config()

        fetcher = RequestsJsonFetcher(timeout=config.request_timeout, verify_ssl=config.verify_ssl)
        client = cls(
            application_id,
            dag_id,
            fetcher=fetcher,
            resolver=ConfigUriResolver(config, fetcher),
            poll_interval=config.poll_interval_seconds,
            task_page_size=config.task_page_size,
        )
        client._owns_fetcher = True
        return client

    @property
    def dag_id(self) -> str:
        return self._dag_id

    @property
    def execution_context(self) -> str:
        return f"Executing on timeline service with App id {self.application_id}"

    @property
    def base_uri(self) -> str:
        """Timeline REST root, resolved once."""
        if self._base_uri is None:
            with self._base_uri_lock:
                if self._base_uri is None:
                    self._base_uri = self._resolver.resolve(self.application_id).rstrip("/")
                    logger.debug("Using timeline service at %s", self._base_uri)
        return self._base_uri

    # ------------------------------------------------------------------
    # DAG
    # ------------------------------------------------------------------

    def get_dag_status(self, options: StatusOptions = None) -> DAGStatus:
        """Current state, diagnostics, progress and (optionally) counters of the DAG.

        Issues the DAG lookup, then one vertex list query for progress.

        Raises:
            EntityNotFoundError: If the timeline service has no data for the DAG
            MalformedResponseError: If the DAG status is missing or unknown
            TimelineTransportError: If a request fails
        """
        dag_url = entity_url(self.base_uri, EntityType.DAG, self._dag_id)
        status = parse_dag_status(self._fetcher.fetch_json(dag_url), _wants_counters(options), dag_url)

        vertices_url = entity_list_url(self.base_uri, EntityType.VERTEX, (EntityType.DAG, self._dag_id))
        dag_progress, vertex_progress = aggregate_vertex_progress(
            self._fetcher.fetch_json(vertices_url), vertices_url
        )

        logger.debug("DAG %s is %s (%s)", self._dag_id, status.state.value, dag_progress)
        return dataclasses.replace(status, dag_progress=dag_progress, vertex_progress=vertex_progress)

    def get_dag_information(self) -> DAGInformation:
        """Name, vertices and timing of the DAG.

        Raises:
            ApplicationNotFoundError: If the application cannot be located
            EntityNotFoundError: If the timeline service has no data for the DAG
        """
        url = entity_url(self.base_uri, EntityType.DAG, self._dag_id)
        return parse_dag_information(self._fetcher.fetch_json(url), url)

    def wait_for_completion(
        self,
        options: StatusOptions = None,
        poll_interval: float | None = None,
        timeout: float | None = None,
    ) -> DAGStatus:
        """Poll get_dag_status() until the DAG reaches a terminal state.

        Args:
            options: Status options passed to every poll
            poll_interval: Seconds between polls (default: client poll_interval)
            timeout: Give up after this many seconds (default: wait forever)

        Raises:
            TimeoutError: If timeout elapses first
        """
        interval = poll_interval if poll_interval is not None else self.poll_interval
        deadline = None if timeout is None else time.monotonic() + timeout

        while True:
            status = self.get_dag_status(options)
            if status.is_completed:
                return status
            if deadline is not None and time.monotonic() + interval > deadline:
                raise TimeoutError(f"DAG {self._dag_id} still {status.state.value} after {timeout}s")
            logger.info("DAG %s %s: %s", self._dag_id, status.state.value, status.dag_progress)
            time.sleep(interval)

    def try_kill_dag(self) -> None:
        raise UnsupportedOperationError("Killing a DAG is not supported by the timeline client")

    # ------------------------------------------------------------------
    # VERTICES
    # ------------------------------------------------------------------

    def get_vertex_status(self, vertex_name: str, options: StatusOptions = None) -> VertexStatus:
        """Status of one vertex, looked up by name.

        Raises:
            EntityNotFoundError: If no vertex of this DAG has this name
        """
        url = entity_list_url(
            self.base_uri,
            EntityType.VERTEX,
            (EntityType.DAG, self._dag_id),
            secondary_filter=("vertexName", vertex_name),
        )
        return parse_vertex_status(self._fetcher.fetch_json(url), vertex_name, _wants_counters(options), url)

    # ------------------------------------------------------------------
    # TASKS
    # ------------------------------------------------------------------

    def get_task_information(self, vertex_id: str, task_id: str) -> TaskInformation:
        """Details of a single task.

        vertex_id is accepted for symmetry with the list query; task ids are
        unique across the DAG.
        """
        url = entity_url(self.base_uri, EntityType.TASK, task_id)
        logger.debug("Fetching task %s of vertex %s", task_id, vertex_id)
        return parse_task_information(self._fetcher.fetch_json(url), url)

    def get_task_information_list(
        self,
        vertex_id: str,
        from_task_id: str | None = None,
        limit: int | None = None,
    ) -> list[TaskInformation]:
        """One page of the tasks of a vertex.

        Args:
            vertex_id: Vertex whose tasks are listed
            from_task_id: Continuation token; None for the first page
            limit: Page size (default: task_page_size)

        Returns:
            Tasks in service order; shorter than limit (or empty) on the last page
        """
        if limit is None:
            limit = self.task_page_size
        url = entity_list_url(
            self.base_uri,
            EntityType.TASK,
            (EntityType.VERTEX, vertex_id),
            limit=limit,
            from_id=from_task_id,
        )
        return parse_task_information_list(self._fetcher.fetch_json(url), url)

    # ------------------------------------------------------------------
    # LIFECYCLE
    # ------------------------------------------------------------------

    def close(self) -> None:
        if self._owns_fetcher and isinstance(self._fetcher, RequestsJsonFetcher):
            self._fetcher.close()

    def __enter__(self) -> "TimelineDAGClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
