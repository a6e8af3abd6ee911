# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Status value objects returned by the timeline DAG client.

Every object here is built fresh from one query response and is frozen
afterwards. Nothing is cached between calls. Objects that carry maps or counter
registries compare by value but are not hashable.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from dagtimeline.contract import DAGState, TaskState, VertexState
from dagtimeline.core.counters import CounterRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Progress:
    """Task counts of a vertex or a whole DAG.

    The service never reports running tasks, so running_task_count is derived
    here and nowhere else. When the reported counts add up to more than the
    total the running count is clamped to zero and the inconsistency logged.

    Attributes:
        total_task_count: Number of tasks
        failed_task_count: Tasks that ended FAILED
        killed_task_count: Tasks that ended KILLED
        succeeded_task_count: Tasks that ended SUCCEEDED
        running_task_count: Derived, total - failed - killed - succeeded
    """

    total_task_count: int = 0
    failed_task_count: int = 0
    killed_task_count: int = 0
    succeeded_task_count: int = 0
    running_task_count: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        running = (
            self.total_task_count
            - self.failed_task_count
            - self.killed_task_count
            - self.succeeded_task_count
        )
        if running < 0:
            logger.warning(
                "Inconsistent task counts (total=%d failed=%d killed=%d succeeded=%d), "
                "clamping running tasks to 0",
                self.total_task_count,
                self.failed_task_count,
                self.killed_task_count,
                self.succeeded_task_count,
            )
            running = 0
        object.__setattr__(self, "running_task_count", running)

    def __add__(self, other: "Progress") -> "Progress":
        if not isinstance(other, Progress):
            return NotImplemented
        return Progress(
            total_task_count=self.total_task_count + other.total_task_count,
            failed_task_count=self.failed_task_count + other.failed_task_count,
            killed_task_count=self.killed_task_count + other.killed_task_count,
            succeeded_task_count=self.succeeded_task_count + other.succeeded_task_count,
        )

    def __str__(self) -> str:
        return (
            f"TotalTasks: {self.total_task_count} Succeeded: {self.succeeded_task_count} "
            f"Running: {self.running_task_count} Failed: {self.failed_task_count} "
            f"Killed: {self.killed_task_count}"
        )


@dataclass(frozen=True)
class DAGStatus:
    """Point-in-time status of a DAG run."""

    state: DAGState
    diagnostics: tuple[str, ...] = ()
    dag_progress: Progress = field(default_factory=Progress)
    vertex_progress: dict[str, Progress] = field(default_factory=dict)
    dag_counters: CounterRegistry | None = None

    __hash__ = None

    @property
    def is_completed(self) -> bool:
        return self.state.is_terminal()


@dataclass(frozen=True)
class VertexStatus:
    """Point-in-time status of one vertex."""

    state: VertexState
    diagnostics: tuple[str, ...] = ()
    progress: Progress = field(default_factory=Progress)
    vertex_counters: CounterRegistry | None = None

    __hash__ = None

    @property
    def is_completed(self) -> bool:
        return self.state.is_terminal()


@dataclass(frozen=True)
class VertexInformation:
    id: str
    name: str


@dataclass(frozen=True)
class DAGInformation:
    """Descriptive snapshot of a DAG.

    Two snapshots are equal when they describe the same DAG: same id, same
    name and same vertex name to id mapping. Timing, status, plan and
    counters are carried along but do not take part in comparisons.
    """

    dag_id: str
    name: str | None = None
    vertex_name_to_id_mapping: dict[str, str] = field(default_factory=dict)
    start_time: int | None = field(default=None, compare=False)
    end_time: int | None = field(default=None, compare=False)
    application_id: str | None = field(default=None, compare=False)
    status: DAGState | None = field(default=None, compare=False)
    dag_plan: dict[str, Any] | None = field(default=None, compare=False, repr=False)
    counters: CounterRegistry | None = field(default=None, compare=False, repr=False)

    __hash__ = None

    @property
    def vertices(self) -> list[VertexInformation]:
        return [
            VertexInformation(id=vertex_id, name=name)
            for name, vertex_id in self.vertex_name_to_id_mapping.items()
        ]

    def get_vertex_information(self, name: str) -> VertexInformation | None:
        vertex_id = self.vertex_name_to_id_mapping.get(name)
        if vertex_id is None:
            return None
        return VertexInformation(id=vertex_id, name=name)


@dataclass(frozen=True)
class TaskInformation:
    """Snapshot of one task and its attempts."""

    task_id: str
    state: TaskState
    diagnostics: str | None = None
    start_time: int | None = None
    scheduled_time: int | None = None
    end_time: int | None = None
    successful_attempt_id: str | None = None
    failed_attempts: int = 0
    counters: CounterRegistry | None = None

    __hash__ = None
