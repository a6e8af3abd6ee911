# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Canonical enum definitions for the timeline service contract."""

from enum import Enum


class EntityType(str, Enum):
    """Entity types the DAG runtime publishes to the timeline service."""

    DAG = "TEZ_DAG_ID"
    VERTEX = "TEZ_VERTEX_ID"
    TASK = "TEZ_TASK_ID"


class DAGState(str, Enum):
    """Overall DAG state as seen by clients.

    State transitions:
        SUBMITTED -> INITING -> RUNNING -> SUCCEEDED
                                        -> FAILED
                                        -> KILLED
                                        -> ERROR
    """

    SUBMITTED = "SUBMITTED"
    INITING = "INITING"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    KILLED = "KILLED"
    ERROR = "ERROR"

    def is_terminal(self) -> bool:
        """Check if this is a terminal state (no further transitions)."""
        return self in (DAGState.SUCCEEDED, DAGState.FAILED, DAGState.KILLED, DAGState.ERROR)


# Internal DAG states written by the runtime that clients see under another name
DAG_STATE_ALIASES: dict[str, DAGState] = {
    "NEW": DAGState.SUBMITTED,
    "INITED": DAGState.INITING,
    "COMMITTING": DAGState.RUNNING,
    "TERMINATING": DAGState.RUNNING,
}


class VertexState(str, Enum):
    """Vertex lifecycle states."""

    NEW = "NEW"
    INITIALIZING = "INITIALIZING"
    INITED = "INITED"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    KILLED = "KILLED"
    ERROR = "ERROR"
    TERMINATING = "TERMINATING"
    COMMITTING = "COMMITTING"

    def is_terminal(self) -> bool:
        """Check if this is a terminal state."""
        return self in (VertexState.SUCCEEDED, VertexState.FAILED, VertexState.KILLED, VertexState.ERROR)


class TaskState(str, Enum):
    """Task lifecycle states."""

    NEW = "NEW"
    SCHEDULED = "SCHEDULED"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    KILLED = "KILLED"


class StatusGetOpts(str, Enum):
    """Optional extras a status request may ask for."""

    GET_COUNTERS = "GET_COUNTERS"
