# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Wire contract for the timeline service.

This package defines the literal entity type names, the state enums and the
Pydantic envelope models of the timeline query API. It has zero internal
imports and only depends on pydantic.

Usage:
    from dagtimeline.contract import EntityType, DAGState, TimelineEntity
"""

from dagtimeline.contract.enums import (
    DAG_STATE_ALIASES,
    DAGState,
    EntityType,
    StatusGetOpts,
    TaskState,
    VertexState,
)
from dagtimeline.contract.responses import (
    FIELDS,
    CounterGroupJson,
    CounterJson,
    CountersJson,
    TimelineEntities,
    TimelineEntity,
)

__all__ = [
    "DAG_STATE_ALIASES",
    "DAGState",
    "EntityType",
    "StatusGetOpts",
    "TaskState",
    "VertexState",
    "FIELDS",
    "CounterGroupJson",
    "CounterJson",
    "CountersJson",
    "TimelineEntities",
    "TimelineEntity",
]
