# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Mapping of timeline service JSON documents to status objects.

The service returns sparse documents whose ``otherinfo`` section is written by
the DAG runtime and may lack any field, or carry it with an unexpected type.
Every field is therefore read through a small extraction helper that either
returns a typed value, a default, or raises MalformedResponseError when the
field is one the object cannot exist without (entity id, state).

Two response shapes exist:
- single entity:  {"entity": "...", "primaryfilters": {...}, "otherinfo": {...}}
- entity list:    {"entities": [<single entity>, ...]}
"""

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, TypeVar

from pydantic import ValidationError

from dagtimeline.contract import (
    DAG_STATE_ALIASES,
    CounterGroupJson,
    CounterJson,
    CountersJson,
    DAGState,
    TaskState,
    TimelineEntities,
    TimelineEntity,
    VertexState,
)
from dagtimeline.core.counters import CounterRegistry
from dagtimeline.core.errors import EntityNotFoundError, MalformedResponseError
from dagtimeline.core.models import (
    DAGInformation,
    DAGStatus,
    Progress,
    TaskInformation,
    VertexStatus,
)

logger = logging.getLogger(__name__)

StateT = TypeVar("StateT", bound=Enum)


# ============================================================================
# Field extraction helpers
# ============================================================================


def _coerce_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def optional_int(info: Mapping[str, Any], key: str, default: int | None = None) -> int | None:
    """Read an integer field, returning default when absent or not an integer."""
    if key not in info or info[key] is None:
        return default
    value = _coerce_int(info[key])
    if value is None:
        logger.debug("Ignoring non-integer %s=%r", key, info[key])
        return default
    return value


def _coerce_str(value: Any, key: str) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    logger.debug("Ignoring non-string %s=%r", key, value)
    return None


def optional_str(info: Mapping[str, Any], key: str) -> str | None:
    """Read a string field. Numbers are accepted and stringified."""
    return _coerce_str(info.get(key), key)


def optional_mapping(info: Mapping[str, Any], key: str) -> dict[str, str]:
    """Read a flat object of string values (e.g. vertexNameIdMapping)."""
    value = info.get(key)
    if not isinstance(value, Mapping):
        return {}
    return {str(k): str(v) for k, v in value.items() if v is not None}


def first_filter_value(entity: TimelineEntity, key: str) -> Any:
    """First value of a primary filter, or None."""
    values = entity.primaryfilters.get(key)
    if isinstance(values, list):
        return values[0] if values else None
    return values


def first_filter_str(entity: TimelineEntity, key: str) -> str | None:
    return _coerce_str(first_filter_value(entity, key), key)


def diagnostics_of(info: Mapping[str, Any]) -> tuple[str, ...]:
    """The service stores one diagnostics string; expose it as a sequence."""
    diagnostics = optional_str(info, "diagnostics")
    if not diagnostics:
        return ()
    return (diagnostics,)


def to_state(
    value: Any,
    state_cls: type[StateT],
    aliases: Mapping[str, StateT] | None = None,
) -> StateT | None:
    """Convert a wire state string to state_cls, or None if it is not one."""
    if not isinstance(value, str):
        return None
    name = value.strip().upper()
    if aliases and name in aliases:
        return aliases[name]
    try:
        return state_cls(name)
    except ValueError:
        return None


def required_state(
    info: Mapping[str, Any],
    keys: tuple[str, ...],
    state_cls: type[StateT],
    aliases: Mapping[str, StateT] | None = None,
    url: str | None = None,
) -> StateT:
    """Read the state of a status-shaped object.

    Raises:
        MalformedResponseError: If none of keys is present or the value is not a known state
    """
    for key in keys:
        if info.get(key) is None:
            continue
        state = to_state(info[key], state_cls, aliases)
        if state is None:
            raise MalformedResponseError(f"Unknown {state_cls.__name__} {info[key]!r} in field {key!r}", url=url)
        return state
    raise MalformedResponseError(f"Response has no {' or '.join(keys)} field", url=url)


# ============================================================================
# Envelopes
# ============================================================================


def load_entity(document: Mapping[str, Any] | TimelineEntity, url: str | None = None) -> TimelineEntity:
    """Validate a single-entity document."""
    if isinstance(document, TimelineEntity):
        return document
    try:
        return TimelineEntity.model_validate(document)
    except ValidationError as e:
        raise MalformedResponseError(f"Invalid timeline entity: {e}", url=url) from e


def load_entities(document: Mapping[str, Any], url: str | None = None) -> list[TimelineEntity]:
    """Validate an entity-list document. A document without entities is an empty list."""
    try:
        return TimelineEntities.model_validate(document).entities
    except ValidationError as e:
        raise MalformedResponseError(f"Invalid timeline entity list: {e}", url=url) from e


def require_otherinfo(entity: TimelineEntity, url: str | None = None) -> dict[str, Any]:
    """otherinfo of an entity that must exist.

    An empty document (no otherinfo at all) means the service does not know
    the entity.
    """
    if entity.otherinfo is None:
        raise EntityNotFoundError("Timeline service returned no data for the requested entity", url=url)
    return entity.otherinfo


# ============================================================================
# Counters
# ============================================================================


def parse_counters(info: Mapping[str, Any]) -> CounterRegistry | None:
    """Build a CounterRegistry from ``otherinfo.counters.counterGroups``.

    Counters are optional: a missing counters object yields None and malformed
    groups or counters are skipped.
    """
    raw = info.get("counters")
    if not isinstance(raw, Mapping):
        return None

    try:
        counters_json = CountersJson.model_validate(raw)
    except ValidationError as e:
        logger.warning("Ignoring malformed counters: %s", e)
        return None

    registry = CounterRegistry()
    for raw_group in counters_json.counterGroups:
        try:
            group_json = CounterGroupJson.model_validate(raw_group)
        except ValidationError as e:
            logger.warning("Skipping malformed counter group %r: %s", raw_group, e)
            continue

        group = registry.add_group(group_json.counterGroupName, group_json.counterGroupDisplayName)
        for raw_counter in group_json.counters:
            try:
                counter_json = CounterJson.model_validate(raw_counter)
            except ValidationError as e:
                logger.warning("Skipping malformed counter %r in group %s: %s", raw_counter, group.name, e)
                continue
            group.add_counter(counter_json.counterName, counter_json.counterDisplayName, counter_json.counterValue)

    return registry


# ============================================================================
# Entities
# ============================================================================


def progress_of(info: Mapping[str, Any]) -> Progress:
    """Task counts of a vertex.

    numCompletedTasks is reported too but not used: running is always derived.
    """
    return Progress(
        total_task_count=optional_int(info, "numTasks", 0),
        failed_task_count=optional_int(info, "numFailedTasks", 0),
        killed_task_count=optional_int(info, "numKilledTasks", 0),
        succeeded_task_count=optional_int(info, "numSucceededTasks", 0),
    )


def parse_dag_status(
    document: Mapping[str, Any],
    with_counters: bool = False,
    url: str | None = None,
) -> DAGStatus:
    """DAG status without progress (progress comes from the vertex list)."""
    info = require_otherinfo(load_entity(document, url), url)
    state = required_state(info, ("status",), DAGState, DAG_STATE_ALIASES, url)

    return DAGStatus(
        state=state,
        diagnostics=diagnostics_of(info),
        dag_counters=parse_counters(info) if with_counters else None,
    )


def parse_dag_information(document: Mapping[str, Any], url: str | None = None) -> DAGInformation:
    entity = load_entity(document, url)
    info = require_otherinfo(entity, url)
    if not entity.entity:
        raise MalformedResponseError("DAG document has no entity id", url=url)

    dag_plan = info.get("dagPlan")
    if not isinstance(dag_plan, Mapping):
        dag_plan = None

    name = optional_str(dag_plan, "dagName") if dag_plan else None
    if name is None:
        name = first_filter_str(entity, "dagName")

    status_value = info.get("status", first_filter_value(entity, "status"))
    status = to_state(status_value, DAGState, DAG_STATE_ALIASES)
    if status is None and status_value is not None:
        logger.warning("Unknown DAG status %r for %s", status_value, entity.entity)

    application_id = optional_str(info, "applicationId")
    if application_id is None:
        application_id = first_filter_str(entity, "applicationId")

    return DAGInformation(
        dag_id=entity.entity,
        name=name,
        vertex_name_to_id_mapping=optional_mapping(info, "vertexNameIdMapping"),
        start_time=_coerce_int(entity.starttime),
        end_time=optional_int(info, "endTime"),
        application_id=application_id,
        status=status,
        dag_plan=dict(dag_plan) if dag_plan else None,
        counters=parse_counters(info),
    )


def parse_vertex_progress(entity: TimelineEntity) -> tuple[str | None, Progress]:
    """(vertex name, progress) of one vertex list element.

    Falls back to the vertex id when the runtime did not record a name.
    """
    info = entity.otherinfo or {}
    name = optional_str(info, "vertexName") or entity.entity
    return name, progress_of(info)


def parse_vertex_status(
    document: Mapping[str, Any],
    vertex_name: str,
    with_counters: bool = False,
    url: str | None = None,
) -> VertexStatus:
    """Status of vertex_name taken from a vertex list response.

    Raises:
        EntityNotFoundError: If no entity in the list carries this vertex name
        MalformedResponseError: If the matching entity has no valid status
    """
    for entity in load_entities(document, url):
        info = entity.otherinfo or {}
        if optional_str(info, "vertexName") != vertex_name:
            continue

        return VertexStatus(
            state=required_state(info, ("status",), VertexState, url=url),
            diagnostics=diagnostics_of(info),
            progress=progress_of(info),
            vertex_counters=parse_counters(info) if with_counters else None,
        )

    raise EntityNotFoundError(f"Vertex {vertex_name} not found in timeline response", url=url)


def parse_task_information(
    document: Mapping[str, Any] | TimelineEntity,
    url: str | None = None,
) -> TaskInformation:
    entity = load_entity(document, url)
    info = require_otherinfo(entity, url)
    if not entity.entity:
        raise MalformedResponseError("Task document has no entity id", url=url)

    start_time = optional_int(info, "startTime")
    if start_time is None:
        start_time = _coerce_int(entity.starttime)

    return TaskInformation(
        task_id=entity.entity,
        state=required_state(info, ("status", "state"), TaskState, url=url),
        diagnostics=optional_str(info, "diagnostics"),
        start_time=start_time,
        scheduled_time=optional_int(info, "scheduledTime"),
        end_time=optional_int(info, "endTime"),
        successful_attempt_id=optional_str(info, "successfulAttemptId"),
        failed_attempts=optional_int(info, "numFailedTaskAttempts", 0),
        counters=parse_counters(info),
    )


def parse_task_information_list(document: Mapping[str, Any], url: str | None = None) -> list[TaskInformation]:
    """Tasks of a list response, in the order the service returned them."""
    return [parse_task_information(entity, url) for entity in load_entities(document, url)]
