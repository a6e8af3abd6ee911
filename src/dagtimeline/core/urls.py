# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Query URL construction for the timeline service.

Before (hand-built strings at every call site):
    url = base + "/TEZ_VERTEX_ID?primaryFilter=TEZ_DAG_ID:" + dag_id + "&fields=..."

After:
    url = entity_list_url(base, EntityType.VERTEX, (EntityType.DAG, dag_id))

Parameter order is part of the contract and never changes. Values are
inserted verbatim; identifiers issued by the runtime are already URL-safe.
"""

from dagtimeline.contract import FIELDS, EntityType

# (filter name, filter value), e.g. ("TEZ_DAG_ID", "dag_1_1") or ("vertexName", "map")
Filter = tuple[str | EntityType, str]


def _filter_param(name: str, query_filter: Filter) -> str:
    key, value = query_filter
    if isinstance(key, EntityType):
        key = key.value
    return f"{name}={key}:{value}"


def entity_url(base_uri: str, entity_type: EntityType, entity_id: str) -> str:
    """URL of a single entity lookup.

    Example:
        entity_url("http://ats/ws/v1/timeline", EntityType.DAG, "dag_1_1")
        -> "http://ats/ws/v1/timeline/TEZ_DAG_ID/dag_1_1?fields=primaryfilters,otherinfo"
    """
    return f"{base_uri.rstrip('/')}/{entity_type.value}/{entity_id}?fields={FIELDS}"


def entity_list_url(
    base_uri: str,
    entity_type: EntityType,
    primary_filter: Filter,
    secondary_filter: Filter | None = None,
    limit: int | None = None,
    from_id: str | None = None,
) -> str:
    """URL of a list lookup.

    Args:
        base_uri: Timeline REST root, e.g. http://host:8188/ws/v1/timeline
        entity_type: Type of the entities to list
        primary_filter: Mandatory primary filter
        secondary_filter: Optional secondary filter
        limit: Page size, only sent when positive
        from_id: Continuation token, only sent when given

    Returns:
        <base>/<TYPE>?primaryFilter=k:v[&secondaryFilter=k:v]&fields=...[&limit=n][&fromId=id]
    """
    params = [_filter_param("primaryFilter", primary_filter)]
    if secondary_filter is not None:
        params.append(_filter_param("secondaryFilter", secondary_filter))
    params.append(f"fields={FIELDS}")
    if limit is not None and limit > 0:
        params.append(f"limit={limit}")
    if from_id is not None:
        params.append(f"fromId={from_id}")

    return f"{base_uri.rstrip('/')}/{entity_type.value}?{'&'.join(params)}"
