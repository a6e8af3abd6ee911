# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Mock timeline service for integration testing.

Serves the read-only entity endpoints of the timeline REST API plus the
ResourceManager application report. Entities are stored in-memory and
every request is recorded for assertion in tests.
"""

from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from dagtimeline.contract import TimelineEntity

app = FastAPI()

# entity type -> entity id -> entity, in insertion order
entities: dict[str, dict[str, dict]] = {}
applications: dict[str, dict] = {}
requests_seen: list[dict] = []


def reset():
    """Clear all stored data between tests."""
    entities.clear()
    applications.clear()
    requests_seen.clear()


def add_entity(entity_type: str, entity_id: str, otherinfo: dict, primaryfilters: dict | None = None) -> dict:
    """Store an entity. Validates it against the shared contract model."""
    entity = TimelineEntity(
        entitytype=entity_type,
        entity=entity_id,
        primaryfilters=primaryfilters or {},
        otherinfo=otherinfo,
    ).model_dump(exclude_none=True)
    entities.setdefault(entity_type, {})[entity_id] = entity
    return entity


def add_application(application_id: str, state: str = "RUNNING"):
    applications[application_id] = {"id": application_id, "state": state}


def _split_filter(value: str) -> tuple[str, str]:
    key, sep, filter_value = value.partition(":")
    if not sep:
        raise HTTPException(status_code=400, detail=f"Bad filter: {value}")
    return key, filter_value


def _matches_primary(entity: dict, key: str, value: str) -> bool:
    return value in entity.get("primaryfilters", {}).get(key, [])


def _matches_secondary(entity: dict, key: str, value: str) -> bool:
    other = entity.get("otherinfo", {}).get(key)
    return (other is not None and str(other) == value) or _matches_primary(entity, key, value)


@app.get("/ws/v1/timeline/{entity_type}")
async def list_entities(
    entity_type: str,
    primaryFilter: str,
    secondaryFilter: str | None = None,
    fields: str | None = None,
    limit: int | None = None,
    fromId: str | None = None,
):
    """List entities of a type, filtered and paged like the real service."""
    requests_seen.append(
        {
            "type": "list",
            "entity_type": entity_type,
            "primaryFilter": primaryFilter,
            "secondaryFilter": secondaryFilter,
            "fields": fields,
            "limit": limit,
            "fromId": fromId,
        }
    )
    primary_key, primary_value = _split_filter(primaryFilter)
    selected = [e for e in entities.get(entity_type, {}).values() if _matches_primary(e, primary_key, primary_value)]

    if secondaryFilter is not None:
        secondary_key, secondary_value = _split_filter(secondaryFilter)
        selected = [e for e in selected if _matches_secondary(e, secondary_key, secondary_value)]

    if fromId is not None:
        ids = [e["entity"] for e in selected]
        selected = selected[ids.index(fromId) :] if fromId in ids else []

    if limit is not None:
        selected = selected[:limit]
    return {"entities": selected}


@app.get("/ws/v1/timeline/{entity_type}/{entity_id}")
async def get_entity(entity_type: str, entity_id: str, fields: str | None = None):
    """Look up a single entity."""
    requests_seen.append({"type": "get", "entity_type": entity_type, "entity_id": entity_id, "fields": fields})
    entity = entities.get(entity_type, {}).get(entity_id)
    if entity is None:
        raise HTTPException(status_code=404, detail=f"Entity {entity_id} of type {entity_type} is not found")
    return entity


@app.get("/ws/v1/cluster/apps/{application_id}")
async def get_application(application_id: str):
    """ResourceManager application report."""
    if application_id not in applications:
        raise HTTPException(status_code=404, detail=f"app with id: {application_id} not found")
    return {"app": applications[application_id]}


def create_test_client() -> TestClient:
    """Create a fresh TestClient with clean state."""
    reset()
    return TestClient(app)
