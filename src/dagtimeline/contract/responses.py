# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Response models for the timeline service query API.

Only the envelope is validated. Identifier fields that are neither strings
nor numbers become None and a null filter map is empty. Everything the
service puts under ``otherinfo`` stays a plain dict and is read field by
field by the parser, because its content differs per entity type and per
runtime version.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Query parameter value for the fields every lookup requests
FIELDS = "primaryfilters,otherinfo"


class TimelineEntity(BaseModel):
    """One entity document (single-entity response or list element)."""

    model_config = ConfigDict(extra="allow")

    entitytype: str | None = None
    entity: str | None = None
    starttime: Any = None
    domain: str | None = None
    primaryfilters: dict[str, Any] = Field(default_factory=dict)
    otherinfo: dict[str, Any] | None = None

    @field_validator("entitytype", "entity", "domain", mode="before")
    @classmethod
    def scalar_or_none(cls, value: Any) -> str | None:
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return None

    @field_validator("primaryfilters", mode="before")
    @classmethod
    def mapping_or_empty(cls, value: Any) -> dict[str, Any]:
        return value if isinstance(value, dict) else {}


class TimelineEntities(BaseModel):
    """List response: ``{"entities": [...]}``."""

    model_config = ConfigDict(extra="allow")

    entities: list[TimelineEntity] = Field(default_factory=list)

    @field_validator("entities", mode="before")
    @classmethod
    def null_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class CounterJson(BaseModel):
    """A single counter inside a counter group."""

    model_config = ConfigDict(extra="ignore")

    counterName: str
    counterDisplayName: str | None = None
    counterValue: int = 0


class CounterGroupJson(BaseModel):
    """A counter group with its counters."""

    model_config = ConfigDict(extra="ignore")

    counterGroupName: str
    counterGroupDisplayName: str | None = None
    counters: list[dict[str, Any]] = Field(default_factory=list)


class CountersJson(BaseModel):
    """The ``otherinfo.counters`` object."""

    model_config = ConfigDict(extra="ignore")

    counterGroups: list[dict[str, Any]] = Field(default_factory=list)
