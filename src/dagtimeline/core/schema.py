# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Frozen dataclass schema for client configuration.

Uses marshmallow_dataclass for type-safe configuration with validation.
The config class is frozen (immutable) after creation.

Example dagtimeline.yaml:
    timeline_address: "ats.example.com:8188"
    resourcemanager_address: "rm.example.com:8088"
    request_timeout: 15
"""

from typing import ClassVar, Optional, Type

from marshmallow import Schema, ValidationError, validates_schema
from marshmallow_dataclass import dataclass

# Defaults of a single-node cluster
DEFAULT_TIMELINE_ADDRESS = "0.0.0.0:8188"
DEFAULT_TIMELINE_HTTPS_ADDRESS = "0.0.0.0:8190"


class ClientConfigSchema(Schema):
    """Base schema adding cross-field checks."""

    @validates_schema
    def validate_numbers(self, data, **kwargs):
        if data.get("request_timeout", 1) <= 0:
            raise ValidationError("request_timeout must be positive", "request_timeout")
        if data.get("poll_interval_seconds", 1) <= 0:
            raise ValidationError("poll_interval_seconds must be positive", "poll_interval_seconds")
        if data.get("task_page_size", 1) < 0:
            raise ValidationError("task_page_size must not be negative", "task_page_size")


@dataclass(frozen=True, base_schema=ClientConfigSchema)
class ClientConfig:
    """Settings of a timeline DAG client.

    Attributes:
        timeline_address: host:port of the timeline web app (HTTP)
        timeline_https_address: host:port of the timeline web app (HTTPS)
        use_https: Query the HTTPS address instead of the HTTP one
        resourcemanager_address: Optional host:port of the ResourceManager web
            app. When set, the application is checked there before the
            timeline URI is handed out.
        request_timeout: Seconds before an HTTP request is abandoned
        verify_ssl: Verify server certificates on HTTPS
        poll_interval_seconds: Delay between polls in wait_for_completion()
        task_page_size: Default page size of task list queries
    """

    timeline_address: str = DEFAULT_TIMELINE_ADDRESS
    timeline_https_address: str = DEFAULT_TIMELINE_HTTPS_ADDRESS
    use_https: bool = False
    resourcemanager_address: Optional[str] = None
    request_timeout: float = 30.0
    verify_ssl: bool = True
    poll_interval_seconds: float = 5.0
    task_page_size: int = 100

    Schema: ClassVar[Type[Schema]] = Schema

    @property
    def scheme(self) -> str:
        return "https" if self.use_https else "http"

    @property
    def active_timeline_address(self) -> str:
        return self.timeline_https_address if self.use_https else self.timeline_address

