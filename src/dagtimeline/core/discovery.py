# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Timeline base URI discovery.

A resolver turns an application id into the REST root of the timeline
service that holds the application's DAGs:

    <scheme>://<host:port>/ws/v1/timeline

Resolvers raise ApplicationNotFoundError when the application or its
timeline service cannot be located, so callers can treat the DAG as gone.
"""

import logging
from typing import Protocol

from dagtimeline.core.errors import ApplicationNotFoundError, MalformedResponseError, TimelineTransportError
from dagtimeline.core.schema import ClientConfig
from dagtimeline.core.transport import JsonFetcher

logger = logging.getLogger(__name__)

TIMELINE_REST_PATH = "/ws/v1/timeline"
RM_APPS_REST_PATH = "/ws/v1/cluster/apps"


class BaseUriResolver(Protocol):
    """Resolves the timeline REST root for an application."""

    def resolve(self, application_id: str) -> str: ...


class StaticUriResolver:
    """Resolver for a fixed, known timeline URI."""

    def __init__(self, base_uri: str):
        self.base_uri = base_uri.rstrip("/")

    def resolve(self, application_id: str) -> str:
        return self.base_uri


class ConfigUriResolver:
    """Resolver that builds the timeline URI from a ClientConfig.

    When the config names a ResourceManager and a fetcher is given, the
    application is looked up there first so a vanished application is
    reported as ApplicationNotFoundError instead of an empty DAG.
    """

    def __init__(self, config: ClientConfig, fetcher: JsonFetcher | None = None):
        self.config = config
        self.fetcher = fetcher

    def _check_application(self, application_id: str) -> None:
        url = f"{self.config.scheme}://{self.config.resourcemanager_address}{RM_APPS_REST_PATH}/{application_id}"
        try:
            report = self.fetcher.fetch_json(url)
        except (TimelineTransportError, MalformedResponseError) as e:
            raise ApplicationNotFoundError(f"Application {application_id} not found: {e}", url=url) from e

        if not isinstance(report.get("app"), dict):
            raise ApplicationNotFoundError(f"Application {application_id} not found", url=url)
        logger.debug("Application %s is %s", application_id, report["app"].get("state"))

    def resolve(self, application_id: str) -> str:
        address = self.config.active_timeline_address
        if not address:
            raise ApplicationNotFoundError(
                f"No timeline service address configured for application {application_id}"
            )

        if self.config.resourcemanager_address and self.fetcher is not None:
            self._check_application(application_id)

        base_uri = f"{self.config.scheme}://{address.rstrip('/')}{TIMELINE_REST_PATH}"
        logger.debug("Resolved timeline URI for %s: %s", application_id, base_uri)
        return base_uri
