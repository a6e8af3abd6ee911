# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
HTTP fetch capability used by the timeline DAG client.

The client only needs "GET this URL and give me the JSON object". Anything
that satisfies JsonFetcher can be injected (tests pass an in-memory fake);
RequestsJsonFetcher is the default implementation on top of requests.

Status codes are never interpreted beyond success/failure: every non-2xx
response, connection error or timeout is a TimelineTransportError.
"""

import logging
from typing import Any, Protocol

import requests

from dagtimeline.core.errors import MalformedResponseError, TimelineTransportError

logger = logging.getLogger(__name__)


class JsonFetcher(Protocol):
    """Anything that can GET a URL and return the decoded JSON object."""

    def fetch_json(self, url: str) -> dict[str, Any]: ...


class RequestsJsonFetcher:
    """JsonFetcher backed by a requests.Session.

    Usage:
        with RequestsJsonFetcher(timeout=10.0) as fetcher:
            doc = fetcher.fetch_json("http://ats:8188/ws/v1/timeline/TEZ_DAG_ID/dag_1_1")
    """

    def __init__(
        self,
        timeout: float = 30.0,
        verify_ssl: bool = True,
        session: requests.Session | None = None,
    ):
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self._session = session or requests.Session()
        self._session.headers.setdefault("Accept", "application/json")

    def fetch_json(self, url: str) -> dict[str, Any]:
        """GET url and decode the body.

        Raises:
            TimelineTransportError: On connection errors, timeouts and non-2xx responses
            MalformedResponseError: If the body is not a JSON object
        """
        logger.debug("GET %s", url)
        try:
            response = self._session.get(url, timeout=self.timeout, verify=self.verify_ssl)
        except requests.exceptions.RequestException as e:
            raise TimelineTransportError(f"Failed to reach timeline service at {url}: {e}", url=url) from e

        if not 200 <= response.status_code < 300:
            raise TimelineTransportError(
                f"Timeline service returned HTTP {response.status_code} for {url}",
                url=url,
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Response from {url} is not valid JSON: {e}", url=url) from e

        if not isinstance(body, dict):
            raise MalformedResponseError(
                f"Expected a JSON object from {url}, got {type(body).__name__}", url=url
            )
        return body

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "RequestsJsonFetcher":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
