# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Exception types raised by the timeline DAG client.

Data and lookup failures derive from DAGClientError. Transport failures are
IOErrors instead, so callers can tell "the service said something wrong"
apart from "the service could not be reached".
"""


class DAGClientError(Exception):
    """Base class for failures reported by the DAG client."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class MalformedResponseError(DAGClientError):
    """The response was empty, unparsable or missing a required field."""


class EntityNotFoundError(MalformedResponseError):
    """The queried entity is not present in the timeline service."""


class ApplicationNotFoundError(DAGClientError):
    """The application that ran the DAG (or its timeline service) is gone."""


class UnsupportedOperationError(DAGClientError):
    """The operation needs a live application master; this client is read-only."""


class TimelineTransportError(IOError):
    """The HTTP request failed (connection error, timeout or non-2xx status)."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
