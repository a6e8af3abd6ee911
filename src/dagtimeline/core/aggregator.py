# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Roll-up of per-vertex task counts into DAG progress."""

from collections.abc import Mapping
from typing import Any

from dagtimeline.core.models import Progress
from dagtimeline.core.parser import load_entities, parse_vertex_progress
from dagtimeline.logging_utils import get_logger

logger = get_logger(__name__)


def aggregate_vertex_progress(
    vertex_list_document: Mapping[str, Any],
    url: str | None = None,
) -> tuple[Progress, dict[str, Progress]]:
    """Sum the progress of every vertex in a vertex list response.

    Args:
        vertex_list_document: ``{"entities": [...]}`` of TEZ_VERTEX_ID entities
        url: URL the document came from, for error messages

    Returns:
        (DAG progress, vertex name -> progress). An empty list gives zero
        progress and an empty map. Duplicate vertex names keep the last entry.
    """
    dag_progress = Progress()
    vertex_progress: dict[str, Progress] = {}

    for entity in load_entities(vertex_list_document, url):
        name, progress = parse_vertex_progress(entity)
        if name is None:
            logger.warning("Skipping vertex entity without name or id: %r", entity)
            continue
        dag_progress = dag_progress + progress
        vertex_progress[name] = progress

    logger.debug("Aggregated %d vertices: %s", len(vertex_progress), dag_progress)
    return dag_progress, vertex_progress
