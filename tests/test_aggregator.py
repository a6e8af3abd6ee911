# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Tests for rolling vertex progress up to the DAG."""

from dagtimeline.core.aggregator import aggregate_vertex_progress
from dagtimeline.core.models import Progress

import timeline_samples as samples


class TestAggregateVertexProgress:
    def test_sums_vertex_counts(self):
        dag_progress, vertex_progress = aggregate_vertex_progress(samples.vertex_list_doc())

        assert dag_progress.total_task_count == 15
        assert dag_progress.failed_task_count == 2
        assert dag_progress.killed_task_count == 3
        assert dag_progress.succeeded_task_count == 2
        assert dag_progress.running_task_count == 8

    def test_total_equals_sum_of_vertex_totals(self):
        dag_progress, vertex_progress = aggregate_vertex_progress(samples.vertex_list_doc())

        assert dag_progress.total_task_count == sum(p.total_task_count for p in vertex_progress.values())

    def test_vertex_map_keyed_by_name(self):
        _, vertex_progress = aggregate_vertex_progress(samples.vertex_list_doc())

        assert set(vertex_progress) == {"v1", "v2"}
        assert vertex_progress["v1"] == Progress(5, 1, 2, 1)
        assert vertex_progress["v1"].running_task_count == 1

    def test_completed_count_is_not_used_for_running(self):
        doc = {"entities": [samples.vertex_entity("v1", total=10, failed=0, succeeded=4, killed=0, completed=9)]}

        _, vertex_progress = aggregate_vertex_progress(doc)

        assert vertex_progress["v1"].running_task_count == 6

    def test_empty_list_is_zero_progress(self):
        dag_progress, vertex_progress = aggregate_vertex_progress({"entities": []})

        assert dag_progress == Progress()
        assert dag_progress.running_task_count == 0
        assert vertex_progress == {}

    def test_missing_counts_default_to_zero(self):
        doc = {"entities": [{"otherinfo": {"vertexName": "v1", "numTasks": 3}}]}

        dag_progress, _ = aggregate_vertex_progress(doc)

        assert dag_progress == Progress(total_task_count=3)
        assert dag_progress.running_task_count == 3

    def test_vertex_without_name_uses_entity_id(self):
        doc = {"entities": [{"entity": "vertex_1_01", "otherinfo": {"numTasks": 2}}]}

        _, vertex_progress = aggregate_vertex_progress(doc)

        assert list(vertex_progress) == ["vertex_1_01"]

    def test_vertex_without_name_or_id_is_skipped(self):
        doc = {"entities": [{"otherinfo": {"numTasks": 2}}, samples.vertex_entity("v1", 1, 0, 1, 0)]}

        dag_progress, vertex_progress = aggregate_vertex_progress(doc)

        assert list(vertex_progress) == ["v1"]
        assert dag_progress.total_task_count == 1

    def test_duplicate_names_last_write_wins(self):
        doc = {
            "entities": [
                samples.vertex_entity("v1", 1, 0, 0, 0),
                samples.vertex_entity("v1", 4, 0, 0, 0),
            ]
        }

        _, vertex_progress = aggregate_vertex_progress(doc)

        assert vertex_progress["v1"].total_task_count == 4

    def test_odd_envelope_fields_do_not_fail_the_list(self):
        first = samples.vertex_entity("v1", 3, 0, 0, 0)
        first["entity"] = "vertex_1"
        first["domain"] = 7
        second = samples.vertex_entity("v2", 2, 0, 1, 0)
        second["primaryfilters"] = None

        dag_progress, vertex_progress = aggregate_vertex_progress({"entities": [first, second]})

        assert dag_progress.total_task_count == 5
        assert set(vertex_progress) == {"v1", "v2"}

    def test_null_entities(self):
        dag_progress, vertex_progress = aggregate_vertex_progress({"entities": None})

        assert dag_progress == Progress()
        assert vertex_progress == {}
