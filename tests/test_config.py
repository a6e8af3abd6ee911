# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Tests for client configuration loading and validation."""

import pytest

from dagtimeline.core.config import apply_env_overrides, find_config_file, load_client_config
from dagtimeline.core.schema import ClientConfig


class TestClientConfigSchema:
    def test_defaults(self):
        config = ClientConfig.Schema().load({})

        assert config.timeline_address == "0.0.0.0:8188"
        assert config.use_https is False
        assert config.resourcemanager_address is None
        assert config.request_timeout == 30.0
        assert config.task_page_size == 100

    def test_scheme_and_active_address(self):
        config = ClientConfig(timeline_address="a:1", timeline_https_address="b:2", use_https=True)

        assert config.scheme == "https"
        assert config.active_timeline_address == "b:2"

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(Exception, match="request_timeout"):
            ClientConfig.Schema().load({"request_timeout": 0})

    def test_rejects_unknown_type(self):
        with pytest.raises(Exception):
            ClientConfig.Schema().load({"task_page_size": "many"})

    def test_frozen(self):
        config = ClientConfig()

        with pytest.raises(Exception):
            config.use_https = True


class TestLoadClientConfig:
    def test_explicit_path(self, tmp_path):
        path = tmp_path / "client.yaml"
        path.write_text("timeline_address: ats.example.com:8188\nrequest_timeout: 15\n")

        config = load_client_config(path, environ={})

        assert config.timeline_address == "ats.example.com:8188"
        assert config.request_timeout == 15

    def test_missing_explicit_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_client_config(tmp_path / "nope.yaml", environ={})

    def test_defaults_when_no_file(self, tmp_path, monkeypatch):
        workdir = tmp_path / "a" / "b" / "c"
        workdir.mkdir(parents=True)
        monkeypatch.chdir(workdir)

        assert find_config_file() is None
        assert load_client_config(environ={}) == ClientConfig()

    def test_discovers_file_in_parent(self, tmp_path, monkeypatch):
        (tmp_path / "dagtimeline.yaml").write_text("use_https: true\n")
        workdir = tmp_path / "sub"
        workdir.mkdir()
        monkeypatch.chdir(workdir)

        assert find_config_file() == tmp_path / "dagtimeline.yaml"
        assert load_client_config(environ={}).use_https is True

    def test_invalid_file(self, tmp_path):
        path = tmp_path / "client.yaml"
        path.write_text("poll_interval_seconds: -1\n")

        with pytest.raises(ValueError, match="Invalid config"):
            load_client_config(path, environ={})

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / "client.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ValueError, match="mapping"):
            load_client_config(path, environ={})

    def test_environment_overrides_file(self, tmp_path):
        path = tmp_path / "client.yaml"
        path.write_text("timeline_address: from-file:8188\n")

        config = load_client_config(
            path,
            environ={"DAGTIMELINE_TIMELINE_ADDRESS": "from-env:8188", "DAGTIMELINE_USE_HTTPS": "true"},
        )

        assert config.timeline_address == "from-env:8188"
        assert config.use_https is True


class TestApplyEnvOverrides:
    def test_empty_values_are_ignored(self):
        result = apply_env_overrides({"timeline_address": "a:1"}, {"DAGTIMELINE_TIMELINE_ADDRESS": ""})

        assert result == {"timeline_address": "a:1"}

    def test_does_not_mutate_input(self):
        raw = {}
        apply_env_overrides(raw, {"DAGTIMELINE_RESOURCEMANAGER_ADDRESS": "rm:8088"})

        assert raw == {}
