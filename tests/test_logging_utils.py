# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Tests for logging setup."""

import logging

import pytest

from dagtimeline.logging_utils import get_logger, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    urllib3_level = logging.getLogger("urllib3").level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("urllib3").setLevel(urllib3_level)


class TestSetupLogging:
    def test_configures_root_level(self, restore_root_logger):
        setup_logging(level=logging.DEBUG)

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("urllib3").level == logging.WARNING

    def test_custom_format(self, restore_root_logger, capsys):
        setup_logging(format_string="%(levelname)s|%(message)s")

        get_logger("dagtimeline.test").info("hello")

        assert "INFO|hello" in capsys.readouterr().out

    def test_get_logger_uses_name(self):
        assert get_logger("dagtimeline.core.client").name == "dagtimeline.core.client"
