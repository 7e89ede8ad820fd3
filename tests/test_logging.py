"""Tests for logging setup."""

import logging
from unittest.mock import patch

from indoorair.shared.logging import LOG_FORMAT, NOISY_LOGGERS, setup_logging


def test_setup_logging_sets_level_and_quiets_noisy_loggers():
    with patch("indoorair.shared.logging.logging.basicConfig") as basic_config:
        setup_logging("debug")

    basic_config.assert_called_once_with(level=logging.DEBUG, format=LOG_FORMAT)
    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


def test_unknown_level_falls_back_to_info():
    with patch("indoorair.shared.logging.logging.basicConfig") as basic_config:
        setup_logging("chatty")

    basic_config.assert_called_once_with(level=logging.INFO, format=LOG_FORMAT)
