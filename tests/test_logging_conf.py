from __future__ import annotations

import logging

import pytest

from slitplanner.logging_conf import configure_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)


def test_installs_single_stdout_handler(root_logger):
    configure_logging("DEBUG")
    configure_logging("DEBUG")
    assert root_logger.level == logging.DEBUG
    assert len(root_logger.handlers) == 1


def test_unknown_level_falls_back_to_info_with_warning(root_logger, capsys):
    assert configure_logging("verbose") == logging.INFO
    assert root_logger.level == logging.INFO
    assert "Nível de log inválido 'verbose'" in capsys.readouterr().out
