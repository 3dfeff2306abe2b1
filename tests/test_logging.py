import logging

from mcp_orchestrator.infra.logging import setup_logging


def test_setup_logging_sets_package_level_and_quiets_sdk():
    level = setup_logging("test-svc", level="debug")

    assert level == logging.DEBUG
    assert logging.getLogger("mcp_orchestrator").level == logging.DEBUG
    assert logging.getLogger("mcp").level == logging.WARNING
    assert logging.getLogger("httpx").level == logging.WARNING


def test_unknown_level_falls_back_to_info():
    assert setup_logging(level="chatty") == logging.INFO
