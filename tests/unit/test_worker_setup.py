"""
Tests for worker start-up: logging sinks and broker middleware.
"""

import importlib
import sys
from unittest.mock import patch

import dramatiq
import pytest
from dramatiq.middleware import Retries, ShutdownNotifications
from loguru import logger

from app.config.logging import setup_logging
from app.config.settings import settings


@pytest.fixture
def worker_broker(monkeypatch):
    """Import jobs.broker fresh, then restore the in-memory test broker."""
    previous = dramatiq.get_broker()
    monkeypatch.delitem(sys.modules, "jobs.broker", raising=False)

    with patch("app.config.logging.setup_logging") as setup:
        module = importlib.import_module("jobs.broker")

    yield module, setup

    dramatiq.set_broker(previous)
    sys.modules.pop("jobs.broker", None)


class TestWorkerStartup:
    """Tests for the dramatiq worker entry module."""

    def test_configures_worker_logging(self, worker_broker) -> None:
        _, setup = worker_broker

        setup.assert_called_once_with("worker")

    def test_retries_registered_once(self, worker_broker) -> None:
        """Defaults are not stacked on top of the configured middleware."""
        module, _ = worker_broker
        kinds = [type(middleware) for middleware in module.broker.middleware]

        assert kinds.count(Retries) == 1
        assert kinds.count(ShutdownNotifications) == 1


class TestSetupLogging:

    def test_writes_log_file(self, tmp_path, monkeypatch) -> None:
        log_file = tmp_path / "worker.log"
        monkeypatch.setattr(settings, "log_file", str(log_file))

        try:
            setup_logging("worker")
            logger.info("worker ready")
        finally:
            logger.remove()

        assert "Starting 40 Acres worker..." in log_file.read_text(encoding="utf-8")
        assert "worker ready" in log_file.read_text(encoding="utf-8")
