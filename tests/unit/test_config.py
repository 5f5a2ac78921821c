"""
Tests for settings loading and logging setup.
"""
import logging

import pytest
import structlog
from pydantic import ValidationError

from fieldcheck.config import FieldCheckSettings, LoggingConfig, SolverConfig, load_settings
from fieldcheck.telemetry import setup_logging


def test_defaults(monkeypatch):
    monkeypatch.delenv("FIELDCHECK_SOLVER__TIMEOUT_MS", raising=False)
    monkeypatch.delenv("FIELDCHECK_SOLVER__WITNESS_ON_VIOLATION", raising=False)

    settings = load_settings()

    assert settings.solver.timeout_ms == 5000
    assert settings.solver.witness_on_violation is False
    assert settings.logging.level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("FIELDCHECK_SOLVER__TIMEOUT_MS", "2000")
    monkeypatch.setenv("FIELDCHECK_SOLVER__WITNESS_ON_VIOLATION", "true")

    settings = load_settings()

    assert settings.solver.timeout_ms == 2000
    assert settings.solver.witness_on_violation is True


def test_keyword_overrides():
    settings = load_settings(solver=SolverConfig(timeout_ms=100))

    assert settings.solver.timeout_ms == 100


def test_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        SolverConfig(timeout_ms=0)


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def test_setup_logging_json(restore_logging, capsys):
    setup_logging(LoggingConfig(level="debug", format="json"))

    structlog.get_logger("fieldcheck.test").info("solver_session_created", solver="z3")

    out = capsys.readouterr().out
    assert '"event": "solver_session_created"' in out
    assert '"solver": "z3"' in out
    assert logging.getLogger().level == logging.DEBUG



def test_setup_logging_keeps_application_handlers(restore_logging):
    root = logging.getLogger()
    existing = logging.NullHandler()
    root.addHandler(existing)
    before = len(root.handlers)

    setup_logging(LoggingConfig())
    setup_logging(LoggingConfig(format="json"))

    assert existing in root.handlers
    assert len(root.handlers) == before + 1


def test_settings_type():
    assert isinstance(load_settings(), FieldCheckSettings)
