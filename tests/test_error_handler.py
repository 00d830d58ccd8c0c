"""error_handler.py - pruebas"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cost_advisor.core.error_handler import ErrorHandler, RecoveryAction, error_handler
from cost_advisor.core.exceptions import (
    CostAdvisorError,
    ValidationError,
    ConfigurationError,
    UnknownArchetypeError,
)


class TestErrorHandler:
    """ErrorHandler"""

    def setup_method(self):
        self.handler = ErrorHandler()

    @pytest.mark.parametrize("error,action", [
        (ValidationError("x", field="f"), RecoveryAction.SKIP),
        (UnknownArchetypeError("x"), RecoveryAction.FALLBACK),
        (ZeroDivisionError("x"), RecoveryAction.FALLBACK),
        (ConfigurationError("x"), RecoveryAction.LOG_AND_CONTINUE),
        (RuntimeError("x"), RecoveryAction.ABORT),
    ])
    def test_recovery_actions(self, error, action):
        assert self.handler.handle(error) == action

    def test_record_keeps_context(self):
        self.handler.handle(UnknownArchetypeError("x", archetype="franquicia"), {"session_id": "s-1"})
        record = self.handler.error_history[0]
        assert record.error_code == "CA_UNKNOWN_ARCHETYPE"
        assert record.details["archetype"] == "franquicia"
        assert record.details["session_id"] == "s-1"
        assert record.recovery_action == RecoveryAction.FALLBACK

    def test_history_limit(self):
        handler = ErrorHandler(max_history=3)
        for i in range(5):
            handler.handle(CostAdvisorError(f"error {i}"))
        assert len(handler.error_history) == 3
        assert handler.error_history[0].message.endswith("error 2")

    def test_summary(self):
        self.handler.handle(ValidationError("a"))
        self.handler.handle(ValidationError("b"))
        self.handler.handle(RuntimeError("c"))

        summary = self.handler.get_error_summary()
        assert summary["total_errors"] == 3
        assert summary["by_code"] == {"CA_VALIDATION": 2, "UNKNOWN": 1}
        assert len(summary["recent_errors"]) == 3

    def test_clear_history(self):
        self.handler.handle(RuntimeError("x"))
        self.handler.clear_history()
        assert self.handler.get_error_summary() == {"total_errors": 0, "by_code": {}}


class TestErrorHandlerDecorator:
    """Decorador error_handler"""

    def test_passthrough(self):
        @error_handler(fallback_value=-1)
        def ok():
            return 42

        assert ok() == 42

    def test_fallback_value(self):
        @error_handler(fallback_value=-1)
        def broken():
            raise ValueError("x")

        assert broken() == -1

    def test_fallback_factory_returns_new_objects(self):
        @error_handler(fallback_factory=list)
        def broken():
            raise ValueError("x")

        first = broken()
        first.append(1)
        assert broken() == []

    def test_reraise_on_abort(self):
        @error_handler(reraise=True)
        def broken():
            raise ValueError("x")

        with pytest.raises(ValueError):
            broken()

    def test_recovery_action_prevents_reraise(self):
        @error_handler(
            fallback_value="respaldo",
            reraise=True,
            recovery_actions={ValueError: RecoveryAction.FALLBACK},
        )
        def broken():
            raise ValueError("x")

        assert broken() == "respaldo"

    def test_logs_error(self, caplog):
        @error_handler(fallback_value=None)
        def broken():
            raise ValueError("algo salió mal")

        with caplog.at_level("ERROR"):
            broken()
        assert "Error in broken: algo salió mal" in caplog.text


class Stage:
    def __init__(self, error):
        self.handler = ErrorHandler()
        self.error = error

    @error_handler(fallback_factory=list, stage="alerts", error_code="CA_ANALYSIS")
    def run(self, context=None):
        raise self.error


class TestErrorHandlerWithOwner:
    """Decorador sobre métodos de un objeto con ErrorHandler"""

    def test_wraps_foreign_errors(self):
        stage = Stage(KeyError("purchase"))
        assert stage.run(context={"session_id": "s-1", "archetype": "reventa"}) == []

        record = stage.handler.error_history[0]
        assert record.error_code == "CA_ANALYSIS"
        assert record.details["stage"] == "alerts"
        assert record.details["archetype"] == "reventa"
        assert record.details["session_id"] == "s-1"
        assert record.recovery_action == RecoveryAction.FALLBACK

    def test_engine_errors_keep_their_code(self):
        stage = Stage(ValidationError("no numérico", field="materials"))
        assert stage.run() == []

        record = stage.handler.error_history[0]
        assert record.error_code == "CA_VALIDATION"
        assert record.recovery_action == RecoveryAction.SKIP
