"""
Tests for common module (errors, decorators, logging, features).
"""

import json
import pytest
import logging
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


class TestExceptions:
    """Tests for exception hierarchy."""

    def test_onboarding_error_basic(self):
        """Test basic OnboardingError."""
        from common.exceptions import OnboardingError

        error = OnboardingError("Something failed")
        assert str(error) == "[OnboardingError] Something failed"
        assert error.recoverable is True

    def test_onboarding_error_with_details(self):
        """Test OnboardingError with details."""
        from common.exceptions import OnboardingError

        error = OnboardingError(
            "Operation failed",
            code="OP_FAILED",
            details={"field": "value"},
            recoverable=False,
        )

        assert error.code == "OP_FAILED"
        assert error.details == {"field": "value"}
        assert error.recoverable is False
        assert "details:" in str(error)

    def test_onboarding_error_to_dict(self):
        """Test JSON serialization."""
        from common.exceptions import OnboardingError

        error = OnboardingError("Test", code="TEST", details={"key": 1})
        d = error.to_dict()

        assert d["error"] == "TEST"
        assert d["message"] == "Test"
        assert d["details"]["key"] == 1

    def test_write_error_keeps_cause(self):
        """Test PreferencesWriteError chains the OS error."""
        from common.exceptions import PreferencesWriteError, PreferencesError

        cause = OSError("disk full")
        error = PreferencesWriteError("/tmp/prefs.json", cause=cause)

        assert isinstance(error, PreferencesError)
        assert error.cause is cause
        assert "disk full" in str(error)

    def test_state_error_details(self):
        """Test OnboardingStateError names both states."""
        from common.exceptions import OnboardingStateError

        error = OnboardingStateError("confirm", "browsing", "final")
        assert error.code == "INVALID_STATE"
        assert error.details["required_state"] == "final"

    def test_toolkit_error_contains_hints(self):
        """Test ToolkitUnavailableError includes install hints."""
        from common.exceptions import ToolkitUnavailableError

        error = ToolkitUnavailableError("gtk")
        assert "PyGObject" in str(error.details)
        assert "PyQt6" in str(error.details)
        assert error.recoverable is False


class TestDecorators:
    """Tests for error handling decorators."""

    def test_handle_errors_returns_default(self):
        """Test @handle_errors returns default on exception."""
        from common.decorators import handle_errors

        @handle_errors(ValueError, default="fallback")
        def failing_func():
            raise ValueError("test error")

        assert failing_func() == "fallback"

    def test_handle_errors_passes_through(self):
        """Test @handle_errors passes through on success."""
        from common.decorators import handle_errors

        @handle_errors(ValueError, default="fallback")
        def working_func():
            return "success"

        assert working_func() == "success"

    def test_handle_errors_other_exceptions_propagate(self):
        """Test @handle_errors only catches the listed types."""
        from common.decorators import handle_errors

        @handle_errors(ValueError, default="fallback")
        def failing_func():
            raise KeyError("not handled")

        with pytest.raises(KeyError):
            failing_func()

    def test_handle_errors_reraise(self):
        """Test @handle_errors can reraise."""
        from common.decorators import handle_errors

        @handle_errors(ValueError, reraise=True)
        def failing_func():
            raise ValueError("test")

        with pytest.raises(ValueError):
            failing_func()

    def test_retry_succeeds_eventually(self):
        """Test @retry succeeds after failures."""
        from common.decorators import retry

        attempt_count = 0

        @retry(max_attempts=3, delay=0.01)
        def flaky_func():
            nonlocal attempt_count
            attempt_count += 1
            if attempt_count < 3:
                raise OSError("not yet")
            return "success"

        assert flaky_func() == "success"
        assert attempt_count == 3

    def test_retry_exhausts_attempts(self):
        """Test @retry raises after exhausting attempts."""
        from common.decorators import retry

        @retry(max_attempts=2, delay=0.01)
        def always_fails():
            raise OSError("always fails")

        with pytest.raises(OSError):
            always_fails()

    def test_retry_reports_attempts(self):
        """Test @retry calls on_retry before each new attempt."""
        from common.decorators import retry

        seen = []

        @retry(max_attempts=3, delay=0.0, on_retry=lambda e, n: seen.append(n))
        def always_fails():
            raise OSError("nope")

        with pytest.raises(OSError):
            always_fails()
        assert seen == [1, 2]


class TestLogging:
    """Tests for logging configuration."""

    @pytest.fixture(autouse=True)
    def restore_root_logging(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_setup_logging_creates_handlers(self):
        """Test setup_logging configures handlers."""
        from common.logging_config import setup_logging

        setup_logging(level=logging.DEBUG)

        root = logging.getLogger()
        assert len(root.handlers) == 1

    def test_setup_logging_json_file(self, tmp_path):
        """Test JSON log file output."""
        from common.logging_config import setup_logging

        log_file = tmp_path / "logs" / "onboarding.log"
        setup_logging(level=logging.INFO, log_file=log_file, json_logs=True)

        logging.getLogger("onboarding.test").debug("hello file")
        for handler in logging.getLogger().handlers:
            handler.flush()

        record = json.loads(log_file.read_text().splitlines()[-1])
        assert record["message"] == "hello file"
        assert record["level"] == "DEBUG"

    def test_get_logger_prefix(self):
        """Test get_logger adds onboarding prefix."""
        from common.logging_config import get_logger

        assert get_logger("test_module").name == "onboarding.test_module"
        assert get_logger("onboarding.cli").name == "onboarding.cli"


class TestFeatures:
    """Tests for graceful degradation."""

    def test_feature_manager_executes_primary(self):
        """Test FeatureManager executes primary when available."""
        from common.features import Feature, FeatureManager

        manager = FeatureManager()
        manager.register(Feature(
            name="gui",
            check=lambda: True,
            primary=lambda x: x * 2,
            fallback=lambda x: x,
        ))

        assert manager.execute("gui", 5) == 10

    def test_feature_manager_uses_fallback(self):
        """Test FeatureManager uses fallback when unavailable."""
        from common.features import Feature, FeatureManager

        manager = FeatureManager()
        manager.register(Feature(
            name="gui",
            check=lambda: False,
            primary=lambda x: x * 2,
            fallback=lambda x: x + 1,
        ))

        assert manager.execute("gui", 5) == 6

    def test_feature_check_errors_mean_unavailable(self):
        """Test a raising check counts as unavailable."""
        from common.features import Feature, FeatureManager

        def broken_check():
            raise OSError("no display")

        manager = FeatureManager()
        manager.register(Feature(name="gui", check=broken_check, primary=lambda: 1))

        assert manager.is_available("gui") is False

    def test_feature_manager_raises_without_fallback(self):
        """Test FeatureManager raises when no fallback."""
        from common.features import Feature, FeatureManager

        manager = FeatureManager()
        manager.register(Feature(
            name="gui",
            check=lambda: False,
            primary=lambda: "primary",
            fallback=None,
        ))

        with pytest.raises(RuntimeError):
            manager.execute("gui")

    def test_unregistered_feature(self):
        """Test unknown features raise KeyError."""
        from common.features import FeatureManager

        with pytest.raises(KeyError):
            FeatureManager().execute("missing")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
