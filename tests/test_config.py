"""Tests for configuration and sensitivity."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from jump_trigger.core.config import DetectionSettings, Settings
from jump_trigger.core.types import SensitivityConfig


class TestSensitivityConfig:
    """Tests for the SensitivityConfig class."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(50, 50), (10, 10), (100, 100), (5, 10), (0, 10), (150, 100), (-20, 10)],
    )
    def test_clamps_on_construction(self, value: int, expected: int) -> None:
        """Values outside [10, 100] are clamped."""
        assert SensitivityConfig(value).percent == expected

    def test_clamps_on_write(self) -> None:
        """Assignments are clamped too."""
        sensitivity = SensitivityConfig()

        sensitivity.percent = 120
        assert sensitivity.percent == 100

        sensitivity.percent = 3
        assert sensitivity.percent == 10

    def test_adjust_steps_and_clamps(self) -> None:
        """adjust() moves by the step and stops at the bounds."""
        sensitivity = SensitivityConfig(90)

        assert sensitivity.adjust(5) == 95
        assert sensitivity.adjust(5) == 100
        assert sensitivity.adjust(5) == 100
        sensitivity.percent = 15
        assert sensitivity.adjust(-5) == 10
        assert sensitivity.adjust(-5) == 10

    def test_threshold_follows_percent(self) -> None:
        """Threshold tracks the current value."""
        sensitivity = SensitivityConfig(50)
        assert sensitivity.threshold == 51.0

        sensitivity.percent = 100
        assert sensitivity.threshold == 1.0


class TestDetectionSettings:
    """Tests for detection settings."""

    def test_defaults(self) -> None:
        """Defaults match the calibrated behaviour."""
        settings = DetectionSettings()

        assert settings.sensitivity_percent == 50
        assert settings.cooldown_ms == 250
        assert settings.retention_ms == 1000
        assert settings.min_history == 6
        assert settings.region_fraction == pytest.approx(0.6)

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """JUMP_ prefixed variables override defaults."""
        monkeypatch.setenv("JUMP_SENSITIVITY_PERCENT", "80")
        monkeypatch.setenv("JUMP_COOLDOWN_MS", "400")

        settings = DetectionSettings()

        assert settings.sensitivity_percent == 80
        assert settings.cooldown_ms == 400

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"sensitivity_percent": 5},
            {"sensitivity_percent": 101},
            {"min_history": 5},
            {"region_fraction": 0.0},
            {"retention_ms": 0},
        ],
    )
    def test_rejects_invalid_values(self, kwargs: dict[str, float]) -> None:
        """Out-of-range settings fail validation."""
        with pytest.raises(ValidationError):
            DetectionSettings(**kwargs)

    def test_root_settings_sections(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Root settings aggregate every section."""
        monkeypatch.setenv("OUTPUT_KEYPRESS_ENABLED", "false")

        settings = Settings()

        assert settings.capture.analysis_width == 320
        assert settings.capture.analysis_height == 240
        assert settings.output.keypress_enabled is False
        assert settings.output.key == "space"
        assert settings.logging.level == "INFO"
