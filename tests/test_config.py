"""
Tests for scheduler configuration.
"""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from joint_scheduler.config import SchedulerConfig, SchedulerSettings


class TestSchedulerConfig:
    """Test cases for SchedulerConfig defaults."""

    def test_defaults(self):
        config = SchedulerConfig()
        assert config.horizon == timedelta(days=14)
        assert config.decay_rate == pytest.approx(2 / 3)
        assert config.event_weight == 1_000_000_000
        assert config.event_max_full_weight_count == 1_000_000_000

    def test_frozen(self):
        config = SchedulerConfig()
        with pytest.raises(AttributeError):
            config.decay_rate = 0.5


class TestSchedulerSettings:
    """Test cases for environment-driven settings."""

    def test_defaults_match_config(self, monkeypatch):
        for name in ("HORIZON_DAYS", "DECAY_RATE", "MAX_WORKERS"):
            monkeypatch.delenv(f"SCHEDULER_{name}", raising=False)
        assert SchedulerSettings().to_config() == SchedulerConfig()

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SCHEDULER_HORIZON_DAYS", "7")
        monkeypatch.setenv("SCHEDULER_DECAY_RATE", "0.5")
        monkeypatch.setenv("SCHEDULER_MAX_WORKERS", "1")

        config = SchedulerSettings().to_config()

        assert config.horizon == timedelta(days=7)
        assert config.decay_rate == 0.5
        assert config.max_workers == 1

    def test_rejects_invalid_decay_rate(self, monkeypatch):
        monkeypatch.setenv("SCHEDULER_DECAY_RATE", "1.5")
        with pytest.raises(ValidationError):
            SchedulerSettings()
