#tests\test_config.py

"""Test simulation settings."""

import pytest
from pydantic import ValidationError

from parking_simulator.lot.config import LotConfig
from parking_simulator.simulation.config import SimulationSettings


class TestSimulationSettings:
    """Test environment-driven configuration."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch, tmp_path):
        """Isolate from the developer's PARKING_* variables and .env file."""
        monkeypatch.chdir(tmp_path)
        for name in ("CAPACITY", "TOTAL_CARS", "ARRIVAL_RATE", "DWELL_MIN", "DWELL_MAX", "LOG_LEVEL"):
            monkeypatch.delenv(f"PARKING_{name}", raising=False)

    def test_defaults(self):
        """Test default values."""
        settings = SimulationSettings()

        assert settings.capacity == 20
        assert settings.total_cars == 100
        assert settings.arrival_rate == 4.0
        assert settings.dwell_min == 3.0
        assert settings.dwell_max == 5.0
        assert settings.report_interval == 0.7

    def test_reads_environment(self, monkeypatch):
        """Test PARKING_* variables override defaults."""
        monkeypatch.setenv("PARKING_CAPACITY", "7")
        monkeypatch.setenv("PARKING_ARRIVAL_RATE", "0.5")

        settings = SimulationSettings()

        assert settings.capacity == 7
        assert settings.arrival_rate == 0.5

    def test_reads_env_file(self, tmp_path):
        """Test values from a .env file."""
        (tmp_path / ".env").write_text("PARKING_TOTAL_CARS=12\n")

        assert SimulationSettings().total_cars == 12

    def test_unbounded_total_cars(self):
        """Test total_cars may be None (unbounded)."""
        assert SimulationSettings(total_cars=None).total_cars is None

    def test_unbounded_total_cars_from_environment(self, monkeypatch):
        """Test PARKING_TOTAL_CARS=none means unbounded."""
        monkeypatch.setenv("PARKING_TOTAL_CARS", "none")

        assert SimulationSettings().total_cars is None

    def test_log_level_is_normalized(self, monkeypatch):
        """Test log level names are case-insensitive."""
        monkeypatch.setenv("PARKING_LOG_LEVEL", "debug")

        assert SimulationSettings().log_level == "DEBUG"

    @pytest.mark.parametrize("level", ["verbose", "", "10"])
    def test_unknown_log_level_fails(self, level):
        """Test log levels outside the logging module's names are rejected."""
        with pytest.raises(ValidationError):
            SimulationSettings(log_level=level)

    @pytest.mark.parametrize("kwargs", [
        {"capacity": 0},
        {"arrival_rate": 0},
        {"arrival_rate": -2.0},
        {"total_cars": 0},
        {"dwell_min": -1.0},
        {"dwell_min": 6.0, "dwell_max": 2.0},
    ])
    def test_misconfiguration_fails(self, kwargs):
        """Test invalid settings are rejected."""
        with pytest.raises(ValidationError):
            SimulationSettings(**kwargs)

    def test_lot_config(self):
        """Test derived lot configuration."""
        settings = SimulationSettings(capacity=4, dwell_min=1.0, dwell_max=2.0)

        assert settings.lot_config() == LotConfig(capacity=4, dwell_min=1.0, dwell_max=2.0)
