"""Tests for the package logging setup."""

import logging

import pytest

from starTOV.logging_config import (
    DEFAULT_FORMAT,
    PACKAGE_LOGGER,
    get_logger,
    set_log_level,
    setup_logger,
)


class _RecordCollector(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def collected_records():
    """Records reaching the package logger; the package level is restored afterwards."""
    package = logging.getLogger(PACKAGE_LOGGER)
    level = package.level
    collector = _RecordCollector()
    package.addHandler(collector)
    yield collector.records
    package.removeHandler(collector)
    package.setLevel(level)


class TestLoggerNames:
    """Test module loggers are nested under the package logger."""

    def test_package_logger(self):
        """Test the default name is the package logger."""
        assert get_logger().name == "starTOV"

    def test_module_logger(self):
        """Test module names are kept as they are."""
        assert get_logger("starTOV.tov.gr").name == "starTOV.tov.gr"

    def test_foreign_name_nested(self):
        """Test names outside the package are placed under it."""
        assert get_logger("sweep").name == "starTOV.sweep"
        assert get_logger("starTOVx").name == "starTOV.starTOVx"

    def test_child_loggers_use_package_handler(self):
        """Test module loggers carry no handler and propagate to the package."""
        logger = get_logger("starTOV.tov.base")
        assert not logger.handlers
        assert logger.propagate
        assert logger.getEffectiveLevel() == logging.getLogger(PACKAGE_LOGGER).level


class TestSetup:
    """Test package logger configuration."""

    def test_setup_is_idempotent(self):
        """Test repeated setup keeps a single stdout handler."""
        package = logging.getLogger(PACKAGE_LOGGER)
        n_handlers = len(package.handlers)
        setup_logger()
        setup_logger(fmt="%(message)s")
        assert len(package.handlers) == n_handlers
        assert not package.propagate
        setup_logger(fmt=DEFAULT_FORMAT)

    def test_set_log_level(self, collected_records):
        """Test the package level filters module records."""
        logger = get_logger("starTOV.tov.gr")

        set_log_level(logging.WARNING)
        logger.info("hidden")
        set_log_level(logging.DEBUG)
        logger.debug("shown")

        messages = [record.getMessage() for record in collected_records]
        assert messages == ["shown"]


class TestSolverLogging:
    """Test the solver reports through module loggers."""

    def test_solve_debug_records(self, collected_records, solver, polytrope):
        """Test a solve logs its inputs and result at DEBUG level."""
        set_log_level(logging.DEBUG)
        solver.solve(polytrope, 1e-4)

        records = [r for r in collected_records if r.name == "starTOV.tov.gr"]
        assert any("pc=0.0001" in r.getMessage() for r in records)
        assert all(r.levelno == logging.DEBUG for r in records)

    def test_skipped_star_warning(self, collected_records, solver, tabulated_polytrope):
        """Test a failed sequence member is logged with its central value."""
        solver.construct_sequence(tabulated_polytrope, central_pressures=[1e-4, 10.0])

        warnings = [r for r in collected_records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert warnings[0].name == "starTOV.tov.base"
        assert "Failed to solve for P_c = 10.0" in warnings[0].getMessage()
