"""Tests for logging utilities and build statistics."""

import logging
from unittest.mock import Mock

from sdfatlas.utils.logging import BuildLogger, BuildStats, configure_logging


class TestBuildStats:
    """Tests for BuildStats."""

    def test_duration(self) -> None:
        """Test duration requires both timestamps."""
        stats = BuildStats()
        assert stats.duration_seconds == 0.0
        stats.start_time = 10.0
        stats.end_time = 12.5
        assert stats.duration_seconds == 2.5

    def test_glyph_timings(self) -> None:
        """Test timing aggregates."""
        stats = BuildStats(glyph_timings_ms=[2.0, 4.0, 9.0])
        assert stats.avg_glyph_time_ms == 5.0
        assert stats.min_glyph_time_ms == 2.0
        assert stats.max_glyph_time_ms == 9.0

    def test_no_timings(self) -> None:
        """Test aggregates are None before any glyph finished."""
        stats = BuildStats()
        assert stats.avg_glyph_time_ms is None
        assert stats.min_glyph_time_ms is None
        assert stats.max_glyph_time_ms is None


class TestBuildLogger:
    """Tests for BuildLogger."""

    def test_glyph_complete(self) -> None:
        """Test completed glyphs are counted and timed."""
        logger = Mock()
        build_logger = BuildLogger(logger)
        build_logger.log_glyph_complete("A", 12, 12, 3.5)

        assert build_logger.stats.rasterized_count == 1
        assert build_logger.stats.glyph_timings_ms == [3.5]
        logger.debug.assert_called_once()

    def test_glyph_skipped(self) -> None:
        """Test skipped glyphs are recorded."""
        logger = Mock()
        build_logger = BuildLogger(logger)
        build_logger.log_glyph_skipped("Z", "no glyph")

        assert build_logger.stats.skipped_count == 1
        assert build_logger.stats.skipped == ["Z"]
        logger.info.assert_called_once_with("Glyph skipped", glyph="Z", reason="no glyph")

    def test_glyph_error(self) -> None:
        """Test errors are logged with their traceback."""
        logger = Mock()
        build_logger = BuildLogger(logger)
        build_logger.log_glyph_error("A", "boom", "Traceback ...")

        assert build_logger.stats.error_count == 1
        logger.error.assert_called_once_with(
            "Glyph processing failed", glyph="A", error="boom", traceback="Traceback ..."
        )

    def test_atlas_packed(self) -> None:
        """Test the packed size is recorded."""
        build_logger = BuildLogger(Mock())
        build_logger.log_atlas_packed(128, 64, 10)
        assert (build_logger.stats.atlas_width, build_logger.stats.atlas_height) == (128, 64)

    def test_shared_stats(self) -> None:
        """Test an existing stats object is updated in place."""
        stats = BuildStats()
        BuildLogger(Mock(), stats).log_glyph_skipped("Z", "no glyph")
        assert stats.skipped_count == 1


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_no_file_by_default(self) -> None:
        """Test only a console handler is installed without a log file."""
        configure_logging()
        handlers = [h for h in logging.getLogger().handlers if getattr(h, "_sdfatlas", False)]
        assert len(handlers) == 1
        assert not isinstance(handlers[0], logging.FileHandler)

    def test_file_handler(self, tmp_path) -> None:
        """Test a log file receives records."""
        log_file = tmp_path / "build.log"
        configure_logging(log_file=log_file)

        handlers = [h for h in logging.getLogger().handlers if getattr(h, "_sdfatlas", False)]
        assert any(isinstance(h, logging.FileHandler) for h in handlers)

        for handler in handlers:
            handler.flush()
        assert "Logging initialized" in log_file.read_text(encoding="utf-8")

        configure_logging()

    def test_reconfigure_replaces_handlers(self) -> None:
        """Test repeated configuration does not stack handlers."""
        configure_logging()
        configure_logging(quiet=True)
        handlers = [h for h in logging.getLogger().handlers if getattr(h, "_sdfatlas", False)]
        assert len(handlers) == 1
        assert handlers[0].level == logging.ERROR
