"""Logging utilities for sdfatlas."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

LOGGER_NAME = "sdfatlas"


@dataclass
class BuildStats:
    """Statistics from an atlas build."""

    rasterized_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    atlas_width: int = 0
    atlas_height: int = 0
    skipped: list[str] = field(default_factory=list)
    glyph_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate build duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_glyph_time_ms(self) -> float | None:
        if not self.glyph_timings_ms:
            return None
        return sum(self.glyph_timings_ms) / len(self.glyph_timings_ms)

    @property
    def min_glyph_time_ms(self) -> float | None:
        return min(self.glyph_timings_ms, default=None)

    @property
    def max_glyph_time_ms(self) -> float | None:
        return max(self.glyph_timings_ms, default=None)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    for handler in list(root_logger.handlers):
        if getattr(handler, "_sdfatlas", False):
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        file_handler._sdfatlas = True  # type: ignore[attr-defined]
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    console_handler._sdfatlas = True  # type: ignore[attr-defined]
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger(LOGGER_NAME)
    logger.info("Logging initialized", log_file=str(log_file) if log_file else None, level=file_level)

    return logger


class BuildLogger:
    """Logger for tracking build progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger, stats: BuildStats | None = None) -> None:
        self._logger = logger
        self._stats = stats if stats is not None else BuildStats()

    def log_glyph_complete(self, char: str, width: int, height: int, duration_ms: float) -> None:
        """Log a generated glyph field."""
        self._logger.debug(
            "Glyph field generated",
            glyph=char,
            width=width,
            height=height,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.rasterized_count += 1
        self._stats.glyph_timings_ms.append(duration_ms)

    def log_glyph_skipped(self, char: str, reason: str) -> None:
        """Log a character that produced no glyph."""
        self._logger.info("Glyph skipped", glyph=char, reason=reason)
        self._stats.skipped_count += 1
        self._stats.skipped.append(char)

    def log_glyph_error(self, char: str, error: str, traceback: str | None = None) -> None:
        """Log a glyph processing error."""
        self._logger.error(
            "Glyph processing failed",
            glyph=char,
            error=error,
            traceback=traceback,
        )
        self._stats.error_count += 1

    def log_atlas_packed(self, width: int, height: int, glyph_count: int) -> None:
        """Log the packed atlas size."""
        self._logger.info("Atlas packed", width=width, height=height, glyphs=glyph_count)
        self._stats.atlas_width = width
        self._stats.atlas_height = height

    @property
    def stats(self) -> BuildStats:
        """Get current build statistics."""
        return self._stats
