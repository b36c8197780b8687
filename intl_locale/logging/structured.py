"""Structured JSON-lines logging with private use redaction."""

from __future__ import annotations

import json
import logging
import os
import sys
import time
import uuid
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, TextIO, Union

from .redaction import TagRedactor

logger = logging.getLogger(__name__)


class LogLevel(Enum):
    """Standard log levels."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class StructuredLogger:
    """Structured logger with consistent format and redaction."""

    def __init__(
        self,
        component: str,
        run_id: Optional[str] = None,
        output_file: Optional[Union[str, Path, TextIO]] = None,
        enable_console: bool = True,
        redactor: Optional[TagRedactor] = None,
        max_log_size_mb: Optional[int] = None,
        max_log_files: int = 5,
    ) -> None:
        """Initialize structured logger.

        Args:
            component: Component identifier (e.g., 'api', 'cli')
            run_id: Optional ID correlating entries of one process/run
            output_file: Optional file path or handle for log output
            enable_console: Whether to output to console (default: True)
            redactor: Optional redactor for private use and sensitive data
            max_log_size_mb: Maximum log file size in MB before rotation (None = no limit)
            max_log_files: Maximum number of rotated log files to keep (default: 5)
        """
        self.component = component
        self.run_id = run_id or str(uuid.uuid4())[:8]
        self.start_time = time.time()
        self.redactor = redactor or TagRedactor()

        self.max_log_size_bytes = (max_log_size_mb * 1024 * 1024) if max_log_size_mb else None
        self.max_log_files = max_log_files
        self.log_file_path: Optional[Path] = None

        self.console_enabled = enable_console
        self.log_file: Optional[TextIO] = None

        if output_file:
            if isinstance(output_file, (str, Path)):
                self.log_file_path = Path(output_file)
                self.log_file_path.parent.mkdir(parents=True, exist_ok=True)
                self._open_log_file()
            else:
                self.log_file = output_file

    def _format_log_entry(self, level: LogLevel, message: str, **context: Any) -> Dict[str, Any]:
        """Format log entry with consistent structure."""
        safe_context = self.redactor.redact_dict(context)

        return {
            "timestamp": time.time(),
            "iso_timestamp": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime()) + "Z",
            "level": level.value,
            "component": self.component,
            "run_id": self.run_id,
            "uptime": time.time() - self.start_time,
            "message": self.redactor.redact_string(message),
            **safe_context,
        }

    def _open_log_file(self) -> None:
        if self.log_file_path:
            self.log_file = open(self.log_file_path, "a", encoding="utf-8")

    def _rotate_log_if_needed(self) -> None:
        """Rotate log file if size limit is exceeded."""
        if not self.log_file_path or not self.max_log_size_bytes:
            return
        try:
            if not (
                self.log_file_path.exists()
                and self.log_file_path.stat().st_size > self.max_log_size_bytes
            ):
                return

            if self.log_file:
                self.log_file.close()
                self.log_file = None

            # Shift existing files up: .1 -> .2, ...
            for i in range(self.max_log_files - 1, 0, -1):
                old_file = self.log_file_path.with_suffix(f".{i}{self.log_file_path.suffix}")
                new_file = self.log_file_path.with_suffix(f".{i+1}{self.log_file_path.suffix}")
                if old_file.exists():
                    old_file.replace(new_file)

            self.log_file_path.replace(
                self.log_file_path.with_suffix(f".1{self.log_file_path.suffix}")
            )
        except OSError as e:
            # Keep writing to the current file
            logger.warning("Log rotation failed for %s: %s", self.log_file_path, e)

        if self.log_file is None:
            self._open_log_file()

    def _write_log(self, entry: Dict[str, Any]) -> None:
        """Write log entry to configured outputs."""
        json_line = json.dumps(entry, default=str, separators=(",", ":"))

        if self.console_enabled:
            print(json_line, file=sys.stderr, flush=True)

        if self.log_file:
            self._rotate_log_if_needed()
            self.log_file.write(json_line + "\n")
            self.log_file.flush()

    def log(self, level: LogLevel, message: str, **context: Any) -> None:
        self._write_log(self._format_log_entry(level, message, **context))

    def debug(self, message: str, **context: Any) -> None:
        """Log debug message."""
        self.log(LogLevel.DEBUG, message, **context)

    def info(self, message: str, **context: Any) -> None:
        """Log info message."""
        self.log(LogLevel.INFO, message, **context)

    def warning(self, message: str, **context: Any) -> None:
        """Log warning message."""
        self.log(LogLevel.WARNING, message, **context)

    def error(self, message: str, **context: Any) -> None:
        """Log error message."""
        self.log(LogLevel.ERROR, message, **context)

    def critical(self, message: str, **context: Any) -> None:
        """Log critical message."""
        self.log(LogLevel.CRITICAL, message, **context)

    def close(self) -> None:
        """Close log file handle if open."""
        if self.log_file and hasattr(self.log_file, "close"):
            self.log_file.close()
            self.log_file = None


def create_logger(
    component: str,
    run_id: Optional[str] = None,
    log_dir: Optional[Union[str, Path]] = None,
    **kwargs: Any,
) -> StructuredLogger:
    """Factory function to create structured logger with standard configuration.

    Args:
        component: Component identifier
        run_id: Optional run ID for correlation
        log_dir: Optional directory for log files (uses IL_LOG_DIR if not provided)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        Configured StructuredLogger instance
    """
    from intl_locale.config import settings

    if log_dir is None:
        log_dir = settings.log_dir or None

    if "enable_console" not in kwargs:
        kwargs["enable_console"] = settings.log_console or not log_dir

    if "max_log_size_mb" not in kwargs:
        max_size = os.getenv("IL_LOG_MAX_SIZE_MB")
        if max_size:
            kwargs["max_log_size_mb"] = int(max_size)

    if "max_log_files" not in kwargs:
        max_files = os.getenv("IL_LOG_MAX_FILES")
        if max_files:
            kwargs["max_log_files"] = int(max_files)

    output_file = None
    if log_dir:
        output_file = Path(log_dir) / f"{component}_{run_id or 'default'}.jsonl"

    return StructuredLogger(component=component, run_id=run_id, output_file=output_file, **kwargs)
