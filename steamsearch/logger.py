"""
Structured logging system for steamsearch.

Provides centralized logging with console and file output, log levels,
and metrics tracking for monitoring Steam Web API usage and how searches
resolve per input category.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics for API calls and search outcomes.
    """

    def __init__(
        self,
        name: str = "steamsearch",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()

        self.metrics = {
            "api_calls": 0,
            "searches_attempted": 0,
            "searches_successful": 0,
            "searches_failed": 0,
            "errors_by_type": {},
            "category_success_rate": {},
        }

        if enable_console:
            # stderr keeps stdout free for the CLI's JSON event lines
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"steamsearch_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_api_call(self):
        """Increment API call counter."""
        self.metrics["api_calls"] += 1

    def record_search_attempt(self, category: str):
        """Record a search that reached the resolution stage."""
        self.metrics["searches_attempted"] += 1
        if category not in self.metrics["category_success_rate"]:
            self.metrics["category_success_rate"][category] = {
                "attempts": 0,
                "successes": 0
            }
        self.metrics["category_success_rate"][category]["attempts"] += 1

    def record_search_success(self, category: str):
        """Record a search that resolved and fetched its library."""
        self.metrics["searches_successful"] += 1
        if category in self.metrics["category_success_rate"]:
            self.metrics["category_success_rate"][category]["successes"] += 1

    def record_search_failure(self, category: str, error_type: Optional[str] = None):
        """Record a failed search. Errors already counted elsewhere pass no type."""
        self.metrics["searches_failed"] += 1
        if error_type is not None:
            self.record_error(error_type)

    def record_error(self, error_type: str):
        """Count an error by type."""
        if error_type not in self.metrics["errors_by_type"]:
            self.metrics["errors_by_type"][error_type] = 0
        self.metrics["errors_by_type"][error_type] += 1

    def get_metrics(self) -> dict:
        """Return current metrics."""
        metrics_copy = self.metrics.copy()
        for category, stats in metrics_copy["category_success_rate"].items():
            if stats["attempts"] > 0:
                stats["success_rate"] = round(
                    stats["successes"] / stats["attempts"], 3
                )

        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        total_attempts = metrics["searches_attempted"]
        total_successes = metrics["searches_successful"]
        overall_rate = 0
        if total_attempts > 0:
            overall_rate = round(total_successes / total_attempts * 100, 1)

        self.info("=== Search Session Metrics ===")
        self.info(f"API Calls: {metrics['api_calls']}")
        self.info(f"Searches: {total_successes}/{total_attempts} ({overall_rate}% success)")

        if metrics["category_success_rate"]:
            self.info("Category Success Rates:")
            for category, stats in metrics["category_success_rate"].items():
                rate = stats.get("success_rate", 0) * 100
                self.info(f"  {category}: {stats['successes']}/{stats['attempts']} ({rate:.1f}%)")

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "steamsearch",
    level: Optional[str] = None,
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level; defaults to STEAMSEARCH_LOG_LEVEL or INFO
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        if level is None:
            level = os.getenv("STEAMSEARCH_LOG_LEVEL", "INFO")
        if "log_dir" not in kwargs and os.getenv("STEAMSEARCH_LOG_DIR"):
            kwargs["log_dir"] = Path(os.environ["STEAMSEARCH_LOG_DIR"])
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
