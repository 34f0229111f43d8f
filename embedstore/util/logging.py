"""
Structured logging for store, search and bridge operations.
"""

import logging
import os
from typing import Any, Dict


class StructuredLogger:
    """Structured logger for document store operations."""

    def __init__(self, name: str = "embedstore"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        if status in ("failed", "rejected"):
            self.logger.warning(message)
        else:
            self.logger.info(message)

    def log_store_operation(self, operation: str, store: str, details: Dict[str, Any] = None, status: str = "success"):
        """Log a record store operation."""
        log_details = {"store": store}
        if details:
            log_details.update(details)

        self.log_operation(f"store.{operation}", status, log_details)

    def log_search(self, store: str, top_k: int, hits: int, scanned: int = None):
        """Log a similarity search."""
        log_details = {"store": store, "top_k": top_k, "hits": hits}
        if scanned is not None:
            log_details["scanned"] = scanned

        self.log_operation("store.search", "success", log_details)

    def log_bridge_operation(self, operation: str, details: Dict[str, Any] = None, status: str = "success"):
        """Log a handle bridge operation."""
        self.log_operation(f"bridge.{operation}", status, details)

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)


# Global logger instance
logger = StructuredLogger()


def truncate_text(text: str, limit: int = 50) -> str:
    """Shorten document text for log lines."""
    if text is None:
        return ""
    return text[:limit] + "..." if len(text) > limit else text
