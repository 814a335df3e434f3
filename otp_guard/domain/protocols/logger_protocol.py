"""LoggerProtocol definition for structured logging.

Backend-agnostic structured logging port. Every call is a snake_case
event name plus key-value context.

Security:
    - NEVER log plaintext OTPs, reset tokens or passwords
    - Reset tokens may appear only truncated (first 8 characters)

Usage:
    from otp_guard.core.container import get_logger

    logger = get_logger()
    logger.info("otp_issued", identity=identity, purpose=purpose.value)

    scoped = logger.bind(handler="SendOtpHandler")
    scoped.warning("otp_delivery_failed", identity=identity)
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    Implementations:
        - ConsoleAdapter: otp_guard/infrastructure/logging/console_adapter.py
    """

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level event."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level event."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level event."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level event.

        Args:
            message: Event name.
            error: Optional exception; adapters add error_type and
                error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level event (same arguments as error)."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a new logger with context permanently attached.

        The original logger is unchanged.
        """
        ...

    def with_context(self, **context: Any) -> LoggerProtocol:
        """Alias for bind()."""
        ...
