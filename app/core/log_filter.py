"""Logging filter for redacting sensitive data from log messages."""

import logging
import re
from typing import Pattern


class SensitiveDataFilter(logging.Filter):
    """Filter to redact sensitive data from log messages.

    Redacts:
    - The service API key (env assignments and X-API-Key headers)
    - Authorization headers and bearer tokens
    - Generic key/token/secret assignments
    """

    def __init__(self):
        """Initialize filter with redaction patterns."""
        super().__init__()

        # Order matters - more specific patterns should come first
        self.patterns: list[tuple[Pattern, str]] = [
            # Authorization headers with Bearer tokens (must come before generic Bearer pattern)
            (
                re.compile(r"(Authorization):\s+(Bearer\s+)?([^\s,]+)", re.IGNORECASE),
                r"\1: ***REDACTED***",
            ),
            # X-API-Key headers
            (
                re.compile(r"(X-API-Key):\s*([^\s,]+)", re.IGNORECASE),
                r"\1: ***REDACTED***",
            ),
            # Environment variable assignments (e.g., API_KEY=abc123)
            (
                re.compile(r"(?i)(API_KEY)=([^\s,\)]+)"),
                r"\1=***REDACTED***",
            ),
            # API keys and tokens with key=value format
            (
                re.compile(
                    r"(api[_-]?key|apikey|token|secret|password|credential)['\"]?\s*[:=]\s*['\"]?([A-Za-z0-9_\-\.]{20,})",
                    re.IGNORECASE,
                ),
                r"\1=***REDACTED***",
            ),
            # Bearer tokens (standalone, not in Authorization header)
            (
                re.compile(r"\bBearer\s+([A-Za-z0-9_\-\.=]+)", re.IGNORECASE),
                r"Bearer ***REDACTED***",
            ),
        ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter log record by redacting sensitive data.

        Args:
            record: Log record to filter

        Returns:
            True (always pass the record after redaction)
        """
        if record.msg:
            record.msg = self.redact(str(record.msg))

        # Redact args (used in % formatting)
        if record.args:
            if isinstance(record.args, dict):
                record.args = {k: self._redact_value(v) for k, v in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(self._redact_value(arg) for arg in record.args)

        if record.exc_text:
            record.exc_text = self.redact(record.exc_text)

        return True

    def _redact_value(self, value):
        # Only strings are redacted so numeric %d/%s formatting keeps working
        if isinstance(value, str):
            return self.redact(value)
        return value

    def redact(self, text: str) -> str:
        """Apply redaction patterns to text."""
        for pattern, replacement in self.patterns:
            text = pattern.sub(replacement, text)
        return text
