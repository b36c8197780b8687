"""Redaction of caller-defined content for structured logging."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Pattern, Union

REDACTED = "[REDACTED]"


class TagRedactor:
    """Redact private use subtags and sensitive fields from log data.

    Private use sequences (``x-...``) carry caller-defined, opaque content
    and are masked wherever they appear; the rest of the tag is kept so log
    lines still show which locale was involved.
    """

    def __init__(self, custom_patterns: Optional[List[Pattern[str]]] = None) -> None:
        """Initialize redactor with standard and custom patterns.

        Args:
            custom_patterns: Additional regex patterns to redact
        """
        # Private use sequence: "x" singleton not glued to a preceding alphanum
        self.private_use_pattern = re.compile(r"(?<![A-Za-z0-9])([xX])(?:-[A-Za-z0-9]{1,8})+")

        self.patterns = [
            # Tokens and API keys (common patterns)
            re.compile(
                r'(?:token|key|secret|password|api_key|credential)["\']?\s*[=:]\s*["\']?[a-zA-Z0-9_-]{8,}["\']?',
                re.IGNORECASE,
            ),
        ]

        if custom_patterns:
            self.patterns.extend(custom_patterns)

        # Sensitive field names to redact entirely
        self.sensitive_fields = {
            "password", "token", "secret", "auth", "credential",
            "api_key", "access_token", "refresh_token", "auth_token",
        }

    def redact_string(self, text: str) -> str:
        """Redact private use content and secrets from a string.

        Examples:
            >>> TagRedactor().redact_string("en-US-x-acme-42")
            'en-US-x-[REDACTED]'
        """
        # Keep the singleton so the tag shape stays readable
        result = self.private_use_pattern.sub(rf"\1-{REDACTED}", text)

        for pattern in self.patterns:
            result = pattern.sub(REDACTED, result)

        return result

    def redact_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively redact sensitive data from dictionary.

        Args:
            data: Dictionary to redact

        Returns:
            Dictionary with sensitive data redacted
        """
        result: Dict[str, Any] = {}

        for key, value in data.items():
            if key.lower() in self.sensitive_fields:
                result[key] = REDACTED
                continue
            result[key] = self._redact_value(value)

        return result

    def _redact_value(self, value: Any) -> Any:
        if isinstance(value, dict):
            return self.redact_dict(value)
        if isinstance(value, (list, tuple, set, frozenset)):
            return [self._redact_value(item) for item in value]
        if isinstance(value, str):
            return self.redact_string(value)
        return value

    def add_pattern(self, pattern: Union[str, Pattern[str]]) -> None:
        """Add custom redaction pattern.

        Args:
            pattern: Regex pattern (string or compiled) to add
        """
        if isinstance(pattern, str):
            pattern = re.compile(pattern)
        self.patterns.append(pattern)

    def add_sensitive_field(self, field_name: str) -> None:
        self.sensitive_fields.add(field_name.lower())
