"""Logging filters that scrub sensitive content."""

from __future__ import annotations

import logging
import re

_SENSITIVE_PATTERN = re.compile(
    r"(Authorization: Bearer\s+[\w\.-]+"
    r"|Bearer\s+[A-Z2-7]{26}"
    r"|token\"\s*:\s*\"[^\"]+\""
    r"|password\"\s*:\s*\"[^\"]+\")",
    re.IGNORECASE,
)


class SensitiveFilter(logging.Filter):
    """Replace credentials and token plaintexts with a redaction marker."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = _SENSITIVE_PATTERN.sub("**REDACTED**", record.msg)
        if record.args:
            if isinstance(record.args, dict):
                record.args = {
                    key: _scrub(value) for key, value in record.args.items()
                }
            else:
                record.args = tuple(_scrub(arg) for arg in record.args)
        return True


def _scrub(value: object) -> object:
    if isinstance(value, str):
        return _SENSITIVE_PATTERN.sub("**REDACTED**", value)
    return value


__all__ = ["SensitiveFilter"]
