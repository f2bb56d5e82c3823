"""Field-keyed constraint checking shared by the services."""

from __future__ import annotations

from collections.abc import Hashable, Iterable

from catalog.core.errors import ValidationError


class Validator:
    """Collect failing checks as a ``{field: message}`` mapping.

    Every check is evaluated; only the first failing message per field is
    kept.
    """

    def __init__(self) -> None:
        self.errors: dict[str, str] = {}

    @property
    def valid(self) -> bool:
        return not self.errors

    def add_error(self, key: str, message: str) -> None:
        self.errors.setdefault(key, message)

    def check(self, ok: bool, key: str, message: str) -> None:
        if not ok:
            self.add_error(key, message)

    def raise_if_invalid(self) -> None:
        """Raise ``ValidationError`` carrying the collected errors, if any."""
        if self.errors:
            raise ValidationError(self.errors)


def permitted_value(value: Hashable, *permitted: Hashable) -> bool:
    return value in permitted


def unique(values: Iterable[Hashable]) -> bool:
    seen: set[Hashable] = set()
    for value in values:
        if value in seen:
            return False
        seen.add(value)
    return True


def byte_length(value: str) -> int:
    return len(value.encode("utf-8"))


__all__ = ["Validator", "byte_length", "permitted_value", "unique"]
