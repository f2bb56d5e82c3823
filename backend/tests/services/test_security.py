"""Tests for hashing helpers, the validator and log redaction."""

from __future__ import annotations

import logging

from catalog.core.security import (
    generate_token_plaintext,
    get_password_hash,
    hash_token,
    verify_password,
)
from catalog.core.validator import Validator, permitted_value, unique
from catalog.security.logging_filters import SensitiveFilter
from catalog.services import token_service


def test_password_hash_round_trip() -> None:
    hashed = get_password_hash("correct horse")

    assert verify_password("correct horse", hashed)
    assert not verify_password("battery staple", hashed)
    assert not verify_password("correct horse", b"not-a-bcrypt-hash")


def test_token_plaintexts_are_unique_base32() -> None:
    tokens = {generate_token_plaintext() for _ in range(50)}

    assert len(tokens) == 50
    for token in tokens:
        assert len(token) == 26
        assert set(token) <= set("ABCDEFGHIJKLMNOPQRSTUVWXYZ234567")
    assert len(hash_token("X" * 26)) == 32


def test_validator_keeps_first_message_per_field() -> None:
    v = Validator()
    v.check(False, "title", "must be provided")
    v.check(False, "title", "must not be more than 500 bytes long")
    v.check(True, "year", "never recorded")

    assert not v.valid
    assert v.errors == {"title": "must be provided"}
    assert permitted_value("id", "id", "-id")
    assert unique(["a", "b"]) and not unique(["a", "a"])


def test_sensitive_filter_redacts_tokens_and_passwords() -> None:
    record = logging.LogRecord(
        name="catalog",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg='body %s with header %s',
        args=('{"password": "hunter22"}', "Bearer ABCDEFGHIJKLMNOPQRSTUVWXYZ"),
        exc_info=None,
    )

    assert SensitiveFilter().filter(record)
    rendered = record.getMessage()
    assert "hunter22" not in rendered
    assert "ABCDEFGHIJKLMNOPQRSTUVWXYZ" not in rendered
    assert "**REDACTED**" in rendered


def test_validate_token_plaintext_messages() -> None:
    missing = Validator()
    token_service.validate_token_plaintext(missing, None)
    short = Validator()
    token_service.validate_token_plaintext(short, "abc")
    ok = Validator()
    token_service.validate_token_plaintext(ok, "B" * 26)

    assert missing.errors == {"token": "must be provided"}
    assert short.errors == {"token": "must be 26 bytes long"}
    assert ok.valid
