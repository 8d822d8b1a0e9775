"""Unit tests for the exception hierarchy."""

import pytest

from tinyodm.firestore.core import (
    AlreadyExistsError,
    DeserializationError,
    FailedPreconditionError,
    FetchError,
    FirestoreError,
    InvalidKeyError,
    InvalidPartError,
    NameParseError,
    NotFoundError,
    QualifyError,
    RateLimitError,
    SerializationError,
    TooFewPartsError,
    TransportError,
    WrongNumberOfPartsError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc_type",
        [
            NameParseError,
            QualifyError,
            InvalidKeyError,
            FetchError,
            SerializationError,
            DeserializationError,
        ],
    )
    def test_all_derive_from_base(self, exc_type):
        assert issubclass(exc_type, FirestoreError)

    @pytest.mark.parametrize(
        "exc_type",
        [
            AlreadyExistsError,
            NotFoundError,
            FailedPreconditionError,
            RateLimitError,
            TransportError,
        ],
    )
    def test_fetch_errors(self, exc_type):
        assert issubclass(exc_type, FetchError)


class TestAttributes:
    def test_parse_errors_carry_details(self):
        assert TooFewPartsError(2, value="projects/p").count == 2
        assert WrongNumberOfPartsError(7).count == 7

        err = InvalidPartError(4, value="projects/p/databases/(default)/stuff/x")
        assert err.index == 4
        assert err.value == "projects/p/databases/(default)/stuff/x"
        assert "4" in str(err)

    def test_already_exists_defaults(self):
        err = AlreadyExistsError("exists")

        assert err.status_code == 409
        assert err.status == "ALREADY_EXISTS"

    def test_not_found_defaults(self):
        err = NotFoundError("missing")

        assert err.status_code == 404
        assert err.status == "NOT_FOUND"

    def test_rate_limit_retry_after(self):
        err = RateLimitError("slow down", retry_after=5)

        assert err.status_code == 429
        assert err.retry_after == 5
        assert RateLimitError("slow down").retry_after == 60

    def test_fetch_error_optional_fields(self):
        err = FetchError("boom")

        assert err.status_code is None
        assert err.status is None
        assert str(err) == "boom"

    def test_deserialization_error_name(self):
        err = DeserializationError("bad", name="projects/p/databases/(default)/documents/a/b")

        assert err.name.endswith("/a/b")

    def test_invalid_key_error_key(self):
        err = InvalidKeyError("Invalid document id: 'a/b'", key="a/b")

        assert err.key == "a/b"
        assert isinstance(err, ValueError)
