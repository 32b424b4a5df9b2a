from __future__ import annotations

import pytest

from artiformat.exceptions import (
    ArtiformatError,
    ConfigError,
    FormatMismatchError,
    IdentifierError,
    InvalidFormatError,
    InvalidPatternError,
    MissingRequiredFieldError,
    MutuallyExclusiveError,
    NotFoundError,
    NotInCatalogueError,
)


@pytest.mark.unit
class TestArtiformatError:
    """Tests for the base exception."""

    def test_message_only(self) -> None:
        """Test str() is the message when there are no details."""
        exc = ArtiformatError("Something failed")

        assert str(exc) == "Something failed"
        assert exc.details == {}

    def test_details_in_str(self) -> None:
        """Test details are appended to the message."""
        exc = ArtiformatError("Bad", {"a": 1, "b": "x"})

        assert str(exc) == "Bad (a=1, b=x)"

    def test_repr(self) -> None:
        """Test repr shows class, message and details."""
        exc = ArtiformatError("Bad", {"a": 1})

        assert repr(exc) == "ArtiformatError(message='Bad', details={'a': 1})"

    def test_details_are_copied(self) -> None:
        """Test the caller's mapping is not shared."""
        source = {"a": 1}
        exc = ArtiformatError("Bad", source)
        exc.details["b"] = 2

        assert source == {"a": 1}


@pytest.mark.unit
class TestIdentifierErrors:
    """Tests for identifier error types."""

    @pytest.mark.parametrize(
        "exc,kind",
        [
            (InvalidFormatError("x"), "InvalidFormat"),
            (NotInCatalogueError("x"), "NotInCatalogue"),
            (FormatMismatchError("x"), "FormatMismatch"),
            (MissingRequiredFieldError("x", field="major"), "MissingRequiredField"),
            (MutuallyExclusiveError("x", fields=["suffix", "hash"]), "MutuallyExclusive"),
            (NotFoundError("x"), "NotFound"),
        ],
    )
    def test_kind(self, exc: IdentifierError, kind: str) -> None:
        """Test each error reports a stable kind."""
        assert exc.kind == kind
        assert isinstance(exc, IdentifierError)
        assert isinstance(exc, ArtiformatError)

    def test_not_in_catalogue_is_invalid_format(self) -> None:
        """Test catalogue misses can be caught as format errors."""
        with pytest.raises(InvalidFormatError):
            raise NotInCatalogueError("unsupported", identifier="win128")

    def test_identifier_in_details(self) -> None:
        """Test the identifier is recorded."""
        exc = InvalidFormatError("Invalid version format: 1.2", identifier="1.2")

        assert exc.identifier == "1.2"
        assert str(exc) == "Invalid version format: 1.2 (identifier=1.2)"

    def test_long_identifier_truncated(self) -> None:
        """Test very long identifiers are truncated in details only."""
        text = "x" * 500
        exc = NotFoundError("No version found in text", identifier=text)

        assert exc.identifier == text
        assert len(exc.details["identifier"]) == 203
        assert exc.details["identifier"].endswith("...")

    def test_format_mismatch_fields(self) -> None:
        """Test expected and actual are stored and reported."""
        exc = FormatMismatchError("Mismatch", identifier="1.2.3", expected="rc", actual="release")

        assert exc.expected == "rc"
        assert exc.actual == "release"
        assert exc.details == {"identifier": "1.2.3", "expected": "rc", "actual": "release"}

    def test_missing_field(self) -> None:
        """Test the missing field name is exposed."""
        exc = MissingRequiredFieldError("Missing required field: patch", field="patch")

        assert exc.field == "patch"
        assert exc.details == {"field": "patch"}

    def test_mutually_exclusive_fields(self) -> None:
        """Test conflicting fields are kept as a tuple."""
        exc = MutuallyExclusiveError("Cannot combine", fields=["suffix", "hash"])

        assert exc.fields == ("suffix", "hash")
        assert "fields=suffix, hash" in str(exc)


@pytest.mark.unit
class TestOtherErrors:
    """Tests for configuration and pattern errors."""

    def test_config_error(self) -> None:
        """Test path and option are recorded."""
        exc = ConfigError("Bad value", config_path="artiformat.toml", option="include_prefix")

        assert exc.config_path == "artiformat.toml"
        assert exc.option == "include_prefix"
        assert str(exc) == "Bad value (path=artiformat.toml, option=include_prefix)"

    def test_invalid_pattern_error(self) -> None:
        """Test the pattern is recorded."""
        exc = InvalidPatternError("Invalid regular expression", pattern="(")

        assert exc.pattern == "("
        assert exc.details == {"pattern": "("}
