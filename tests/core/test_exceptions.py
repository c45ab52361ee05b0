"""Tests for the assetdb exception hierarchy."""

from assetdb.core.exceptions import AssetDBError, ConfigurationError
from assetdb.core.storage import (
    AssetNotFoundError,
    AssetValidationError,
    DecompressionError,
    InvalidAssetIdError,
    InvalidMetadataError,
    StorageError,
    UnsupportedAssetTypeError,
)


def test_hierarchy():
    """All exceptions should inherit from AssetDBError."""
    for exc_cls in [
        ConfigurationError,
        StorageError,
        AssetNotFoundError,
        AssetValidationError,
        UnsupportedAssetTypeError,
        InvalidMetadataError,
        InvalidAssetIdError,
        DecompressionError,
    ]:
        assert issubclass(exc_cls, AssetDBError)


def test_validation_errors_are_value_errors():
    for exc_cls in [UnsupportedAssetTypeError, InvalidMetadataError, InvalidAssetIdError]:
        assert issubclass(exc_cls, AssetValidationError)
        assert issubclass(exc_cls, ValueError)


def test_not_found_is_key_error():
    assert issubclass(AssetNotFoundError, KeyError)


def test_not_found_message_is_not_quoted():
    err = AssetNotFoundError("Asset file not found: a1")
    assert str(err) == "Asset file not found: a1"


def test_catch_base():
    """Catching AssetDBError should catch all subtypes."""
    try:
        raise DecompressionError("zstd decompression failed")
    except AssetDBError as e:
        assert "zstd" in str(e)
