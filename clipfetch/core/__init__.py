from .errors import (
    ArtifactMissingError,
    ClipFetchError,
    ExtractionFailedError,
    InvalidInputError,
    InvalidUrlFormatError,
    MalformedMetadataError,
)

__all__ = [
    "ArtifactMissingError",
    "ClipFetchError",
    "ExtractionFailedError",
    "InvalidInputError",
    "InvalidUrlFormatError",
    "MalformedMetadataError",
]
