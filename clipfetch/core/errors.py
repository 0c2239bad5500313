from typing import Optional


class ClipFetchError(Exception):
    """
    Base class for failures surfaced to API callers.
    Each subclass maps to a status code and an i18n message key.
    """
    status_code = 500
    message_key = "error.internal"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail
        super().__init__(detail or self.message_key)


class InvalidInputError(ClipFetchError):
    """Missing or unusable URL"""
    status_code = 400
    message_key = "error.invalid_url"


class InvalidUrlFormatError(InvalidInputError):
    """URL present but not an absolute http(s) URL"""
    message_key = "error.invalid_url_format"


class MalformedMetadataError(ClipFetchError):
    """Extractor output could not be parsed as a JSON object"""
    message_key = "error.parse_failed"


class ExtractionFailedError(ClipFetchError):
    """Extractor exited with a non-zero status"""
    message_key = "error.extraction_failed"

    def __init__(self, diagnostics: str = "", exit_code: Optional[int] = None):
        self.diagnostics = diagnostics
        self.exit_code = exit_code
        super().__init__(diagnostics)


class ArtifactMissingError(ClipFetchError):
    """Extractor reported success but left no file behind"""
    message_key = "error.artifact_missing"
