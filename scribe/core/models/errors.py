"""
Custom error classes for the scribe transcription tool.

Every pipeline stage raises one of these instead of terminating the
process. The CLI catches ``ScribeError`` once at the top level and turns
it into an exit status.
"""

from typing import Dict, Any


class ScribeError(Exception):
    """Base class for all errors raised by the transcription pipeline."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class TranscriptionError(ScribeError):
    """
    Exception for failures while uploading audio to the ASR service.

    ``error_type`` distinguishes the failure kind: ``file_io`` for problems
    reading the audio artifact, ``transport`` for connection and timeout
    failures, ``http_status`` for rejected responses.
    """

    def __init__(self, message: str, error_type: str = "general", status_code: int = 0, context: Dict[str, Any] = None):
        super().__init__(message)
        self.error_type = error_type
        self.status_code = status_code
        self.context = context or {}

    def __str__(self):
        base_msg = f"TranscriptionError ({self.error_type}): {self.message}"
        if self.status_code:
            base_msg += f" (HTTP {self.status_code})"
        return base_msg


class AudioExtractionError(ScribeError):
    """
    Exception for audio acquisition errors.

    Raised when the downloader or the transcoder cannot be started, exits
    with a nonzero status, or leaves no usable mp3 behind.
    """

    def __init__(self, message: str, file_path: str = "", suggested_action: str = "", error_code: int = 0):
        super().__init__(message)
        self.file_path = file_path
        self.suggested_action = suggested_action
        self.error_code = error_code

    def __str__(self):
        base_msg = f"AudioExtractionError: {self.message}"
        if self.file_path:
            base_msg += f" (File: {self.file_path})"
        if self.suggested_action:
            base_msg += f" - Suggestion: {self.suggested_action}"
        return base_msg


class ConfigurationError(ScribeError):
    """
    Exception for configuration loading and validation errors.

    Carries the offending field name and value when they are known.
    """

    def __init__(self, message: str, field_name: str = "", invalid_value: Any = None):
        super().__init__(message)
        self.field_name = field_name
        self.invalid_value = invalid_value

    def __str__(self):
        base_msg = f"ConfigurationError: {self.message}"
        if self.field_name:
            base_msg += f" (Field: {self.field_name})"
        if self.invalid_value is not None:
            base_msg += f" (Value: {self.invalid_value})"
        return base_msg
