"""
Core data models and type definitions for scribe.

This module contains the structures passed between pipeline stages:
the acquisition strategy chosen for an input, the audio artifact handed
to the ASR client, the service response, and the validated runtime
configuration.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


class AcquisitionStrategy(str, Enum):
    """How the audio for an input reference is obtained."""
    DOWNLOAD = "download"        # web video link, audio pulled by yt-dlp
    PASSTHROUGH = "passthrough"  # already an mp3, used as-is
    TRANSCODE = "transcode"      # any other media container, converted by ffmpeg


class ProcessingStage(str, Enum):
    """Enumeration of transcription pipeline stages."""
    CLASSIFY = "classify"
    ACQUIRE = "acquire"
    UPLOAD = "upload"
    EMIT = "emit"
    CLEANUP = "cleanup"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class AudioArtifact:
    """
    A local mp3 file ready for upload.

    ``temporary`` is True when the pipeline produced the file itself and
    is responsible for deleting it. A pass-through input is never
    temporary.
    """
    path: str
    strategy: AcquisitionStrategy
    temporary: bool = False


@dataclass
class TranscriptionResponse:
    """Raw response returned by the ASR service."""
    text: str
    status_code: int
    content_type: str = ""
    elapsed: float = 0.0  # Seconds

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass
class PipelineResult:
    """Result of one complete pipeline run."""
    input_ref: str
    strategy: AcquisitionStrategy
    audio_path: str
    response: TranscriptionResponse
    processing_time: float = 0.0


class Configuration(BaseModel):
    """
    Runtime configuration with validation.

    Field names are the flattened form of the YAML sections, so
    ``asr.base_url`` in the file becomes ``asr_base_url`` here and
    ``SCRIBE_ASR_BASE_URL`` in the environment.
    """
    # ASR service
    asr_base_url: str = Field(default="http://0.0.0.0:9000", description="Base URL of the ASR web service")
    asr_endpoint: str = Field(default="/asr", description="Path of the transcription endpoint")
    asr_file_field: str = Field(default="audio_file", min_length=1, description="Multipart field carrying the audio")
    asr_timeout: Optional[float] = Field(default=None, gt=0, description="Request timeout in seconds, None blocks")
    asr_fail_on_http_error: bool = Field(default=False, description="Treat non-2xx responses as failures")

    # Download
    downloader_executable: str = Field(default="yt-dlp", min_length=1)
    download_audio_quality: str = Field(default="10", description="yt-dlp --audio-quality value")
    web_video_markers: List[str] = Field(default_factory=lambda: ["youtube.com"], min_length=1)

    # Transcode
    transcoder_executable: str = Field(default="ffmpeg", min_length=1)
    audio_codec: str = Field(default="libmp3lame", min_length=1)

    # Resources
    temp_directory: str = Field(default=".", description="Directory for intermediate mp3 files")
    keep_temp_files: bool = Field(default=False, description="Leave intermediate mp3 files on disk")

    # Logging
    log_level: str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    @field_validator('asr_base_url')
    @classmethod
    def validate_base_url(cls, v):
        """Require an absolute http(s) URL and drop trailing slashes."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("asr_base_url must start with http:// or https://")
        return v.rstrip("/")

    @field_validator('asr_endpoint')
    @classmethod
    def validate_endpoint(cls, v):
        if not v.startswith("/"):
            v = "/" + v
        return v

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator('web_video_markers')
    @classmethod
    def validate_markers(cls, v):
        markers = [marker.strip() for marker in v if marker and marker.strip()]
        if not markers:
            raise ValueError("web_video_markers must contain at least one non-empty marker")
        return markers

    @property
    def asr_url(self) -> str:
        return f"{self.asr_base_url}{self.asr_endpoint}"
