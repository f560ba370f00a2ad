"""
Transcription client for a remote ASR web service.

Uploads an mp3 as a multipart form to the service's /asr endpoint and
returns the response body untouched. The endpoint contract follows
whisper-asr-webservice: one file field named ``audio_file``.
"""

import os
import time
import logging
from typing import Optional

import requests

from scribe.core.models.data_models import Configuration, TranscriptionResponse
from scribe.core.models.errors import TranscriptionError

logger = logging.getLogger(__name__)


class ASRClient:
    """HTTP client for the ASR service."""

    def __init__(self,
                 base_url: str = "http://0.0.0.0:9000",
                 endpoint: str = "/asr",
                 file_field: str = "audio_file",
                 timeout: Optional[float] = None,
                 fail_on_http_error: bool = False):
        """
        Args:
            base_url: Service root, without trailing slash
            endpoint: Path of the transcription endpoint
            file_field: Multipart field name the service reads the audio from
            timeout: Seconds to wait for the service; None waits forever
            fail_on_http_error: Raise on non-2xx instead of returning the body
        """
        self.base_url = base_url.rstrip("/")
        self.endpoint = endpoint if endpoint.startswith("/") else "/" + endpoint
        self.file_field = file_field
        self.timeout = timeout
        self.fail_on_http_error = fail_on_http_error

    @classmethod
    def from_config(cls, config: Configuration) -> "ASRClient":
        return cls(
            base_url=config.asr_base_url,
            endpoint=config.asr_endpoint,
            file_field=config.asr_file_field,
            timeout=config.asr_timeout,
            fail_on_http_error=config.asr_fail_on_http_error,
        )

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.endpoint}"

    def transcribe(self, audio_path: str) -> TranscriptionResponse:
        """
        Upload an audio file and read back the full response.

        The HTTP status is not used to decide success unless
        ``fail_on_http_error`` is set; a rejected upload is returned like
        any other body, with a warning logged.

        Args:
            audio_path: Path to the mp3 to upload

        Returns:
            TranscriptionResponse holding the body text and status

        Raises:
            TranscriptionError: If the file cannot be read or the request fails
        """
        filename = os.path.basename(audio_path)
        start_time = time.time()

        try:
            with open(audio_path, "rb") as fh:
                files = {self.file_field: (filename, fh, "audio/mpeg")}
                logger.info(f"Uploading {audio_path} to {self.url}")
                response = requests.post(self.url, files=files, timeout=self.timeout)
        except requests.RequestException as e:
            raise TranscriptionError(
                f"Request to {self.url} failed: {e}",
                error_type="transport",
                context={"url": self.url, "audio_path": audio_path}
            )
        except OSError as e:
            raise TranscriptionError(
                f"Error opening file: {e}",
                error_type="file_io",
                context={"audio_path": audio_path}
            )

        elapsed = time.time() - start_time
        result = TranscriptionResponse(
            text=response.text,
            status_code=response.status_code,
            content_type=response.headers.get("Content-Type", ""),
            elapsed=elapsed,
        )

        if not result.ok:
            if self.fail_on_http_error:
                raise TranscriptionError(
                    f"ASR service rejected the upload: {result.text.strip()[:200]}",
                    error_type="http_status",
                    status_code=result.status_code,
                    context={"url": self.url}
                )
            logger.warning(f"ASR service answered with HTTP {result.status_code}")

        logger.info(f"Transcription complete in {elapsed:.2f}s")
        return result
