"""
Audio Extractor component for scribe.

This module produces the mp3 file that is uploaded to the ASR service.
Web video links are handed to yt-dlp, mp3 files are used as they are, and
any other media container is converted with ffmpeg.
"""

import os
import subprocess
import time
from typing import List
import logging

try:
    import ffmpeg
except ImportError:
    raise ImportError(
        "ffmpeg-python is required for audio extraction. "
        "Install it with: pip install ffmpeg-python"
    )

from scribe.core.models.data_models import AcquisitionStrategy, AudioArtifact
from scribe.core.models.errors import AudioExtractionError


class AudioExtractor:
    """
    Produces a local mp3 file for an input reference.

    The external utilities are run synchronously. Any failure to start
    them, a nonzero exit, or a missing output file raises
    AudioExtractionError.
    """

    DEFAULT_DOWNLOADER = "yt-dlp"
    DEFAULT_TRANSCODER = "ffmpeg"
    DEFAULT_AUDIO_CODEC = "libmp3lame"
    DEFAULT_AUDIO_QUALITY = "10"  # yt-dlp VBR scale, 0 best .. 10 worst

    # ffmpeg.Error is raised on any nonzero exit but does not carry the status
    FFMPEG_FAILURE_CODE = 1

    def __init__(self,
                 downloader: str = None,
                 transcoder: str = None,
                 audio_codec: str = None,
                 audio_quality: str = None):
        """
        Initialize the AudioExtractor.

        Args:
            downloader: yt-dlp executable name or path
            transcoder: ffmpeg executable name or path
            audio_codec: ffmpeg encoder used for the mp3 stream
            audio_quality: value passed to yt-dlp --audio-quality
        """
        self.downloader = downloader or self.DEFAULT_DOWNLOADER
        self.transcoder = transcoder or self.DEFAULT_TRANSCODER
        self.audio_codec = audio_codec or self.DEFAULT_AUDIO_CODEC
        self.audio_quality = audio_quality or self.DEFAULT_AUDIO_QUALITY

        self.logger = logging.getLogger(__name__)

    def acquire(self, input_ref: str, strategy: AcquisitionStrategy, output_path: str) -> AudioArtifact:
        """
        Produce an mp3 for the input according to the chosen strategy.

        Args:
            input_ref: Web video link or local media path
            strategy: Strategy returned by the input classifier
            output_path: Where downloaded or transcoded audio is written

        Returns:
            AudioArtifact pointing at the mp3 to upload

        Raises:
            AudioExtractionError: If the external utility fails
        """
        if strategy == AcquisitionStrategy.PASSTHROUGH:
            self.logger.info(f"Using {input_ref} as-is")
            return AudioArtifact(path=input_ref, strategy=strategy, temporary=False)

        start_time = time.time()

        if strategy == AcquisitionStrategy.DOWNLOAD:
            self.download_audio(input_ref, output_path)
        elif strategy == AcquisitionStrategy.TRANSCODE:
            self.transcode_audio(input_ref, output_path)
        else:
            raise AudioExtractionError(
                message=f"Unknown acquisition strategy: {strategy}",
                file_path=input_ref
            )

        self._verify_output(input_ref, output_path)

        self.logger.info(f"Audio acquisition completed in {time.time() - start_time:.2f}s")
        return AudioArtifact(path=output_path, strategy=strategy, temporary=True)

    def build_download_command(self, url: str, output_path: str) -> List[str]:
        """Command line that extracts the audio track of a web video as mp3."""
        return [
            self.downloader,
            "--extract-audio",
            "--audio-format", "mp3",
            "--audio-quality", self.audio_quality,
            "-o", output_path,
            url,
        ]

    def download_audio(self, url: str, output_path: str) -> None:
        """
        Download a web video and extract its audio track with yt-dlp.

        Raises:
            AudioExtractionError: If yt-dlp cannot be run or exits nonzero
        """
        cmd = self.build_download_command(url, output_path)
        self.logger.info(f"Extracting audio from {url} to {output_path}")
        self.logger.debug(f"Running: {' '.join(cmd)}")

        try:
            subprocess.run(cmd, check=True, capture_output=True, text=True)
        except subprocess.CalledProcessError as e:
            raise AudioExtractionError(
                message=f"Command execution failed with exit status {e.returncode}: {self._last_error_line(e.stderr)}",
                file_path=url,
                suggested_action="Check that the link is reachable and yt-dlp is up to date",
                error_code=e.returncode
            )
        except OSError as e:
            raise AudioExtractionError(
                message=f"Could not run {self.downloader}: {e}",
                file_path=url,
                suggested_action="Install yt-dlp and make sure it is on PATH",
                error_code=-1
            )

    def transcode_audio(self, media_path: str, output_path: str) -> None:
        """
        Convert a media file to mp3 with ffmpeg, dropping any video stream.

        Raises:
            AudioExtractionError: If ffmpeg cannot be run or fails
        """
        self.logger.info(f"Extracting audio from {media_path} to {output_path}")

        stream = ffmpeg.input(media_path)
        stream = ffmpeg.output(stream, output_path, vn=None, acodec=self.audio_codec)

        try:
            ffmpeg.run(stream, cmd=self.transcoder, overwrite_output=True, quiet=True)
        except ffmpeg.Error as e:
            error_msg = self._parse_ffmpeg_error(e)
            raise AudioExtractionError(
                message=f"FFmpeg extraction failed: {error_msg}",
                file_path=media_path,
                suggested_action="Check if the media file contains a valid audio track",
                error_code=self.FFMPEG_FAILURE_CODE
            )
        except OSError as e:
            raise AudioExtractionError(
                message=f"Could not run {self.transcoder}: {e}",
                file_path=media_path,
                suggested_action="Install ffmpeg and make sure it is on PATH",
                error_code=-1
            )

    def _verify_output(self, input_ref: str, output_path: str) -> None:
        if not os.path.exists(output_path) or os.path.getsize(output_path) == 0:
            raise AudioExtractionError(
                message="Audio extraction produced no output",
                file_path=input_ref,
                suggested_action="Verify the input contains an audio track"
            )

    def _parse_ffmpeg_error(self, error: ffmpeg.Error) -> str:
        """
        Parse FFmpeg error messages to provide user-friendly descriptions.

        Args:
            error: FFmpeg error object

        Returns:
            Human-readable error description
        """
        if hasattr(error, 'stderr') and error.stderr:
            stderr = error.stderr.decode('utf-8', errors='replace') if isinstance(error.stderr, bytes) else str(error.stderr)

            error_patterns = {
                'Invalid data found': 'File format is not recognized or corrupted',
                'No such file or directory': 'File path is incorrect or file does not exist',
                'Permission denied': 'Insufficient permissions to access the file',
                'Protocol not found': 'Unsupported file protocol or location',
                'Stream not found': 'Required audio stream is missing',
                'does not contain any stream': 'File contains no audio stream',
                'Encoder not found': 'The mp3 encoder is not available in this ffmpeg build',
                'Invalid argument': 'File format or parameters are invalid'
            }

            for pattern, explanation in error_patterns.items():
                if pattern.lower() in stderr.lower():
                    return explanation

            return stderr.strip()

        return "Unknown FFmpeg error occurred"

    @staticmethod
    def _last_error_line(stderr: str) -> str:
        """Return the most relevant line of a child process's stderr."""
        lines = [line.strip() for line in (stderr or "").splitlines() if line.strip()]
        for line in reversed(lines):
            if line.startswith("ERROR"):
                return line
        return lines[-1] if lines else "no error output"
