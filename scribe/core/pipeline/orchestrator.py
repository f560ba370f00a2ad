"""
Pipeline Orchestrator for the transcription run.

Coordinates the stages of one invocation: classify the input, acquire an
mp3, upload it to the ASR service, and emit the response. Errors from any
stage propagate to the caller; the orchestrator only guarantees that the
intermediate mp3 is removed on the way out.
"""

import os
import sys
import time
import uuid
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, TextIO

from scribe.core.models.data_models import (
    Configuration, PipelineResult, ProcessingStage, TranscriptionResponse
)
from scribe.core.processing.audio_extractor import AudioExtractor
from scribe.core.processing.input_classifier import classify_input
from scribe.core.processing.transcriber import ASRClient

logger = logging.getLogger(__name__)

TEMP_FILE_PREFIX = "scribe-"


def _remove_file(path: str) -> None:
    try:
        os.remove(path)
        logger.debug(f"Removed temporary file {path}")
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove temporary file {path}: {e}")


@contextmanager
def temporary_audio_path(temp_dir: str = ".", keep: bool = False) -> Iterator[str]:
    """
    Reserve a unique mp3 path for one run and remove it afterwards.

    The path is guaranteed absent when the block starts. It is deleted
    when the block exits, whether normally or by an exception, unless
    ``keep`` is set.
    """
    directory = Path(temp_dir)
    directory.mkdir(parents=True, exist_ok=True)
    path = str(directory / f"{TEMP_FILE_PREFIX}{uuid.uuid4().hex}.mp3")

    _remove_file(path)
    try:
        yield path
    finally:
        if keep:
            logger.info(f"Keeping temporary file {path}")
        else:
            _remove_file(path)


class TranscriptionPipeline:
    """
    Runs one input through acquisition and transcription.

    Components are built from the configuration unless supplied, which
    lets tests inject fakes for the extractor and the ASR client.
    """

    def __init__(
        self,
        config: Optional[Configuration] = None,
        audio_extractor: Optional[AudioExtractor] = None,
        asr_client: Optional[ASRClient] = None
    ):
        self.config = config or Configuration()
        self.audio_extractor = audio_extractor or AudioExtractor(
            downloader=self.config.downloader_executable,
            transcoder=self.config.transcoder_executable,
            audio_codec=self.config.audio_codec,
            audio_quality=self.config.download_audio_quality
        )
        self.asr_client = asr_client or ASRClient.from_config(self.config)
        self.stage = ProcessingStage.CLASSIFY

    def _update_stage(self, stage: ProcessingStage, step_description: str = ""):
        self.stage = stage
        logger.debug(f"{stage.value}: {step_description}")

    def run(self, input_ref: str, stream: Optional[TextIO] = None) -> PipelineResult:
        """
        Classify, acquire and upload a single input.

        Args:
            input_ref: Web video link or local media path
            stream: When given, the response body is written to it before
                the temporary mp3 is removed

        Returns:
            PipelineResult with the ASR service response

        Raises:
            AudioExtractionError: If the mp3 cannot be produced
            TranscriptionError: If the upload fails
        """
        start_time = time.time()

        try:
            self._update_stage(ProcessingStage.CLASSIFY, input_ref)
            strategy = classify_input(input_ref, self.config.web_video_markers)

            with temporary_audio_path(self.config.temp_directory, keep=self.config.keep_temp_files) as tmp_path:
                self._update_stage(ProcessingStage.ACQUIRE, f"{strategy.value} -> {tmp_path}")
                artifact = self.audio_extractor.acquire(input_ref, strategy, tmp_path)

                self._update_stage(ProcessingStage.UPLOAD, artifact.path)
                response = self.asr_client.transcribe(artifact.path)

                if stream is not None:
                    self.emit(response, stream)

                self._update_stage(ProcessingStage.CLEANUP, tmp_path)
        except Exception:
            self._update_stage(ProcessingStage.FAILED, input_ref)
            raise

        processing_time = time.time() - start_time
        self._update_stage(ProcessingStage.COMPLETED, f"{processing_time:.2f}s")

        return PipelineResult(
            input_ref=input_ref,
            strategy=strategy,
            audio_path=artifact.path,
            response=response,
            processing_time=processing_time
        )

    def emit(self, response: TranscriptionResponse, stream: Optional[TextIO] = None) -> None:
        """Write the response body verbatim, with no added newline."""
        self._update_stage(ProcessingStage.EMIT, f"{len(response.text)} characters")
        stream = stream or sys.stdout
        stream.write(response.text)
        stream.flush()

    def process(self, input_ref: str, stream: Optional[TextIO] = None) -> PipelineResult:
        """Run the pipeline and print the transcript to ``stream`` (stdout by default)."""
        return self.run(input_ref, stream=stream or sys.stdout)
