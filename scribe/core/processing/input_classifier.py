"""
Input classification for the transcription pipeline.

Decides how audio is obtained for an input reference. No existence or URL
checks are made here; problems surface from the external utility that
handles the chosen strategy.
"""

import logging
from typing import Iterable

from scribe.core.models.data_models import AcquisitionStrategy

logger = logging.getLogger(__name__)

DEFAULT_WEB_VIDEO_MARKERS = ("youtube.com",)
MP3_SUFFIX = ".mp3"


def classify_input(input_ref: str, web_video_markers: Iterable[str] = DEFAULT_WEB_VIDEO_MARKERS) -> AcquisitionStrategy:
    """
    Pick the acquisition strategy for an input reference.

    Args:
        input_ref: Web video link or local file path
        web_video_markers: Substrings identifying a web video host

    Returns:
        DOWNLOAD for web video links, PASSTHROUGH for paths ending in
        ".mp3" (case-sensitive), TRANSCODE for everything else
    """
    if any(marker in input_ref for marker in web_video_markers):
        strategy = AcquisitionStrategy.DOWNLOAD
    elif input_ref.endswith(MP3_SUFFIX):
        strategy = AcquisitionStrategy.PASSTHROUGH
    else:
        strategy = AcquisitionStrategy.TRANSCODE

    logger.debug(f"Classified {input_ref!r} as {strategy.value}")
    return strategy
