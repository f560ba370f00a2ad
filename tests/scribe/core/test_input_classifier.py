"""
Unit tests for input classification.
"""

import pytest

from scribe.core.models.data_models import AcquisitionStrategy
from scribe.core.processing.input_classifier import classify_input


class TestClassifyInput:
    """Test strategy selection for input references."""

    @pytest.mark.parametrize("input_ref", [
        "https://youtube.com/watch?v=abc123",
        "https://www.youtube.com/watch?v=abc123&t=42",
        "youtube.com/shorts/xyz",
    ])
    def test_web_video_links_are_downloaded(self, input_ref):
        assert classify_input(input_ref) == AcquisitionStrategy.DOWNLOAD

    def test_mp3_is_passed_through(self):
        assert classify_input("speech.mp3") == AcquisitionStrategy.PASSTHROUGH
        assert classify_input("/data/audio/speech.mp3") == AcquisitionStrategy.PASSTHROUGH

    @pytest.mark.parametrize("input_ref", ["clip.mov", "lecture.mp4", "voice.wav", "notes.mp3.bak"])
    def test_other_media_is_transcoded(self, input_ref):
        assert classify_input(input_ref) == AcquisitionStrategy.TRANSCODE

    def test_mp3_suffix_is_case_sensitive(self):
        """Upper-case extensions go through ffmpeg."""
        assert classify_input("SPEECH.MP3") == AcquisitionStrategy.TRANSCODE

    def test_web_marker_wins_over_mp3_suffix(self):
        assert classify_input("https://youtube.com/watch?v=a.mp3") == AcquisitionStrategy.DOWNLOAD

    def test_custom_markers(self):
        markers = ["vimeo.com", "youtu.be"]

        assert classify_input("https://youtu.be/abc", markers) == AcquisitionStrategy.DOWNLOAD
        assert classify_input("https://vimeo.com/123", markers) == AcquisitionStrategy.DOWNLOAD
        # youtube.com is no longer a marker, so the link is treated as a media path
        assert classify_input("https://youtube.com/watch?v=abc", markers) == AcquisitionStrategy.TRANSCODE

    def test_nonexistent_path_is_not_validated(self):
        assert classify_input("/does/not/exist.mkv") == AcquisitionStrategy.TRANSCODE
