"""Transcribe audio/video files and web video links through a remote ASR service."""

__version__ = "1.0.0"
