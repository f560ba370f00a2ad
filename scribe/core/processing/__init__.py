# Processing package
from scribe.core.processing.input_classifier import classify_input
from scribe.core.processing.audio_extractor import AudioExtractor
from scribe.core.processing.transcriber import ASRClient

__all__ = [
    "classify_input",
    "AudioExtractor",
    "ASRClient",
]
