# Models package
from scribe.core.models.data_models import (
    AcquisitionStrategy,
    ProcessingStage,
    AudioArtifact,
    TranscriptionResponse,
    PipelineResult,
    Configuration,
)
from scribe.core.models.errors import (
    ScribeError,
    TranscriptionError,
    AudioExtractionError,
    ConfigurationError,
)

__all__ = [
    # Enums
    "AcquisitionStrategy",
    "ProcessingStage",
    # Data classes
    "AudioArtifact",
    "TranscriptionResponse",
    "Configuration",
    # Result classes
    "PipelineResult",
    # Errors
    "ScribeError",
    "TranscriptionError",
    "AudioExtractionError",
    "ConfigurationError",
]
