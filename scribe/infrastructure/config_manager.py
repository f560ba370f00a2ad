"""
Configuration Manager for scribe.

This module locates the optional YAML configuration file, flattens its
sections into a validated Configuration object, and overlays environment
variables on top. The result is passed explicitly to the pipeline.
"""

import os
import yaml
import logging
from pathlib import Path
from typing import Dict, Any, Mapping, Optional

from pydantic import ValidationError

from scribe.core.models.data_models import Configuration
from scribe.core.models.errors import ConfigurationError

# Configure logging
logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = ".scribe.yaml"
ENV_PREFIX = "SCRIBE_"

# (section, key) in the YAML file -> Configuration field
SECTION_FIELDS = {
    ("asr", "base_url"): "asr_base_url",
    ("asr", "endpoint"): "asr_endpoint",
    ("asr", "file_field"): "asr_file_field",
    ("asr", "timeout"): "asr_timeout",
    ("asr", "fail_on_http_error"): "asr_fail_on_http_error",
    ("download", "executable"): "downloader_executable",
    ("download", "audio_quality"): "download_audio_quality",
    ("download", "web_video_markers"): "web_video_markers",
    ("transcode", "executable"): "transcoder_executable",
    ("transcode", "audio_codec"): "audio_codec",
    ("resources", "temp_dir"): "temp_directory",
    ("resources", "keep_temp_files"): "keep_temp_files",
    ("logging", "level"): "log_level",
}

LIST_FIELDS = {"web_video_markers"}


def default_config_path() -> Path:
    """Path of the per-user configuration file."""
    return Path.home() / DEFAULT_CONFIG_NAME


class ConfigurationManager:
    """
    Loads configuration from file and environment.

    An explicit ``config_path`` must exist. Without one the manager looks
    for ``~/.scribe.yaml`` and silently falls back to defaults when it is
    absent.
    """

    def __init__(self, config_path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None):
        self.config_path = config_path
        self.environ = os.environ if environ is None else environ
        self.config: Optional[Configuration] = None
        self.config_file_used: Optional[str] = None
        self._raw_config: Dict[str, Any] = {}

    def load_configuration(self) -> Configuration:
        """
        Load, overlay and validate configuration.

        Returns:
            Validated Configuration object

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid
        """
        self._raw_config = self._read_config_file()

        config_dict = self._extract_configuration_dict()
        config_dict.update(self._extract_environment_overrides())

        try:
            self.config = Configuration(**config_dict)
        except ValidationError as e:
            first = e.errors()[0]
            field_name = ".".join(str(part) for part in first.get("loc", ()))
            raise ConfigurationError(
                f"Invalid configuration: {first.get('msg', str(e))}",
                field_name=field_name,
                invalid_value=config_dict.get(field_name)
            )

        logger.debug(f"Configuration loaded: {self.config.model_dump()}")
        return self.config

    def _resolve_path(self) -> Optional[Path]:
        if self.config_path:
            path = Path(self.config_path).expanduser()
            if not path.is_file():
                raise ConfigurationError(
                    f"Configuration file not found: {self.config_path}",
                    field_name="config_path",
                    invalid_value=self.config_path
                )
            return path

        try:
            path = default_config_path()
        except RuntimeError as e:
            logger.debug(f"Could not determine home directory: {e}")
            return None
        return path if path.is_file() else None

    def _read_config_file(self) -> Dict[str, Any]:
        path = self._resolve_path()
        if path is None:
            logger.debug("No configuration file found, using defaults")
            return {}

        try:
            with open(path, 'r', encoding='utf-8') as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {str(e)}",
                field_name="yaml_syntax"
            )
        except OSError as e:
            raise ConfigurationError(
                f"Error reading configuration file: {str(e)}",
                field_name="config_path",
                invalid_value=str(path)
            )

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigurationError(
                "Configuration file must contain a mapping",
                field_name="yaml_syntax",
                invalid_value=type(raw).__name__
            )

        self.config_file_used = str(path)
        logger.debug(f"Read configuration from {path}")
        return raw

    def _extract_configuration_dict(self) -> Dict[str, Any]:
        """Flatten the known YAML sections into Configuration fields."""
        config_dict = {}

        for (section, key), field_name in SECTION_FIELDS.items():
            section_data = self._raw_config.get(section) or {}
            if not isinstance(section_data, dict):
                raise ConfigurationError(
                    f"Section '{section}' must be a mapping",
                    field_name=section,
                    invalid_value=section_data
                )
            if key in section_data:
                config_dict[field_name] = section_data[key]

        unknown = set(self._raw_config) - {section for section, _ in SECTION_FIELDS}
        for section in sorted(unknown):
            logger.warning(f"Ignoring unknown configuration section: {section}")

        return config_dict

    def _extract_environment_overrides(self) -> Dict[str, Any]:
        """Read SCRIBE_<FIELD> variables for every Configuration field."""
        overrides = {}

        for field_name in Configuration.model_fields:
            env_name = f"{ENV_PREFIX}{field_name.upper()}"
            if env_name not in self.environ:
                continue
            value = self.environ[env_name]
            if field_name in LIST_FIELDS:
                value = [item.strip() for item in value.split(",") if item.strip()]
            overrides[field_name] = value
            logger.debug(f"Configuration field {field_name} overridden by {env_name}")

        return overrides


# Convenience function for quick configuration loading
def load_config(config_path: Optional[str] = None) -> Configuration:
    """
    Convenience function to load configuration.

    Args:
        config_path: Path to configuration file, or None for ~/.scribe.yaml

    Returns:
        Validated Configuration object
    """
    manager = ConfigurationManager(config_path)
    return manager.load_configuration()
