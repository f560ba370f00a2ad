"""
Unit tests for the Configuration Manager module.

These tests verify file discovery, YAML flattening, environment overlay
and validation errors.
"""

import os
import shutil
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from scribe.core.models.data_models import Configuration
from scribe.core.models.errors import ConfigurationError
from scribe.infrastructure.config_manager import ConfigurationManager, load_config


SAMPLE_CONFIG = """
asr:
  base_url: http://asr.internal:9000/
  timeout: 600
  fail_on_http_error: true
download:
  audio_quality: "5"
  web_video_markers:
    - youtube.com
    - youtu.be
transcode:
  executable: /usr/local/bin/ffmpeg
resources:
  temp_dir: /tmp/scribe
logging:
  level: info
"""


class TestConfigurationManager:
    """Test the main ConfigurationManager class."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.missing_home_config = Path(self.temp_dir) / "home" / ".scribe.yaml"
        self.home_patch = patch(
            'scribe.infrastructure.config_manager.default_config_path',
            return_value=self.missing_home_config
        )
        self.home_patch.start()

    def teardown_method(self):
        self.home_patch.stop()
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def _write(self, content, name="config.yaml"):
        path = os.path.join(self.temp_dir, name)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        return path

    def test_defaults_without_file(self):
        manager = ConfigurationManager(environ={})
        config = manager.load_configuration()

        assert config == Configuration()
        assert config.asr_url == "http://0.0.0.0:9000/asr"
        assert config.web_video_markers == ["youtube.com"]
        assert manager.config_file_used is None

    def test_load_valid_configuration(self):
        path = self._write(SAMPLE_CONFIG)
        manager = ConfigurationManager(path, environ={})

        config = manager.load_configuration()

        assert manager.config_file_used == path
        assert config.asr_base_url == "http://asr.internal:9000"
        assert config.asr_timeout == 600
        assert config.asr_fail_on_http_error is True
        assert config.download_audio_quality == "5"
        assert config.web_video_markers == ["youtube.com", "youtu.be"]
        assert config.transcoder_executable == "/usr/local/bin/ffmpeg"
        assert config.temp_directory == "/tmp/scribe"
        assert config.log_level == "INFO"
        # untouched fields keep their defaults
        assert config.asr_file_field == "audio_file"

    def test_home_config_is_used(self):
        self.missing_home_config.parent.mkdir()
        self.missing_home_config.write_text("asr:\n  endpoint: /transcribe\n", encoding='utf-8')

        manager = ConfigurationManager(environ={})
        config = manager.load_configuration()

        assert config.asr_endpoint == "/transcribe"
        assert manager.config_file_used == str(self.missing_home_config)

    def test_load_nonexistent_file(self):
        manager = ConfigurationManager('nonexistent.yaml', environ={})

        with pytest.raises(ConfigurationError) as exc_info:
            manager.load_configuration()

        assert "Configuration file not found" in str(exc_info.value)
        assert "nonexistent.yaml" in str(exc_info.value)

    def test_load_invalid_yaml(self):
        path = self._write('invalid: yaml: content: [unclosed')
        manager = ConfigurationManager(path, environ={})

        with pytest.raises(ConfigurationError) as exc_info:
            manager.load_configuration()

        assert "Invalid YAML" in str(exc_info.value)

    def test_non_mapping_document(self):
        path = self._write('- just\n- a list\n')

        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            ConfigurationManager(path, environ={}).load_configuration()

    def test_non_mapping_section(self):
        path = self._write('asr: http://asr:9000\n')

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigurationManager(path, environ={}).load_configuration()

        assert exc_info.value.field_name == "asr"

    def test_empty_file(self):
        path = self._write('')

        config = ConfigurationManager(path, environ={}).load_configuration()

        assert config == Configuration()

    def test_invalid_value(self):
        path = self._write('asr:\n  base_url: ftp://asr\n')

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigurationManager(path, environ={}).load_configuration()

        assert exc_info.value.field_name == "asr_base_url"
        assert exc_info.value.invalid_value == "ftp://asr"

    def test_invalid_log_level(self):
        path = self._write('logging:\n  level: chatty\n')

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigurationManager(path, environ={}).load_configuration()

        assert exc_info.value.field_name == "log_level"

    def test_environment_overrides_file(self):
        path = self._write(SAMPLE_CONFIG)
        environ = {
            "SCRIBE_ASR_BASE_URL": "https://asr.example.com",
            "SCRIBE_ASR_TIMEOUT": "30.5",
            "SCRIBE_KEEP_TEMP_FILES": "true",
            "SCRIBE_WEB_VIDEO_MARKERS": "vimeo.com, youtube.com",
            "UNRELATED": "ignored",
        }

        config = ConfigurationManager(path, environ=environ).load_configuration()

        assert config.asr_base_url == "https://asr.example.com"
        assert config.asr_timeout == 30.5
        assert config.keep_temp_files is True
        assert config.web_video_markers == ["vimeo.com", "youtube.com"]
        # from the file
        assert config.transcoder_executable == "/usr/local/bin/ffmpeg"

    def test_environment_without_file(self):
        config = ConfigurationManager(environ={"SCRIBE_LOG_LEVEL": "debug"}).load_configuration()

        assert config.log_level == "DEBUG"

    def test_invalid_environment_value(self):
        manager = ConfigurationManager(environ={"SCRIBE_ASR_TIMEOUT": "soon"})

        with pytest.raises(ConfigurationError) as exc_info:
            manager.load_configuration()

        assert exc_info.value.field_name == "asr_timeout"

    def test_unknown_section_is_ignored(self):
        path = self._write('whisper:\n  default_model: tiny\n')

        config = ConfigurationManager(path, environ={}).load_configuration()

        assert config == Configuration()


class TestConvenienceFunction:
    """Test the convenience load_config function."""

    def test_load_config_function_nonexistent_file(self):
        with pytest.raises(ConfigurationError):
            load_config('nonexistent.yaml')
