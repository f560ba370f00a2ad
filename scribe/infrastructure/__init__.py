# Infrastructure package
from scribe.infrastructure.config_manager import ConfigurationManager, load_config
from scribe.infrastructure.logging_setup import configure_logging

__all__ = [
    "ConfigurationManager",
    "load_config",
    "configure_logging",
]
