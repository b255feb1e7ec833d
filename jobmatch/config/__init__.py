"""Configuration management for the job match pipeline."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import build_app_config, load_config, validate_config_file
from .models import (
    DEFAULT_TECH_RULES,
    DEFAULT_TITLE_BUCKETS,
    AppConfig,
    LLMConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    MatchingConfig,
    NormalizationConfig,
    OutputConfig,
    OutputFormat,
    PostConfig,
    ResumeConfig,
    ScoringMode,
    TechRule,
    TitleBucket,
    VerdictStrategy,
)

__all__ = [
    # Loader functions
    "load_config",
    "build_app_config",
    "validate_config_file",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "MatchingConfig",
    "NormalizationConfig",
    "LLMConfig",
    "ResumeConfig",
    "PostConfig",
    "LoggingConfig",
    "OutputConfig",
    "EnvironmentConfig",
    "TitleBucket",
    "TechRule",
    # Defaults
    "DEFAULT_TITLE_BUCKETS",
    "DEFAULT_TECH_RULES",
    # Enums
    "ScoringMode",
    "VerdictStrategy",
    "LogLevel",
    "LogFormat",
    "OutputFormat",
    # Exceptions
    "ConfigurationError",
]
