"""
Configuration management for the hacklearn site.

YAML-based configuration with environment variable overrides, validated
through Pydantic models.

Example usage:
    >>> config_manager = ConfigManager()
    >>> config = config_manager.load_config("config.yaml")
    >>> print(config.search.suggestion_limit)

Environment variable overrides:
    - HACKLEARN_LOG_LEVEL: Overrides logging.level
    - HACKLEARN_DATASET_PATH: Overrides content.dataset_path
    - HACKLEARN_SUGGESTION_LIMIT: Overrides search.suggestion_limit
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigurationError


DEFAULT_SUGGESTION_LIMIT = 6
DEFAULT_COMMENT_LIMIT = 100

logger = logging.getLogger(__name__)


class SiteConfig(BaseModel):
    """Site identity shown on the home and about pages.

    Attributes:
        name (str): Site title.
        author (str): Author credited on the about page and in the footer.
        tagline (str): Headline on the home page.
    """
    name: str = Field(default="Ethical Hacking Learning", description="Site title")
    author: str = Field(default="Balkar Singh", description="Site author")
    tagline: str = Field(
        default="Learn Ethical Hacking the Right Way",
        description="Home page headline"
    )


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level (str): DEBUG, INFO, WARNING, ERROR or CRITICAL. Defaults to INFO.
        format_json (bool): Emit JSON lines instead of plain text.
        include_source_location (bool): Add file/line/function to records.
    """
    level: str = Field(default="INFO", description="Logging level")
    format_json: bool = Field(default=True, description="Use JSON log lines")
    include_source_location: bool = Field(default=False, description="Include file and line")


class SearchConfig(BaseModel):
    """Search box behaviour."""
    suggestion_limit: int = Field(
        default=DEFAULT_SUGGESTION_LIMIT,
        description="Maximum suggestions shown under the search box, never above 6",
        ge=1,
        le=DEFAULT_SUGGESTION_LIMIT
    )


class ContentConfig(BaseModel):
    """Where the topic/project dataset comes from.

    Attributes:
        dataset_path (str | None): YAML or JSON dataset file. The bundled
            sample dataset is used when unset.
    """
    dataset_path: Optional[str] = Field(default=None, description="Dataset file path")


class CommentsConfig(BaseModel):
    """Comment board limits."""
    limit: int = Field(
        default=DEFAULT_COMMENT_LIMIT,
        description="Maximum comments kept, newest first",
        ge=1
    )


class Config(BaseModel):
    """Root configuration object.

    Example:
        >>> config = Config(search={"suggestion_limit": 4})
        >>> config.comments.limit
        100
    """
    model_config = ConfigDict(validate_assignment=True)

    site: SiteConfig = Field(default_factory=SiteConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    content: ContentConfig = Field(default_factory=ContentConfig)
    comments: CommentsConfig = Field(default_factory=CommentsConfig)


class ConfigManager:
    """Loads ``config.yaml`` and applies environment overrides.

    Example:
        >>> manager = ConfigManager()
        >>> config = manager.load_config("config.yaml")
        >>> print(config.site.name)
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def load_config(self, config_path: str) -> Config:
        """
        Load configuration from a YAML file with environment variable overrides.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            Config: Populated configuration object

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ConfigurationError: If YAML parsing or validation fails
        """
        self.logger.info(f"Loading configuration from: {config_path}")

        if not Path(config_path).exists():
            self.logger.error(f"Configuration file not found: {config_path}")
            raise FileNotFoundError(
                f"Configuration file not found: {config_path}\n"
                f"Please ensure the file exists and is readable."
            )

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                yaml_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            self.logger.error(f"Invalid YAML format in {config_path}: {e}")
            raise ConfigurationError(
                f"Invalid YAML format in {config_path}: {e}", config_path=config_path
            ) from e
        except OSError as e:
            self.logger.error(f"Error reading config file {config_path}: {e}")
            raise ConfigurationError(
                f"Error reading config file {config_path}: {e}", config_path=config_path
            ) from e

        if yaml_data is None:
            self.logger.warning("YAML file is empty, using default configuration")
            yaml_data = {}
        if not isinstance(yaml_data, dict):
            raise ConfigurationError(
                f"Configuration root must be a mapping in {config_path}", config_path=config_path
            )
        if 'site' not in yaml_data:
            raise ConfigurationError(
                "Missing required 'site' section in configuration", config_path=config_path
            )

        yaml_data = self._apply_env_overrides(yaml_data)

        try:
            config = Config(**yaml_data)
        except PydanticValidationError as e:
            self.logger.error(f"Configuration validation failed: {e}")
            raise ConfigurationError(
                f"Configuration validation failed: {e}", config_path=config_path
            ) from e

        self.logger.info("Configuration loaded and validated successfully")
        return config

    def _apply_env_overrides(self, yaml_data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to YAML data."""
        for section in ('logging', 'content', 'search'):
            if not isinstance(yaml_data.get(section), dict):
                yaml_data[section] = {}

        if 'HACKLEARN_LOG_LEVEL' in os.environ:
            yaml_data['logging']['level'] = os.environ['HACKLEARN_LOG_LEVEL']
        if 'HACKLEARN_DATASET_PATH' in os.environ:
            yaml_data['content']['dataset_path'] = os.environ['HACKLEARN_DATASET_PATH']
        if 'HACKLEARN_SUGGESTION_LIMIT' in os.environ:
            try:
                yaml_data['search']['suggestion_limit'] = int(os.environ['HACKLEARN_SUGGESTION_LIMIT'])
            except ValueError:
                self.logger.warning("Ignoring non-integer HACKLEARN_SUGGESTION_LIMIT")

        return yaml_data
