"""
Configuration management system for the project crawler.
"""

import os
import re
import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional, Union
from dataclasses import dataclass, field
import logging

from ..error_handling import ConfigurationError
from ..models import ProjectAndBranch, parse_provider
from .options import CrawlerOptions

logger = logging.getLogger(__name__)


@dataclass
class GitHubConfig:
    """GitHub API configuration."""
    root_url: str = ""
    api_base_url: str = "https://api.github.com"
    token: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    repository: Optional[str] = None
    timeout: int = 30
    max_retries: int = 3


@dataclass
class ProjectsConfig:
    """Which projects to track and how to name them."""
    exclude: str = ""
    rename_mapping: Dict[str, str] = field(default_factory=dict)
    projects: List[Any] = field(default_factory=list)


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    file: Optional[str] = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    max_file_size: int = 10  # MB
    backup_count: int = 5
    structured: bool = False


@dataclass
class AppConfig:
    """Complete application configuration."""
    github: GitHubConfig = field(default_factory=GitHubConfig)
    projects: ProjectsConfig = field(default_factory=ProjectsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigManager:
    """
    Manages application configuration from multiple sources.
    
    Configuration is loaded in the following order (later sources override earlier):
    1. Default configuration
    2. Configuration file
    3. Environment variables
    4. Explicit overrides (command-line arguments, tests)
    """
    
    def __init__(
        self,
        config_file: Optional[Union[str, Path]] = None,
        overrides: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize configuration manager.
        
        Args:
            config_file: Path to configuration file
            overrides: Nested configuration values applied last
        """
        self.config_file = Path(config_file) if config_file else None
        self.overrides = overrides or {}
        self._config: Optional[AppConfig] = None
        self._env_var_mapping = self._create_env_var_mapping()
    
    def _create_env_var_mapping(self) -> Dict[str, str]:
        """Create mapping of environment variables to config paths."""
        return {
            # GitHub configuration
            "GITHUB_ROOT_URL": "github.root_url",
            "GITHUB_API_URL": "github.api_base_url",
            "GITHUB_TOKEN": "github.token",
            "GITHUB_USERNAME": "github.username",
            "GITHUB_PASSWORD": "github.password",
            "CRAWLER_REPOSITORY": "github.repository",
            "GITHUB_TIMEOUT": "github.timeout",
            "GITHUB_MAX_RETRIES": "github.max_retries",
            
            # Project configuration
            "CRAWLER_EXCLUDE": "projects.exclude",
            "CRAWLER_PROJECTS": "projects.projects",
            
            # Logging configuration
            "LOG_LEVEL": "logging.level",
            "LOG_FILE": "logging.file",
            "LOG_FORMAT": "logging.format",
        }
    
    def load_config(self) -> AppConfig:
        """
        Load configuration from all sources.
        
        Returns:
            Complete application configuration
        """
        if self._config is not None:
            return self._config
        
        config_dict = self._get_default_config()
        
        if self.config_file and self.config_file.exists():
            file_config = self._load_config_file(self.config_file)
            config_dict = self._merge_configs(config_dict, file_config)
        
        env_config = self._load_env_config()
        config_dict = self._merge_configs(config_dict, env_config)
        
        config_dict = self._merge_configs(config_dict, self.overrides)
        
        config_dict = self._substitute_env_vars(config_dict)
        
        self._validate_config(config_dict)
        
        self._config = self._dict_to_config(config_dict)
        
        return self._config
    
    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values."""
        return {
            "github": {
                "root_url": "",
                "api_base_url": "https://api.github.com",
                "token": None,
                "username": None,
                "password": None,
                "repository": None,
                "timeout": 30,
                "max_retries": 3
            },
            "projects": {
                "exclude": "",
                "rename_mapping": {},
                "projects": []
            },
            "logging": {
                "level": "INFO",
                "file": None,
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "max_file_size": 10,
                "backup_count": 5,
                "structured": False
            }
        }
    
    def _load_config_file(self, config_path: Path) -> Dict[str, Any]:
        """
        Load configuration from YAML file.
        
        Args:
            config_path: Path to configuration file
            
        Returns:
            Configuration dictionary
            
        Raises:
            ConfigurationError: If the file is not valid YAML or not a mapping
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Failed to load config file {config_path}",
                config_key="config_file",
                config_value=config_path,
                cause=e
            )
        
        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ConfigurationError(
                f"Config file {config_path} must contain a mapping",
                config_key="config_file",
                config_value=config_path
            )
        
        logger.info(f"Loaded configuration from {config_path}")
        return config
    
    def _load_env_config(self) -> Dict[str, Any]:
        """
        Load configuration from environment variables.
        
        Returns:
            Configuration dictionary from environment variables
        """
        env_config = {}
        
        for env_var, config_path in self._env_var_mapping.items():
            value = os.getenv(env_var)
            if value is not None:
                value = self._convert_env_value(config_path, value)
                self._set_nested_value(env_config, config_path, value)
        
        return env_config
    
    def _convert_env_value(self, config_path: str, value: str) -> Any:
        """
        Convert environment variable string to the type its setting expects.
        
        Args:
            config_path: Dot-separated config path the value is destined for
            value: String value from environment variable
            
        Returns:
            Converted value
        """
        if config_path in ("github.timeout", "github.max_retries"):
            try:
                return int(value)
            except ValueError:
                raise ConfigurationError(
                    f"Expected an integer for {config_path}",
                    config_key=config_path,
                    config_value=value
                )
        
        if config_path == "projects.projects":
            return [item.strip() for item in value.split(',') if item.strip()]
        
        return value
    
    def _set_nested_value(self, config: Dict[str, Any], path: str, value: Any) -> None:
        """
        Set a nested configuration value using dot notation.
        
        Args:
            config: Configuration dictionary
            path: Dot-separated path (e.g., 'github.token')
            value: Value to set
        """
        keys = path.split('.')
        current = config
        
        for key in keys[:-1]:
            if key not in current:
                current[key] = {}
            current = current[key]
        
        current[keys[-1]] = value
    
    def _substitute_env_vars(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Substitute ``${VAR}`` references in configuration values.
        
        Args:
            config: Configuration dictionary
            
        Returns:
            Configuration with environment variables substituted
        """
        def substitute_recursive(obj):
            if isinstance(obj, dict):
                return {k: substitute_recursive(v) for k, v in obj.items()}
            elif isinstance(obj, list):
                return [substitute_recursive(item) for item in obj]
            elif isinstance(obj, str) and obj.startswith('${') and obj.endswith('}'):
                env_var = obj[2:-1]
                return os.getenv(env_var, obj)
            else:
                return obj
        
        return substitute_recursive(config)
    
    def _merge_configs(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge two configuration dictionaries.
        
        Args:
            base: Base configuration
            override: Override configuration
            
        Returns:
            Merged configuration
        """
        result = base.copy()
        
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value
        
        return result
    
    def _validate_config(self, config: Dict[str, Any]) -> None:
        """
        Validate configuration values.
        
        Args:
            config: Configuration dictionary
            
        Raises:
            ConfigurationError: If configuration is invalid
        """
        github = config.get("github", {})
        if not github.get("token") and not github.get("username"):
            logger.warning("No GitHub credentials configured - requests will be anonymous and rate limited")
        
        exclude = config.get("projects", {}).get("exclude") or ""
        try:
            re.compile(exclude)
        except re.error as e:
            raise ConfigurationError(
                f"Invalid exclude pattern: {e}",
                config_key="projects.exclude",
                config_value=exclude,
                cause=e
            )
        
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        log_level = str(config.get("logging", {}).get("level", "INFO")).upper()
        if log_level not in valid_levels:
            raise ConfigurationError(
                f"Invalid log level: {log_level}. Valid levels: {sorted(valid_levels)}",
                config_key="logging.level",
                config_value=log_level
            )
        
        for key in ("timeout", "max_retries"):
            value = github.get(key)
            if not isinstance(value, int) or value < 0:
                raise ConfigurationError(
                    f"github.{key} must be a non-negative integer",
                    config_key=f"github.{key}",
                    config_value=value
                )
        
        # Parsing raises on malformed entries; the parsed result is rebuilt later.
        self._parse_projects(config.get("projects", {}).get("projects") or [])
    
    def _parse_projects(self, entries: List[Any]) -> List[ProjectAndBranch]:
        """
        Parse manual project entries.
        
        Entries are either ``project[:branch]`` strings or mappings with
        ``project`` and optional ``branch`` keys.
        """
        parsed = []
        for entry in entries:
            try:
                if isinstance(entry, dict):
                    base = ProjectAndBranch.parse(str(entry["project"]))
                    branch = entry.get("branch")
                    parsed.append(ProjectAndBranch(base.project, str(branch)) if branch else base)
                else:
                    parsed.append(ProjectAndBranch.parse(str(entry)))
            except (KeyError, ValueError) as e:
                raise ConfigurationError(
                    "Invalid project entry",
                    config_key="projects.projects",
                    config_value=entry,
                    cause=e
                )
        return parsed
    
    def _dict_to_config(self, config_dict: Dict[str, Any]) -> AppConfig:
        """
        Convert configuration dictionary to AppConfig object.
        
        Args:
            config_dict: Configuration dictionary
            
        Returns:
            AppConfig object
        """
        try:
            return AppConfig(
                github=GitHubConfig(**config_dict.get("github", {})),
                projects=ProjectsConfig(**config_dict.get("projects", {})),
                logging=LoggingConfig(**config_dict.get("logging", {}))
            )
        except TypeError as e:
            raise ConfigurationError("Unknown configuration key", cause=e)
    
    def get_config(self) -> AppConfig:
        """
        Get the current configuration.
        
        Returns:
            Application configuration
        """
        if self._config is None:
            return self.load_config()
        return self._config
    
    def to_options(self) -> CrawlerOptions:
        """
        Build the immutable options snapshot used by repository management.
        
        Returns:
            CrawlerOptions for the current configuration
        """
        config = self.get_config()
        return CrawlerOptions(
            root_url=config.github.root_url or "",
            token=config.github.token or "",
            username=config.github.username or "",
            password=config.github.password or "",
            repository=parse_provider(config.github.repository),
            projects=tuple(self._parse_projects(config.projects.projects)),
            exclude=config.projects.exclude or "",
            rename_mapping=dict(config.projects.rename_mapping or {}),
            api_base_url=config.github.api_base_url,
            timeout=config.github.timeout,
            max_retries=config.github.max_retries
        )
    
    def save_config(self, config_path: Optional[Path] = None) -> None:
        """
        Save current configuration to file, leaving credentials out.
        
        Args:
            config_path: Path to save configuration file
        """
        if config_path is None:
            config_path = self.config_file or Path("crawler.yaml")
        
        config = self.get_config()
        config_dict = {
            "github": {
                "root_url": config.github.root_url,
                "api_base_url": config.github.api_base_url,
                "repository": config.github.repository,
                "timeout": config.github.timeout,
                "max_retries": config.github.max_retries
            },
            "projects": {
                "exclude": config.projects.exclude,
                "rename_mapping": dict(config.projects.rename_mapping),
                "projects": list(config.projects.projects)
            },
            "logging": {
                "level": config.logging.level,
                "file": config.logging.file,
                "format": config.logging.format,
                "max_file_size": config.logging.max_file_size,
                "backup_count": config.logging.backup_count,
                "structured": config.logging.structured
            }
        }
        
        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(config_dict, f, default_flow_style=False, indent=2)
        
        logger.info(f"Configuration saved to {config_path}")

