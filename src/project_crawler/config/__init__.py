"""
Configuration management for the project crawler.
"""

from .options import CrawlerOptions
from .config_manager import (
    ConfigManager, AppConfig, GitHubConfig, ProjectsConfig, LoggingConfig
)

__all__ = [
    "CrawlerOptions",
    "ConfigManager",
    "AppConfig",
    "GitHubConfig",
    "ProjectsConfig",
    "LoggingConfig"
]
