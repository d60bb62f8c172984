"""
Command-line interface for the project crawler.
"""

import click
import json
import sys
from typing import List, Optional
from pathlib import Path

import yaml

from . import __version__
from .config import AppConfig, ConfigManager
from .error_handling import CrawlerError
from .logging import LoggerConfig, setup_logging
from .models import Repository
from .repository import GithubRepositoryManagement, GithubRepositoryManagementBuilder

SECRET_KEYS = {"token", "password"}
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@click.group()
@click.version_option(version=__version__)
@click.option(
    '--config', '-c',
    type=click.Path(exists=True, path_type=Path),
    help='Path to configuration file'
)
@click.option(
    '--verbose', '-v',
    count=True,
    help='Increase verbosity (use -v or -vv)'
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], verbose: int) -> None:
    """
    Project Crawler - discover GitHub repositories and read their pipeline descriptors.
    """
    ctx.ensure_object(dict)
    ctx.obj['config_file'] = config
    ctx.obj['verbose'] = verbose


def load_management(ctx: click.Context) -> GithubRepositoryManagement:
    """Load configuration, set up logging and build GitHub repository management."""
    config_manager = ConfigManager(ctx.obj.get('config_file'))
    config = config_manager.get_config()
    configure_logging(config, ctx.obj.get('verbose', 0))
    
    management = GithubRepositoryManagementBuilder().build(config_manager.to_options())
    if management is None:
        raise click.ClickException(
            "Configuration does not target GitHub (set github.root_url or github.repository)"
        )
    return management


def configure_logging(config: AppConfig, verbose: int) -> None:
    """Set up logging from configuration, raising the level with verbosity."""
    logger_config = LoggerConfig.from_app_config(config.logging)
    if verbose == 0:
        logger_config.level = max(logger_config.level.upper(), "WARNING", key=LOG_LEVELS.index)
    elif verbose == 1:
        logger_config.level = "INFO"
    elif verbose >= 2:
        logger_config.level = "DEBUG"
    setup_logging(logger_config)


@cli.command()
@click.argument('org')
@click.option(
    '--format', '-f',
    type=click.Choice(['table', 'json'], case_sensitive=False),
    default='table',
    help='Output format for the repository list'
)
@click.pass_context
def repos(ctx: click.Context, org: str, format: str) -> None:
    """
    List the repositories of an organization or user.
    
    Examples:
    
        project-crawler repos spring-cloud
        
        project-crawler -c crawler.yaml repos marcingrzejszczak -f json
    """
    try:
        repositories = load_management(ctx).repositories(org)
    except CrawlerError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    
    if format == 'json':
        click.echo(json.dumps([repo.to_dict() for repo in repositories], indent=2))
    else:
        display_repositories(repositories)


@cli.command(name='file')
@click.argument('org')
@click.argument('repo')
@click.argument('file_path')
@click.option('--branch', '-b', default='master', show_default=True, help='Branch to read from')
@click.pass_context
def file_content(ctx: click.Context, org: str, repo: str, file_path: str, branch: str) -> None:
    """
    Print the content of a file from a repository branch.
    
    An unreadable file prints nothing.
    """
    try:
        content = load_management(ctx).file_content(org, repo, branch, file_path)
    except CrawlerError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    
    click.echo(content, nl=False)


@cli.command()
@click.argument('org')
@click.argument('repo')
@click.argument('file_path')
@click.option('--branch', '-b', default='master', show_default=True, help='Branch to check')
@click.pass_context
def exists(ctx: click.Context, org: str, repo: str, file_path: str, branch: str) -> None:
    """
    Check whether a file exists on a repository branch.
    
    Exits with status 1 when the file is missing or GitHub answers with
    any non-2xx status, and with status 2 when GitHub cannot be reached
    or the configuration is invalid.
    """
    try:
        found = load_management(ctx).descriptor_exists(org, repo, branch, file_path)
    except CrawlerError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)
    
    click.echo("true" if found else "false")
    if not found:
        sys.exit(1)


@cli.command()
@click.option(
    '--format', '-f',
    type=click.Choice(['table', 'json', 'yaml'], case_sensitive=False),
    default='table',
    help='Output format for configuration display'
)
@click.pass_context
def config(ctx: click.Context, format: str) -> None:
    """
    Display current configuration settings.
    
    Shows defaults merged with the configuration file and environment
    variable overrides. Secrets are masked.
    """
    try:
        app_config = ConfigManager(ctx.obj.get('config_file')).get_config()
    except CrawlerError as e:
        click.echo(f"Error displaying configuration: {e}", err=True)
        sys.exit(1)
    
    config_dict = masked_config_dict(app_config)
    if format == 'json':
        click.echo(json.dumps(config_dict, indent=2, default=str))
    elif format == 'yaml':
        click.echo(yaml.safe_dump(config_dict, default_flow_style=False))
    else:
        display_config_table(config_dict)


def masked_config_dict(app_config: AppConfig) -> dict:
    """Return the configuration as nested dicts with secrets replaced."""
    sections = {
        'github': dict(app_config.github.__dict__),
        'projects': dict(app_config.projects.__dict__),
        'logging': dict(app_config.logging.__dict__)
    }
    for key in SECRET_KEYS:
        if sections['github'].get(key):
            sections['github'][key] = '*' * 8
    return sections


def display_repositories(repositories: List[Repository]) -> None:
    """Display repositories as an aligned table."""
    if not repositories:
        click.echo("No repositories found")
        return
    
    name_width = max(len("NAME"), *(len(repo.name) for repo in repositories))
    branch_width = max(len("BRANCH"), *(len(repo.branch) for repo in repositories))
    click.echo(f"{'NAME'.ljust(name_width)}  {'BRANCH'.ljust(branch_width)}  CLONE URL")
    for repo in repositories:
        click.echo(f"{repo.name.ljust(name_width)}  {repo.branch.ljust(branch_width)}  {repo.clone_url}")


def display_config_table(config_dict: dict) -> None:
    """Display configuration in table format."""
    click.echo("\nCurrent Configuration:")
    click.echo("-" * 50)
    
    for section_name, section in config_dict.items():
        click.echo(f"\n[{section_name}]")
        for key, value in section.items():
            click.echo(f"  {key}: {value}")


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
