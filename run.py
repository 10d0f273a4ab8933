#!/usr/bin/env python3
"""
Notekeeper command line.

    python run.py --action server --reload -v   start uvicorn
    python run.py --action config               print the loaded YAML settings
    python run.py --action token --user-id 1    print a bearer token for user 1
    python run.py                               print app info (default)
"""

import subprocess
import sys
from pathlib import Path

import click

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from notekeeper.backend.core.logging import get_logger, setup_logging

ACTIONS = {
    "server": "Start the development server",
    "config": "Display configuration",
    "token": "Issue an access token (--user-id N)",
    "info": "Show this information",
}


def validate_project_root() -> Path:
    """Exit with status 1 unless run.py sits next to the .project_root marker."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


@click.command()
@click.option("--action", type=click.Choice(list(ACTIONS)), default="info", help="Action to perform.")
@click.option("--verbose", "-v", is_flag=True, help="INFO level logging.")
@click.option("--debug", "-d", is_flag=True, help="DEBUG level logging.")
@click.option("--host", default=None, help="Bind address (server).")
@click.option("--port", default=None, type=int, help="Port (server).")
@click.option("--reload", is_flag=True, help="Restart on code changes (server).")
@click.option("--user-id", default=None, type=int, help="Token subject (token).")
def main(
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    user_id: int | None,
) -> None:
    """Run the notes server or one of its maintenance actions."""
    validate_project_root()

    log_level = "DEBUG" if debug else "INFO" if verbose else "WARNING"
    setup_logging(level=log_level, format_type="console")
    logger = get_logger(__name__)
    logger.debug("Running action", extra={"action": action, "log_level": log_level})

    if action == "server":
        run_server(logger, host, port, reload)
    elif action == "config":
        show_config(logger)
    elif action == "token":
        issue_token(logger, user_id)
    else:
        show_info(logger)


def run_server(logger, host: str | None, port: int | None, reload: bool) -> None:
    """Run uvicorn in a child process; host and port default to application.yaml."""
    from notekeeper.backend.core.config import get_app_config

    server = get_app_config().application.server
    host = host or server.host
    port = port or server.port

    cmd = [
        sys.executable, "-m", "uvicorn", "notekeeper.backend.main:app",
        "--host", host,
        "--port", str(port),
    ]
    if reload:
        cmd.append("--reload")

    logger.info("Starting server", extra={"host": host, "port": port, "reload": reload})
    click.echo(f"Serving on http://{host}:{port} (Ctrl+C to stop)")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server exited with an error", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


def show_config(logger) -> None:
    from notekeeper.backend.core.config import get_app_config

    try:
        app_config = get_app_config()
    except (FileNotFoundError, ValueError) as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.echo(click.style(f"Error loading configuration: {e}", fg="red"))
        sys.exit(1)

    sections = {
        "Application Settings": app_config.application,
        "Database Settings": app_config.database,
        "Logging Settings": app_config.logging,
        "Feature Flags": app_config.features,
        "Security Settings": app_config.security,
    }
    for title, section in sections.items():
        click.echo(title)
        click.echo("-" * len(title))
        _echo_mapping(section.model_dump())
        click.echo()


def _echo_mapping(values: dict, indent: int = 2) -> None:
    pad = " " * indent
    for key, value in values.items():
        if isinstance(value, dict):
            click.echo(f"{pad}{key}:")
            _echo_mapping(value, indent + 2)
        else:
            click.echo(f"{pad}{key}: {value}")


def issue_token(logger, user_id: int | None) -> None:
    """Print a bearer token for ``user_id``, signed with JWT_SECRET."""
    if user_id is None:
        click.echo(click.style("Error: --user-id is required for the token action.", fg="red"))
        sys.exit(2)

    from notekeeper.backend.core.security import create_user_token

    token = create_user_token(user_id)
    logger.info("Access token issued", extra={"user_id": user_id})
    click.echo(token)


def show_info(logger) -> None:
    from notekeeper.backend.core.config import get_app_config

    click.echo("Notekeeper")
    click.echo("=" * 10)
    try:
        app_settings = get_app_config().application
    except (FileNotFoundError, ValueError) as e:
        logger.warning("Configuration not available", extra={"error": str(e)})
        click.echo("Configuration not available")
    else:
        click.echo(f"Name: {app_settings.name}")
        click.echo(f"Version: {app_settings.version}")
        click.echo(f"Environment: {app_settings.environment}")

    click.echo()
    click.echo("Available Actions:")
    for name, summary in ACTIONS.items():
        click.echo(f"  --action {name:<8} {summary}")


if __name__ == "__main__":
    main()
