#!/usr/bin/env python3
"""
Application Entry Script.

Main entry point for the habit tracker. All functionality is accessible
through command-line options.

Usage:
    python run.py --help
    python run.py --action server --verbose
    python run.py --action health --debug
    python run.py --action config
    python run.py --action dispatch --token <admin JWT>
    python run.py --action test --test-type unit
"""

import subprocess
import sys
from pathlib import Path

import click
import httpx

# Ensure project root is in path for absolute imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from habit_tracker.backend.core.logging import get_logger, setup_logging


def validate_project_root() -> Path:
    """Validate that we're running from the project root."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


@click.command()
@click.option(
    "--action",
    type=click.Choice(["server", "health", "config", "dispatch", "test", "info"]),
    default="info",
    help="Action to perform.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (INFO level logging).",
)
@click.option(
    "--debug", "-d",
    is_flag=True,
    help="Enable debug output (DEBUG level logging).",
)
@click.option(
    "--host",
    default=None,
    help="Server host (for server action).",
)
@click.option(
    "--port",
    default=None,
    type=int,
    help="Server port (for server action).",
)
@click.option(
    "--reload",
    is_flag=True,
    help="Enable auto-reload (for server action).",
)
@click.option(
    "--token",
    default=None,
    envvar="HABIT_TRACKER_TOKEN",
    help="Admin access token (for dispatch action).",
)
@click.option(
    "--test-type",
    type=click.Choice(["all", "unit", "integration"]),
    default="all",
    help="Test type to run (for test action).",
)
@click.option(
    "--coverage",
    is_flag=True,
    help="Run tests with coverage (for test action).",
)
def main(
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    token: str | None,
    test_type: str,
    coverage: bool,
) -> None:
    """
    Habit Tracker Entry Point.

    Run the application server, check health, view configuration,
    trigger a notification dispatch, or run tests.

    Examples:

        # Start development server
        python run.py --action server --reload --verbose

        # Check application health
        python run.py --action health --debug

        # View loaded configuration
        python run.py --action config

        # Deliver pending notifications now on a running server
        python run.py --action dispatch --token <admin JWT>

        # Run unit tests with coverage
        python run.py --action test --test-type unit --coverage
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    setup_logging(level=log_level, format_type="console")
    logger = get_logger(__name__)

    logger.debug("Starting application", extra={"action": action, "log_level": log_level})

    if action == "server":
        run_server(logger, host, port, reload)
    elif action == "health":
        check_health(logger)
    elif action == "config":
        show_config(logger)
    elif action == "dispatch":
        trigger_dispatch(logger, token)
    elif action == "test":
        run_tests(logger, test_type, coverage)
    elif action == "info":
        show_info(logger)


def run_server(logger, host: str | None, port: int | None, reload: bool) -> None:
    """Start the FastAPI server (API, dispatcher and Telegram bot in one process)."""
    from habit_tracker.backend.core.config import get_app_config

    server = get_app_config().application.server
    server_host = host or server.host
    server_port = port or server.port

    logger.info(
        "Starting server",
        extra={"host": server_host, "port": server_port, "reload": reload},
    )

    cmd = [
        sys.executable, "-m", "uvicorn",
        "habit_tracker.backend.main:app",
        "--host", server_host,
        "--port", str(server_port),
    ]

    if reload:
        cmd.append("--reload")

    click.echo(f"Starting server at http://{server_host}:{server_port}")
    click.echo("Press Ctrl+C to stop\n")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server failed to start", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


def check_health(logger) -> None:
    """Check application health by testing imports and configuration."""
    click.echo("Checking application health...\n")

    checks = []

    try:
        from habit_tracker.backend.core.config import get_app_config

        app_config = get_app_config()
        checks.append(("YAML configuration", True, f"App: {app_config.application.name}"))
        logger.debug("Configuration loaded", extra={"app_name": app_config.application.name})
    except Exception as e:
        checks.append(("YAML configuration", False, str(e)))
        logger.error("Configuration failed", extra={"error": str(e)})

    try:
        from habit_tracker.backend.core.config import get_settings

        get_settings()
        checks.append(("Secrets (config/.env)", True, None))
    except Exception as e:
        checks.append(("Secrets (config/.env)", False, str(e)))
        logger.warning("Secrets not configured", extra={"error": str(e)})

    try:
        from habit_tracker.backend.storage.provider import create_storage_provider

        create_storage_provider()
        checks.append(("Storage provider", True, None))
    except Exception as e:
        checks.append(("Storage provider", False, str(e)))
        logger.error("Storage provider failed", extra={"error": str(e)})

    try:
        from habit_tracker.backend.main import create_app

        app = create_app()
        checks.append(("FastAPI application", True, f"Title: {app.title}"))
    except Exception as e:
        checks.append(("FastAPI application", False, str(e)))
        logger.error("FastAPI app failed", extra={"error": str(e)})

    click.echo("Health Check Results:")
    click.echo("-" * 50)

    all_passed = True
    for name, passed, detail in checks:
        status = click.style("✓ PASS", fg="green") if passed else click.style("✗ FAIL", fg="red")
        detail_str = f" ({detail})" if detail else ""
        click.echo(f"  {status}  {name}{detail_str}")
        if not passed:
            all_passed = False

    click.echo("-" * 50)

    if all_passed:
        click.echo(click.style("\nAll checks passed!", fg="green"))
    else:
        click.echo(click.style("\nSome checks failed. See details above.", fg="yellow"))
        sys.exit(1)


def show_config(logger) -> None:
    """Display loaded configuration."""
    click.echo("Application Configuration:\n")

    try:
        from habit_tracker.backend.core.config import get_app_config

        app_config = get_app_config()
        sections = {
            "Application": app_config.application,
            "Database": app_config.database,
            "Logging": app_config.logging,
            "Security": app_config.security,
            "Notifications": app_config.notifications,
        }
        for title, section in sections.items():
            click.echo(f"{title} Settings (from YAML):")
            click.echo("-" * 40)
            _echo_mapping(section.model_dump(), indent=2)
            click.echo()

        logger.info("Configuration displayed successfully")

    except Exception as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.echo(click.style(f"Error loading configuration: {e}", fg="red"))
        sys.exit(1)


def _echo_mapping(values: dict, indent: int) -> None:
    pad = " " * indent
    for key, value in values.items():
        if isinstance(value, dict):
            click.echo(f"{pad}{key}:")
            _echo_mapping(value, indent + 2)
        else:
            click.echo(f"{pad}{key}: {value}")


def trigger_dispatch(logger, token: str | None) -> None:
    """Ask the running server to deliver pending notifications now."""
    from habit_tracker.backend.core.config import get_app_config, get_server_base_url

    if not token:
        click.echo(click.style("Error: --token is required for dispatch.", fg="red"), err=True)
        sys.exit(1)

    base_url, timeout = get_server_base_url()
    url = f"{base_url}{get_app_config().application.api_prefix}/admin/dispatcher/run"

    try:
        response = httpx.post(
            url,
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout,
        )
    except httpx.HTTPError as e:
        logger.error("Dispatch request failed", extra={"url": url, "error": str(e)})
        click.echo(click.style(f"Could not reach server: {e}", fg="red"), err=True)
        sys.exit(1)

    body = response.json()
    if response.status_code != 200:
        error = body.get("error") or {}
        click.echo(
            click.style(f"Dispatch failed ({response.status_code}): {error.get('message')}", fg="red"),
            err=True,
        )
        sys.exit(1)

    report = body["data"]
    click.echo(
        f"Delivered: {report['delivered']}  "
        f"Skipped: {report['skipped']}  "
        f"Failed: {report['failed']}"
    )
    if report.get("error"):
        click.echo(click.style(f"Tick error: {report['error']}", fg="yellow"))
    logger.info("Dispatch triggered", extra={"delivered": report["delivered"]})


def run_tests(logger, test_type: str, coverage: bool) -> None:
    """Run the test suite."""
    logger.info("Running tests", extra={"type": test_type, "coverage": coverage})

    cmd = [sys.executable, "-m", "pytest"]

    if test_type == "unit":
        cmd.append("tests/unit")
    elif test_type == "integration":
        cmd.append("tests/integration")
    else:
        cmd.append("tests/")

    cmd.append("-v")

    if coverage:
        cmd.extend(["--cov=habit_tracker", "--cov-report=term-missing"])

    click.echo(f"Running: {' '.join(cmd)}\n")

    try:
        result = subprocess.run(cmd)
        sys.exit(result.returncode)
    except FileNotFoundError:
        logger.error("pytest not found. Install with: pip install -e '.[test]'")
        sys.exit(1)


def show_info(logger) -> None:
    """Display application information."""
    click.echo("Habit Tracker")
    click.echo("=" * 40)

    try:
        from habit_tracker.backend.core.config import get_app_config

        application = get_app_config().application
        click.echo(f"Name: {application.name}")
        click.echo(f"Version: {application.version}")
        click.echo(f"Description: {application.description}")
    except Exception:
        click.echo("Name: Habit Tracker")

    click.echo()
    click.echo("Available Actions:")
    click.echo("  --action server    Start the server")
    click.echo("  --action health    Check application health")
    click.echo("  --action config    Display configuration")
    click.echo("  --action dispatch  Deliver pending notifications now")
    click.echo("  --action test      Run test suite")
    click.echo("  --action info      Show this information")
    click.echo()
    click.echo("Logging Options:")
    click.echo("  --verbose, -v      Enable INFO level logging")
    click.echo("  --debug, -d        Enable DEBUG level logging")

    logger.debug("Info displayed")


if __name__ == "__main__":
    main()
