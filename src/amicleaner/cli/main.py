"""Main CLI entry point using Typer."""

import logging
import sys
from typing import Optional

import typer
from rich.console import Console

from ..aws.credentials import CredentialValidationError, create_session, validate_credentials
from ..aws.ec2 import Boto3Ec2Backend
from ..cleanup.cleaner import AmiCleaner
from ..cleanup.reporter import DeletionReporter
from ..errors import AmiCleanerError, BatchDeletionFailed
from ..utils.logging import setup_logging
from .config import Config

logger = logging.getLogger(__name__)

# Create Typer app
app = typer.Typer(
    name="amicleaner",
    help="AMI Cleaner - remove AMIs (and their EBS snapshots) not used by any EC2 instance",
    add_completion=False,
)

# Create Rich console for output
console = Console()

# Global config
config: Optional[Config] = None


@app.callback()
def main(
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="AWS profile name"),
    region: Optional[str] = typer.Option(None, "--region", "-r", help="AWS region"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output except errors"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
):
    """AMI Cleaner - remove AMIs not used by any EC2 instance."""
    global config

    # Load configuration
    try:
        config = Config.load()
    except ValueError as e:
        console.print(f"✗ Invalid configuration: {e}", style="bold red")
        raise typer.Exit(code=1)

    # Override with CLI options
    if profile:
        config.aws_profile = profile
    if region:
        config.region = region

    # Setup logging
    log_level = "ERROR" if quiet else ("DEBUG" if verbose else config.log_level)
    setup_logging(level=log_level, verbose=verbose)

    # Disable colors if requested
    if no_color:
        console.no_color = True


@app.command()
def version():
    """Show version information."""
    import boto3

    from .. import __version__

    console.print(f"ami-cleaner version {__version__}")
    console.print(f"Python {sys.version.split()[0]}")
    console.print(f"boto3 {boto3.__version__}")


@app.command()
def delete(
    dryrun: Optional[bool] = typer.Option(
        None,
        "--dryrun/--no-dryrun",
        "-d",
        help="Run through the deletion without deleting any AMIs or snapshots (default: from config, else off)",
    ),
):
    """Delete all owned AMIs, and their snapshots, not used by any EC2 instance.

    Examples:
        # See what would be deleted
        amicleaner delete --dryrun

        # Delete for real using a named profile
        amicleaner --profile prod delete
    """
    dry_run = config.dry_run if dryrun is None else dryrun
    reporter = DeletionReporter()

    try:
        session = create_session(profile_name=config.aws_profile, region_name=config.region)
        identity = validate_credentials(session=session)

        backend = Boto3Ec2Backend.create(region_name=config.region, session=session)
        cleaner = AmiCleaner(backend, dry_run=dry_run, max_instance_pages=config.max_instance_pages)

        if dry_run:
            console.print(f"🔍 Dry run for account [bold cyan]{identity['account_id']}[/bold cyan]\n")

        unused = cleaner.find_unused_amis()
        if unused:
            console.print(reporter.format_unused_images(unused))

        result = cleaner.delete_images(unused)

        if not result.deleted and not result.failures:
            console.print("nothing to delete")
            return

        console.print(reporter.format_terminal(result))

        summary = reporter.generate_summary(result)
        console.print(
            f"  Images: {summary['images_succeeded']} ok, {summary['images_failed']} failed  "
            f"Snapshots: {summary['snapshots_succeeded']} ok, {summary['snapshots_failed']} failed\n"
        )

        error = result.error_or_none()
        if error is not None:
            raise error

        verb = "Would delete" if dry_run else "Successfully deleted"
        console.print(f"✓ {verb}:\n  " + "\n  ".join(result.deleted), style="bold green")

    except BatchDeletionFailed as e:
        console.print("✗ Failed to delete:\n  " + "\n  ".join(e.failed_ids), style="bold red")
        raise typer.Exit(code=1)
    except CredentialValidationError as e:
        console.print(f"✗ Authentication failed: {e}", style="bold red")
        raise typer.Exit(code=1)
    except AmiCleanerError as e:
        console.print(f"✗ {e}", style="bold red")
        raise typer.Exit(code=1)
    except Exception as e:
        console.print(f"✗ Unexpected error: {e}", style="bold red")
        logger.exception("Error in delete command")
        raise typer.Exit(code=2)


def cli_main():
    """Entry point for console script."""
    app()


if __name__ == "__main__":
    cli_main()
