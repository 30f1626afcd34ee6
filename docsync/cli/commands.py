"""CLI for the AI Documentation Synchronizer.

Provides the Click command ``docsync`` which compares a codebase with
its documentation and prints (and optionally saves) a rewritten
document.
"""

import logging
import sys
from typing import Optional

import click
import yaml
from dotenv import find_dotenv, load_dotenv

from docsync import __version__
from docsync.generators.llm_client import LLMClient
from docsync.pipeline.orchestrator import Synchronizer
from docsync.pipeline.structure import SyncOutcome, SyncStatus
from docsync.utils.config import (
    AppConfig,
    load_config,
    resolve_models,
    resolve_provider,
)
from docsync.utils.logging import setup_logging

logger = logging.getLogger(__name__)

_RULE = "================================================"
_FINISHED_BANNER = "\nAI Documentation Synchronizer finished."


def _configure(config_path: Optional[str]) -> AppConfig:
    """Load the config file and set up logging from it.

    Raises:
        click.ClickException: If the config is invalid or the log file
            cannot be opened.
    """
    try:
        config = load_config(config_path)
    except (ValueError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e
    try:
        setup_logging(
            level=config.logging.level,
            log_format=config.logging.format,
            log_file=config.logging.file,
        )
    except OSError as e:
        raise click.ClickException(
            f"Cannot open log file {config.logging.file}: {e}"
        ) from e
    return config


def _report(outcome: SyncOutcome, output_dir: Optional[str]) -> None:
    if outcome.status is SyncStatus.UPDATED:
        click.echo(f"\n{outcome.message}")
        click.echo(_RULE)
        click.echo(outcome.updated_content)
        click.echo(_RULE)
        if outcome.written_path:
            click.echo(f"\nUpdated documentation saved to: {outcome.written_path}")
        elif outcome.write_error:
            click.echo(
                f"\nError saving updated documentation to {output_dir}: "
                f"{outcome.write_error}",
                err=True,
            )
        else:
            click.echo("\nTo save the output, provide an --outputDir option.")
    elif outcome.status is SyncStatus.DOC_NOT_FOUND:
        click.echo(f"\n{outcome.message}", err=True)
    else:
        click.echo(f"\n{outcome.message}")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="docsync")
@click.option(
    "--codePath",
    "-c",
    "code_path",
    required=True,
    type=click.Path(exists=True, file_okay=False),
    help="Path to the codebase directory.",
)
@click.option(
    "--docPath",
    "-d",
    "doc_path",
    required=True,
    type=click.Path(exists=True, file_okay=False),
    help="Path to the documentation directory.",
)
@click.option(
    "--outputDir",
    "-o",
    "output_dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory to save updated documentation files (optional).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to a YAML config file.",
)
def sync(
    code_path: str,
    doc_path: str,
    output_dir: Optional[str],
    config_path: Optional[str],
) -> None:
    """AI Documentation Synchronizer: align docs with the code they describe.

    Analyzes the code and documentation with an LLM, compares them and
    proposes an updated version of the documentation.
    """
    load_dotenv(find_dotenv(usecwd=True))

    failed = False
    try:
        config = _configure(config_path)

        click.echo("AI Documentation Synchronizer starting...")
        click.echo(f"Codebase path: {code_path}")
        click.echo(f"Documentation path: {doc_path}")
        if output_dir:
            click.echo(f"Output directory for updates: {output_dir}")
        click.echo("---")

        provider = resolve_provider(config.api)
        llm = LLMClient(settings=provider)
        synchronizer = Synchronizer(llm, resolve_models(provider), config=config)
        outcome = synchronizer.run(code_path, doc_path, output_dir)
        _report(outcome, output_dir)

        usage = llm.total_usage
        if usage.total_tokens:
            logger.info(
                "Token usage: %d (input: %d, output: %d)",
                usage.total_tokens,
                usage.input_tokens,
                usage.output_tokens,
            )
    except click.ClickException:
        raise
    except Exception:
        logger.exception("An error occurred during the synchronization process")
        failed = True
    finally:
        click.echo(_FINISHED_BANNER)

    if failed:
        sys.exit(1)
