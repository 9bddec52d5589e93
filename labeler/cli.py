import logging
import os
import sys
import traceback
from collections.abc import Callable
from typing import Any

import click
import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

from labeler.status import ExitCodes
from labeler.utils.environment import init_env
from labeler.utils.exceptions import (
    ConfigurationError,
    LabelerError,
)

# Enable Sentry
if os.getenv("SENTRY_DSN"):
    match os.environ.get("SENTRY_EVENT_LEVEL", "CRITICAL").upper():
        case "CRITICAL":
            sentry_event_level = logging.CRITICAL
        case "ERROR":
            sentry_event_level = logging.ERROR
        case _:
            raise ValueError(
                "Invalid value for SENTRY_EVENT_LEVEL. Must be CRITICAL or ERROR."
            )

    sentry_sdk.init(
        os.environ["SENTRY_DSN"],
        integrations=[
            LoggingIntegration(event_level=sentry_event_level),
        ],
    )


def config_file(function: Callable) -> Callable:
    help_msg = "Path to settings file in toml format."
    function = click.option(
        "--config",
        "configfile",
        default=lambda: os.environ.get("LABELER_CONFIG"),
        help=help_msg,
    )(function)
    return function


def manifest_file(function: Callable) -> Callable:
    help_msg = "Path to the YAML file the labels and repos are declared in."
    function = click.option(
        "--manifest",
        "-c",
        "manifest",
        default="labels.yaml",
        show_default=True,
        help=help_msg,
    )(function)
    return function


def log_level(function: Callable) -> Callable:
    function = click.option(
        "--log-level",
        help="log-level of the command. Defaults to INFO.",
        type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    )(function)
    return function


def dry_run(function: Callable) -> Callable:
    help_msg = (
        "If `true`, it will only print the planned actions "
        "that would be performed, without executing them."
    )

    function = click.option("--dry-run/--no-dry-run", default=False, help=help_msg)(
        function
    )
    return function


def threaded(default: int = 10) -> Callable:
    def f(function: Callable) -> Callable:
        opt = "--thread-pool-size"
        msg = "number of repositories to reconcile in parallel."
        function = click.option(opt, type=int, default=default, help=msg)(function)
        return function

    return f


def run_integration(
    func: Callable,
    *args: Any,
    **kwargs: Any,
) -> None:
    try:
        func(*args, **kwargs)
    except ConfigurationError as e:
        sys.stderr.write(f"[ERROR] {e}\n")
        sys.exit(ExitCodes.CONFIGURATION_ERROR)
    except LabelerError as e:
        sys.stderr.write(f"[ERROR] {e}\n")
        sys.exit(ExitCodes.ERROR)
    except Exception:
        traceback.print_exc(file=sys.stderr)
        sys.exit(ExitCodes.ERROR)


@click.group()
@config_file
@manifest_file
@dry_run
@log_level
@click.version_option(package_name="github-labeler")
@click.pass_context
def root(
    ctx: click.Context,
    configfile: str | None,
    manifest: str,
    dry_run: bool,
    log_level: str | None,
) -> None:
    ctx.ensure_object(dict)

    init_env(
        log_level=log_level,
        config_file=configfile,
        dry_run=dry_run,
    )

    ctx.obj["dry_run"] = dry_run
    ctx.obj["manifest"] = manifest


@root.command(short_help="Reconciles repository labels with the labels manifest.")
@threaded()
@click.pass_context
def sync(ctx: click.Context, thread_pool_size: int) -> None:
    import labeler.label_sync

    run_integration(
        labeler.label_sync.run,
        dry_run=ctx.obj["dry_run"],
        manifest_path=ctx.obj["manifest"],
        thread_pool_size=thread_pool_size,
    )


@root.command(
    "import",
    short_help="Writes the labels of the declared repos into the labels manifest.",
)
@threaded()
@click.option(
    "--output",
    help="write the manifest to this path instead of overwriting --manifest. "
    "Use '-' for stdout.",
    default=None,
)
@click.pass_context
def import_labels(
    ctx: click.Context, thread_pool_size: int, output: str | None
) -> None:
    import labeler.label_sync

    run_integration(
        labeler.label_sync.import_labels,
        manifest_path=ctx.obj["manifest"],
        output=output,
        thread_pool_size=thread_pool_size,
    )
