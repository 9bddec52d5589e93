import logging

from labeler.directory import LabelDirectory
from labeler.gateway import LabelGateway
from labeler.manifest import (
    dump_manifest,
    load_manifest,
)
from labeler.reconciler import run_fleet
from labeler.snapshot import build_snapshot
from labeler.utils.github_api import (
    GithubApiConfig,
    GithubLabelApi,
)

INTEGRATION = "github-labeler"


def reconcile(
    directory: LabelDirectory,
    gateway: LabelGateway,
    thread_pool_size: int = 10,
) -> bool:
    """
    Bring the repositories in line with `directory`.
    Returns False if they already were and nothing had to be done.
    """
    directory.check()
    # unreadable repositories are still handed to run_fleet, which reports
    # them per repository
    current_state = build_snapshot(
        directory, gateway, thread_pool_size, skip_unreadable=True
    )
    if current_state == directory:
        logging.info("labels are already in sync with the labels manifest")
        return False

    run_fleet(directory, gateway, thread_pool_size)
    return True


def export_labels(
    directory: LabelDirectory,
    gateway: LabelGateway,
    output: str,
    thread_pool_size: int = 10,
) -> LabelDirectory:
    directory.check()
    current_state = build_snapshot(directory, gateway, thread_pool_size)
    logging.info([
        "import_labels",
        output,
        f"{len(current_state.repos)} repos",
        f"{len(current_state.labels)} labels",
    ])
    dump_manifest(current_state, output)
    return current_state


def run(dry_run: bool, manifest_path: str, thread_pool_size: int = 10) -> None:
    directory = load_manifest(manifest_path)
    directory.check()
    with GithubLabelApi(GithubApiConfig.from_env(), dry_run=dry_run) as gateway:
        reconcile(directory, gateway, thread_pool_size)


def import_labels(
    manifest_path: str,
    output: str | None = None,
    thread_pool_size: int = 10,
) -> None:
    """
    Overwrite the labels manifest (or write `output`) with the labels that
    currently exist on the declared repositories. Never mutates labels.
    """
    directory = load_manifest(manifest_path)
    directory.check()
    with GithubLabelApi(GithubApiConfig.from_env(), dry_run=True) as gateway:
        export_labels(directory, gateway, output or manifest_path, thread_pool_size)
