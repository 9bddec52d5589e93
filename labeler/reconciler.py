import logging

from labeler.directory import (
    LabelDef,
    LabelDirectory,
    RepoAssignment,
)
from labeler.gateway import LabelGateway
from labeler.utils import threaded
from labeler.utils.exceptions import (
    FleetReconcileError,
    LabelNotFoundError,
)


def _rename_label(
    owner: str,
    repo: str,
    previous_name: str,
    label: LabelDef,
    gateway: LabelGateway,
) -> bool:
    """
    Rename `previous_name` into `label`. Returns False if there is no label
    named `previous_name` (anymore), e.g. because it has been renamed by an
    earlier run.
    """
    try:
        gateway.edit_label(owner, repo, previous_name, label)
    except LabelNotFoundError:
        logging.debug(
            f"[{owner}/{repo}] label '{previous_name}' to rename into "
            f"'{label.name}' does not exist"
        )
        return False
    return True


def _apply_label(
    owner: str, repo: str, label: LabelDef, gateway: LabelGateway
) -> bool:
    """
    Create or update a single declared label.
    Returns True if the label was renamed from its previous name.
    """
    # a missing label under the new name does not prove that the label does
    # not exist under its previous name, so the rename is always attempted
    if label.previous_name and _rename_label(
        owner, repo, label.previous_name, label, gateway
    ):
        return True

    try:
        current = gateway.get_label(owner, repo, label.name)
    except LabelNotFoundError:
        gateway.create_label(owner, repo, label)
        return False

    if label.differs_from(current):
        gateway.edit_label(owner, repo, label.name, label)
    return False


def _delete_undeclared_labels(
    owner: str,
    repo: str,
    directory: LabelDirectory,
    gateway: LabelGateway,
    renamed: set[str],
) -> None:
    slug = f"{owner}/{repo}"
    for current in gateway.list_labels(owner, repo):
        if directory.repo_has_label(slug, current.name):
            continue
        # renamed labels are gone after a live run, but still listed in
        # dry-run mode
        if current.name in renamed:
            continue
        gateway.delete_label(owner, repo, current.name)


def reconcile_repo(
    assignment: RepoAssignment,
    directory: LabelDirectory,
    gateway: LabelGateway,
) -> None:
    """
    Apply the declared labels of one repository, then delete every label
    the repository does not declare. Calls are sequential; the first
    failure aborts the repository and nothing is rolled back.
    """
    owner, repo = assignment.repo.owner, assignment.repo.name
    renamed: set[str] = set()
    for label_name in assignment.labels:
        label = directory.lookup_label(label_name)
        if _apply_label(owner, repo, label, gateway) and label.previous_name:
            renamed.add(label.previous_name)
    _delete_undeclared_labels(owner, repo, directory, gateway, renamed)


def run_fleet(
    directory: LabelDirectory,
    gateway: LabelGateway,
    thread_pool_size: int = 10,
) -> None:
    """
    Reconcile all declared repositories concurrently. Every repository is
    processed to completion even if others fail; failures are raised
    together as a FleetReconcileError afterwards.
    """
    directory.check()

    results = threaded.run(
        reconcile_repo,
        directory.repos,
        thread_pool_size,
        return_exceptions=True,
        directory=directory,
        gateway=gateway,
    )

    errors: list[tuple[str, Exception]] = []
    for assignment, result in zip(directory.repos, results, strict=True):
        if isinstance(result, Exception):
            logging.error(f"[{assignment.repo.slug}] {result}")
            errors.append((assignment.repo.slug, result))

    if errors:
        raise FleetReconcileError(errors)
