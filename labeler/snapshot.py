import logging

from labeler.directory import (
    LabelDef,
    LabelDirectory,
    RemoteLabel,
    RepoAssignment,
)
from labeler.gateway import LabelGateway
from labeler.utils import threaded
from labeler.utils.exceptions import LabelerError


def _fetch_repo_labels(
    assignment: RepoAssignment, gateway: LabelGateway
) -> list[RemoteLabel]:
    return gateway.list_labels(assignment.repo.owner, assignment.repo.name)


def build_snapshot(
    directory: LabelDirectory,
    gateway: LabelGateway,
    thread_pool_size: int = 10,
    skip_unreadable: bool = False,
) -> LabelDirectory:
    """
    Read back the labels of every repository in `directory` and return
    them as a LabelDirectory, i.e. in the shape of a labels manifest.

    A label name found on several repositories is added to the catalog
    once, with the definition of the first repository it was found on.

    The first read error in declaration order is raised as is. With
    `skip_unreadable` repositories that can not be read are left out of
    the snapshot instead, so it never equals the declared directory.
    """
    current_labels_per_repo = threaded.run(
        _fetch_repo_labels,
        directory.repos,
        thread_pool_size,
        return_exceptions=True,
        gateway=gateway,
    )

    labels: dict[str, LabelDef] = {}
    repos: list[RepoAssignment] = []
    for assignment, current_labels in zip(
        directory.repos, current_labels_per_repo, strict=True
    ):
        if isinstance(current_labels, Exception):
            if not skip_unreadable or not isinstance(current_labels, LabelerError):
                raise current_labels
            logging.warning(
                f"[{assignment.repo.slug}] skipping unreadable repository: "
                f"{current_labels}"
            )
            continue
        repos.append(
            RepoAssignment(
                repo=assignment.repo,
                labels=tuple(label.name for label in current_labels),
            )
        )
        for label in current_labels:
            labels.setdefault(label.name, LabelDef.from_remote(label))

    return LabelDirectory(labels=tuple(labels.values()), repos=tuple(repos))
