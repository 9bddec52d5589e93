import os
from collections.abc import Iterable
from typing import Any

from labeler.directory import (
    LabelDef,
    RemoteLabel,
)
from labeler.utils.exceptions import (
    LabelNotFoundError,
    RemoteError,
)


class Fixtures:
    def __init__(self, base_path: str):
        self.base_path = base_path

    def path(self, fixture: str) -> str:
        return os.path.join(
            os.path.dirname(__file__), "fixtures", self.base_path, fixture
        )

    def get(self, fixture: str) -> str:
        with open(self.path(fixture), encoding="utf-8") as f:
            return f.read().strip()


class InMemoryGateway:
    """
    LabelGateway keeping the labels of every repository in memory.

    Every mutating call is recorded in `calls` as a tuple, e.g.
    ("create", "o", "r", "bug", LabelDef(...)), in dry-run mode as well.
    `fail_on` maps (operation, slug) to the exception to raise.
    """

    def __init__(
        self,
        repos: dict[str, Iterable[RemoteLabel]] | None = None,
        dry_run: bool = False,
        fail_on: dict[tuple[str, str], Exception] | None = None,
    ) -> None:
        self.dry_run = dry_run
        self.labels: dict[str, dict[str, RemoteLabel]] = {
            slug: {label.name: label for label in labels}
            for slug, labels in (repos or {}).items()
        }
        self.fail_on = fail_on or {}
        self.calls: list[tuple[Any, ...]] = []
        self.reads: list[tuple[str, ...]] = []

    def _repo_labels(self, op: str, owner: str, repo: str) -> dict[str, RemoteLabel]:
        slug = f"{owner}/{repo}"
        if (op, slug) in self.fail_on:
            raise self.fail_on[(op, slug)]
        return self.labels.setdefault(slug, {})

    def mutating_calls(self, slug: str | None = None) -> list[tuple[Any, ...]]:
        if slug is None:
            return list(self.calls)
        owner, repo = slug.split("/")
        return [c for c in self.calls if c[1] == owner and c[2] == repo]

    def get_label(self, owner: str, repo: str, name: str) -> RemoteLabel:
        labels = self._repo_labels("get", owner, repo)
        self.reads.append(("get", f"{owner}/{repo}", name))
        if name not in labels:
            raise LabelNotFoundError(f"[{owner}/{repo}] label '{name}' not found")
        return labels[name]

    def create_label(self, owner: str, repo: str, label: LabelDef) -> None:
        labels = self._repo_labels("create", owner, repo)
        self.calls.append(("create", owner, repo, label.name, label))
        if self.dry_run:
            return
        if label.name in labels:
            raise RemoteError(f"[{owner}/{repo}] label '{label.name}' already exists")
        labels[label.name] = _remote(label)

    def edit_label(
        self, owner: str, repo: str, target_name: str, label: LabelDef
    ) -> None:
        labels = self._repo_labels("edit", owner, repo)
        if target_name not in labels:
            raise LabelNotFoundError(
                f"[{owner}/{repo}] label '{target_name}' not found"
            )
        self.calls.append(("edit", owner, repo, target_name, label))
        if self.dry_run:
            return
        del labels[target_name]
        labels[label.name] = _remote(label)

    def list_labels(self, owner: str, repo: str) -> list[RemoteLabel]:
        labels = self._repo_labels("list", owner, repo)
        self.reads.append(("list", f"{owner}/{repo}"))
        return list(labels.values())

    def delete_label(self, owner: str, repo: str, name: str) -> None:
        labels = self._repo_labels("delete", owner, repo)
        self.calls.append(("delete", owner, repo, name))
        if self.dry_run:
            return
        labels.pop(name)


def _remote(label: LabelDef) -> RemoteLabel:
    return RemoteLabel(
        name=label.name, description=label.description, color=label.color
    )


def remote_label(name: str, color: str = "ffffff", description: str = "") -> RemoteLabel:
    return RemoteLabel(name=name, color=color, description=description)


def label_def(
    name: str,
    color: str = "ffffff",
    description: str = "",
    previous_name: str | None = None,
) -> LabelDef:
    return LabelDef(
        name=name,
        color=color,
        description=description,
        previous_name=previous_name,
    )
