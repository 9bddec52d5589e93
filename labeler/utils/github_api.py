from __future__ import annotations

import logging
import os
from types import TracebackType

from github import (
    Auth,
    Github,
    GithubException,
    UnknownObjectException,
)
from github.Label import Label
from github.Repository import Repository
from pydantic import BaseModel, ConfigDict
from requests.exceptions import RequestException

from labeler.directory import (
    LabelDef,
    RemoteLabel,
)
from labeler.utils import config
from labeler.utils.exceptions import (
    ConfigurationError,
    LabelNotFoundError,
    RemoteError,
)

DEFAULT_GH_BASE_URL = "https://api.github.com"

GITHUB_TOKEN_SECRET = {"path": "github", "field": "token"}
GITHUB_BASE_URL_SECRET = {"path": "github", "field": "base_url"}


class GithubApiConfig(BaseModel):
    """Immutable connection settings for GithubLabelApi."""

    model_config = ConfigDict(frozen=True)

    token: str
    base_url: str = DEFAULT_GH_BASE_URL
    timeout: int = 30
    per_page: int = 100

    @classmethod
    def from_env(cls) -> GithubApiConfig:
        token = os.environ.get("GITHUB_TOKEN") or _read_setting(GITHUB_TOKEN_SECRET)
        if not token:
            raise ConfigurationError("GITHUB_TOKEN is missing")
        base_url = (
            os.environ.get("GITHUB_API")
            or _read_setting(GITHUB_BASE_URL_SECRET)
            or DEFAULT_GH_BASE_URL
        )
        return cls(token=token, base_url=base_url)


def _read_setting(secret: dict[str, str]) -> str | None:
    try:
        return config.read(secret)
    except config.SecretNotFound:
        return None


def _remote_error(action: str, slug: str, name: str, e: Exception) -> RemoteError:
    return RemoteError(f"[{slug}] failed to {action} label '{name}': {e}")


class GithubLabelApi:
    """
    Label gateway for GitHub repositories.

    In dry-run mode create, edit and delete are logged but not sent,
    reads are always sent so the planned operations are the same as
    in a live run. One instance is shared by all threads of a run.

    :param cfg: connection settings
    :param dry_run: skip mutating calls
    :param github: prebuilt client, mostly for tests
    """

    def __init__(
        self,
        cfg: GithubApiConfig,
        dry_run: bool,
        github: Github | None = None,
    ):
        self._dry_run = dry_run
        # no retries, a failed call aborts the repository
        self._github = github or Github(
            auth=Auth.Token(cfg.token),
            base_url=cfg.base_url,
            timeout=cfg.timeout,
            per_page=cfg.per_page,
            retry=None,
        )

    def __enter__(self) -> GithubLabelApi:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.cleanup()

    def cleanup(self) -> None:
        self._github.close()

    @property
    def dry_run(self) -> bool:
        return self._dry_run

    def _repo(self, owner: str, repo: str) -> Repository:
        return self._github.get_repo(f"{owner}/{repo}", lazy=True)

    def _get(self, owner: str, repo: str, name: str) -> Label:
        slug = f"{owner}/{repo}"
        try:
            return self._repo(owner, repo).get_label(name)
        except UnknownObjectException as e:
            raise LabelNotFoundError(f"[{slug}] label '{name}' not found") from e
        except (GithubException, RequestException) as e:
            raise _remote_error("get", slug, name, e) from e

    def get_label(self, owner: str, repo: str, name: str) -> RemoteLabel:
        label = self._get(owner, repo, name)
        return RemoteLabel(
            name=label.name,
            description=label.description,
            color=label.color,
        )

    def create_label(self, owner: str, repo: str, label: LabelDef) -> None:
        slug = f"{owner}/{repo}"
        logging.info(["create_label", slug, label.name])
        if self._dry_run:
            return
        try:
            self._repo(owner, repo).create_label(
                name=label.name,
                color=label.color,
                description=label.description,
            )
        except (GithubException, RequestException) as e:
            raise _remote_error("create", slug, label.name, e) from e

    def edit_label(
        self, owner: str, repo: str, target_name: str, label: LabelDef
    ) -> None:
        slug = f"{owner}/{repo}"
        # the target is read in dry-run too, renames of missing labels
        # must fail the same way in both modes
        current = self._get(owner, repo, target_name)
        if target_name != label.name:
            logging.info(["rename_label", slug, target_name, label.name])
        else:
            logging.info(["edit_label", slug, label.name])
        if self._dry_run:
            return
        try:
            current.edit(
                name=label.name,
                color=label.color,
                description=label.description,
            )
        except (GithubException, RequestException) as e:
            raise _remote_error("edit", slug, target_name, e) from e

    def list_labels(self, owner: str, repo: str) -> list[RemoteLabel]:
        slug = f"{owner}/{repo}"
        try:
            # PaginatedList follows the next page links while iterating
            return [
                RemoteLabel(
                    name=label.name,
                    description=label.description,
                    color=label.color,
                )
                for label in self._repo(owner, repo).get_labels()
            ]
        except (GithubException, RequestException) as e:
            raise RemoteError(f"[{slug}] failed to list labels: {e}") from e

    def delete_label(self, owner: str, repo: str, name: str) -> None:
        slug = f"{owner}/{repo}"
        logging.info(["delete_label", slug, name])
        if self._dry_run:
            return
        try:
            self._repo(owner, repo).get_label(name).delete()
        except (GithubException, RequestException) as e:
            raise _remote_error("delete", slug, name, e) from e
