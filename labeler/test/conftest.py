from collections.abc import Callable, Iterable, Mapping
from typing import Any

import pytest

from labeler.directory import LabelDirectory, RemoteLabel
from labeler.test.fixtures import InMemoryGateway
from labeler.utils import config


@pytest.fixture
def directory_builder() -> Callable[[Mapping[str, Any]], LabelDirectory]:
    """
    Example input data:
    {
        "labels": [
            {"name": "bug", "color": "f00"},
        ],
        "repos": [
            {"name": "o/r", "labels": ["bug"]},
        ],
    }
    """

    def builder(data: Mapping[str, Any]) -> LabelDirectory:
        return LabelDirectory.from_manifest(data)

    return builder


@pytest.fixture
def gateway_builder() -> Callable[..., InMemoryGateway]:
    def builder(
        repos: dict[str, Iterable[RemoteLabel]] | None = None,
        dry_run: bool = False,
        fail_on: dict[tuple[str, str], Exception] | None = None,
    ) -> InMemoryGateway:
        return InMemoryGateway(repos=repos, dry_run=dry_run, fail_on=fail_on)

    return builder


@pytest.fixture(autouse=True)
def reset_config() -> Iterable[None]:
    config.init(None)
    yield
    config.init(None)
