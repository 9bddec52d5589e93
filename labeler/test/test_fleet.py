from collections.abc import Callable
from typing import Any
from unittest.mock import create_autospec

import pytest

from labeler.directory import LabelDirectory
from labeler.reconciler import run_fleet
from labeler.test.fixtures import (
    InMemoryGateway,
    remote_label,
)
from labeler.utils.exceptions import (
    ConfigurationError,
    FleetReconcileError,
    RemoteError,
)
from labeler.utils.github_api import GithubLabelApi

DirectoryBuilder = Callable[[dict[str, Any]], LabelDirectory]
GatewayBuilder = Callable[..., InMemoryGateway]


@pytest.fixture
def fleet(directory_builder: DirectoryBuilder) -> LabelDirectory:
    return directory_builder({
        "labels": [
            {"name": "bug", "color": "f00"},
            {"name": "wip", "color": "fff"},
        ],
        "repos": [
            {"name": "o/a", "labels": ["bug"]},
            {"name": "o/b", "labels": ["bug", "wip"]},
            {"name": "o/c", "labels": ["wip"]},
        ],
    })


def test_no_repos_is_a_configuration_error(
    directory_builder: DirectoryBuilder,
) -> None:
    directory = directory_builder({"labels": [{"name": "bug", "color": "f00"}]})
    gateway = create_autospec(spec=GithubLabelApi)

    with pytest.raises(ConfigurationError):
        run_fleet(directory, gateway)

    assert gateway.mock_calls == []


def test_reconciles_every_repo(
    fleet: LabelDirectory, gateway_builder: GatewayBuilder
) -> None:
    gateway = gateway_builder(
        repos={
            "o/a": [],
            "o/b": [remote_label("bug", color="f00"), remote_label("old")],
            "o/c": [remote_label("wip", color="fff")],
        }
    )

    run_fleet(fleet, gateway, thread_pool_size=3)

    assert [c[:4] for c in gateway.mutating_calls("o/a")] == [
        ("create", "o", "a", "bug")
    ]
    assert [c[:4] for c in gateway.mutating_calls("o/b")] == [
        ("create", "o", "b", "wip"),
        ("delete", "o", "b", "old"),
    ]
    assert gateway.mutating_calls("o/c") == []


def test_failures_do_not_stop_other_repos(
    fleet: LabelDirectory, gateway_builder: GatewayBuilder
) -> None:
    error_a = RemoteError("[o/a] failed to list labels: boom")
    error_c = RemoteError("[o/c] failed to list labels: bang")
    gateway = gateway_builder(
        repos={"o/a": [], "o/b": [remote_label("old")], "o/c": []},
        fail_on={("list", "o/a"): error_a, ("list", "o/c"): error_c},
    )

    with pytest.raises(FleetReconcileError) as e:
        run_fleet(fleet, gateway, thread_pool_size=1)

    # o/b was reconciled completely
    assert [c[:4] for c in gateway.mutating_calls("o/b")] == [
        ("create", "o", "b", "bug"),
        ("create", "o", "b", "wip"),
        ("delete", "o", "b", "old"),
    ]
    assert e.value.errors == [("o/a", error_a), ("o/c", error_c)]
    assert e.value.first is error_a
    assert "o/a" in str(e.value)
    assert "boom" in str(e.value)
    assert "1 more" in str(e.value)


def test_undefined_label_fails_before_remote_calls(
    directory_builder: DirectoryBuilder,
) -> None:
    directory = directory_builder({
        "labels": [{"name": "bug", "color": "f00"}],
        "repos": [{"name": "o/r", "labels": ["wip"]}],
    })
    gateway = create_autospec(spec=GithubLabelApi)

    with pytest.raises(ConfigurationError):
        run_fleet(directory, gateway)

    assert gateway.mock_calls == []
