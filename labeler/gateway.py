from typing import Protocol

from labeler.directory import (
    LabelDef,
    RemoteLabel,
)


class LabelGateway(Protocol):
    """
    Label operations on a single repository of the remote issue tracker.

    Mutating operations may be no-ops when the gateway runs in dry-run
    mode, reads always reach the remote service.
    """

    def get_label(self, owner: str, repo: str, name: str) -> RemoteLabel:
        """Raises LabelNotFoundError if the label does not exist."""

    def create_label(self, owner: str, repo: str, label: LabelDef) -> None: ...

    def edit_label(
        self, owner: str, repo: str, target_name: str, label: LabelDef
    ) -> None:
        """
        Update the label currently named `target_name` with the name,
        description and color of `label`. Raises LabelNotFoundError if
        `target_name` does not exist.
        """

    def list_labels(self, owner: str, repo: str) -> list[RemoteLabel]: ...

    def delete_label(self, owner: str, repo: str, name: str) -> None: ...
