from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from labeler.utils.exceptions import (
    ConfigurationError,
    LabelNotDefinedError,
)


def normalize_color(color: str) -> str:
    """GitHub stores colors as lower case hex without a leading '#'."""
    return color.strip().lstrip("#").lower()


class RemoteLabel(BaseModel):
    """A label as it exists on one repository."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    color: str

    @field_validator("description", mode="before")
    @classmethod
    def none_description(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("color")
    @classmethod
    def lower_color(cls, v: str) -> str:
        return normalize_color(v)


class LabelDef(BaseModel):
    """
    A declared label. `previous_name` names a label that is renamed into
    this definition instead of creating it fresh.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    color: str
    previous_name: str | None = None

    @field_validator("description", mode="before")
    @classmethod
    def none_description(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("color")
    @classmethod
    def lower_color(cls, v: str) -> str:
        return normalize_color(v)

    @model_validator(mode="after")
    def previous_name_differs(self) -> LabelDef:
        if self.previous_name == self.name:
            raise ValueError(
                f"label {self.name!r} can not be renamed from itself (previous_name)"
            )
        return self

    def differs_from(self, remote: RemoteLabel) -> bool:
        return self.description != remote.description or self.color != remote.color

    @staticmethod
    def from_remote(remote: RemoteLabel) -> LabelDef:
        return LabelDef(
            name=remote.name,
            description=remote.description,
            color=remote.color,
        )


class RepoRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str

    @field_validator("slug")
    @classmethod
    def owner_and_name(cls, v: str) -> str:
        parts = v.split("/")
        if len(parts) != 2 or not all(parts):
            raise ValueError(
                f"repository name {v!r} is invalid, expected '<owner>/<repo>'"
            )
        return v

    @property
    def owner(self) -> str:
        return self.slug.split("/")[0]

    @property
    def name(self) -> str:
        return self.slug.split("/")[1]


class RepoAssignment(BaseModel):
    """The labels a repository is declared to carry, in declaration order."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    repo: RepoRef = Field(alias="name")
    labels: tuple[str, ...] = ()

    @field_validator("repo", mode="before")
    @classmethod
    def repo_from_slug(cls, v: Any) -> Any:
        if isinstance(v, str):
            return {"slug": v}
        return v

    @field_validator("labels", mode="before")
    @classmethod
    def none_labels(cls, v: Any) -> Any:
        return () if v is None else v

    @field_validator("labels")
    @classmethod
    def unique_names(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        duplicates = [name for name, count in Counter(v).items() if count > 1]
        if duplicates:
            raise ValueError(
                f"repository label names must be unique, found duplicates: {duplicates}"
            )
        return v


class LabelDirectory(BaseModel):
    """
    The label catalog and the repository assignments, either declared in
    the labels manifest or read back from the repositories (snapshot).

    Directories compare equal when they hold the same labels, regardless of
    the catalog order, and the same repository assignments in the same order.
    """

    model_config = ConfigDict(frozen=True)

    labels: tuple[LabelDef, ...] = ()
    repos: tuple[RepoAssignment, ...] = ()

    @field_validator("labels", "repos", mode="before")
    @classmethod
    def none_sequence(cls, v: Any) -> Any:
        return () if v is None else v

    @field_validator("labels")
    @classmethod
    def unique_label_names(cls, v: tuple[LabelDef, ...]) -> tuple[LabelDef, ...]:
        counts = Counter(label.name for label in v)
        duplicates = [name for name, count in counts.items() if count > 1]
        if duplicates:
            raise ValueError(
                f"label names must be unique, found duplicates: {duplicates}"
            )
        return v

    @classmethod
    def from_manifest(cls, data: Mapping[str, Any] | None) -> LabelDirectory:
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ConfigurationError("labels manifest must be a mapping")
        try:
            return cls.model_validate({
                "labels": data.get("labels"),
                "repos": data.get("repos"),
            })
        except ValidationError as e:
            raise ConfigurationError(f"invalid labels manifest: {e}") from e

    def to_manifest(self) -> dict[str, Any]:
        return {
            "labels": [
                label.model_dump(exclude_none=True) for label in self.labels
            ],
            "repos": [
                {"name": a.repo.slug, "labels": list(a.labels)} for a in self.repos
            ],
        }

    def check(self) -> None:
        """
        Configuration errors that can only be detected on the whole
        directory. Must pass before any remote call is made.
        """
        if not self.repos:
            raise ConfigurationError("no repos found in labels manifest")
        defined = {label.name for label in self.labels}
        for assignment in self.repos:
            missing = [name for name in assignment.labels if name not in defined]
            if missing:
                raise ConfigurationError(
                    f"[{assignment.repo.slug}] labels are not defined in labels manifest: {missing}"
                )

    def lookup_label(self, name: str) -> LabelDef:
        for label in self.labels:
            if label.name == name:
                return label
        raise LabelNotDefinedError(name)

    def repo_has_label(self, slug: str, label_name: str) -> bool:
        for assignment in self.repos:
            if assignment.repo.slug == slug:
                return label_name in assignment.labels
        return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LabelDirectory):
            return NotImplemented
        return (
            {label.name: label for label in self.labels}
            == {label.name: label for label in other.labels}
            and self.repos == other.repos
        )

    def __hash__(self) -> int:
        return hash((frozenset(self.labels), self.repos))
