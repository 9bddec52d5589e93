class LabelerError(Exception):
    pass


class ConfigurationError(LabelerError):
    pass


class LabelNotDefinedError(ConfigurationError):
    def __init__(self, name: str) -> None:
        super().__init__(f"{name}: no such defined label in labels manifest")
        self.name = name


class LabelNotFoundError(LabelerError):
    pass


class RemoteError(LabelerError):
    pass


class FleetReconcileError(LabelerError):
    """
    Raised when one or more repositories failed to reconcile.
    The message describes the first failure in declaration order,
    `errors` holds every (repository slug, exception) pair.
    """

    def __init__(self, errors: list[tuple[str, Exception]]) -> None:
        if not errors:
            raise ValueError("FleetReconcileError requires at least one error")
        slug, first = errors[0]
        msg = f"failed to reconcile labels in {slug}: {first}"
        if len(errors) > 1:
            msg += f" (and {len(errors) - 1} more repositories failed)"
        super().__init__(msg)
        self.errors = errors

    @property
    def first(self) -> Exception:
        return self.errors[0][1]
