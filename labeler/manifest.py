import sys
from pathlib import Path

from ruamel import yaml
from ruamel.yaml.compat import StringIO
from ruamel.yaml.error import YAMLError

from labeler.directory import LabelDirectory
from labeler.utils.exceptions import ConfigurationError

STDOUT = "-"


def create_ruamel_instance(
    explicit_start: bool = False,
    width: int = 4096,
    pure: bool = False,
) -> yaml.YAML:
    ruamel_instance = yaml.YAML(pure=pure)

    ruamel_instance.preserve_quotes = False
    ruamel_instance.explicit_start = explicit_start
    ruamel_instance.width = width
    ruamel_instance.indent(mapping=2, sequence=4, offset=2)

    return ruamel_instance


def load_manifest(path: str) -> LabelDirectory:
    """Read a labels manifest. Any problem is a ConfigurationError."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"{path}: can not read labels manifest: {e}") from e

    try:
        data = create_ruamel_instance().load(content)
    except YAMLError as e:
        raise ConfigurationError(f"{path}: invalid YAML: {e}") from e

    return LabelDirectory.from_manifest(data)


def render_manifest(directory: LabelDirectory) -> str:
    with StringIO() as stream:
        create_ruamel_instance(explicit_start=True).dump(
            directory.to_manifest(), stream
        )
        return stream.getvalue()


def dump_manifest(directory: LabelDirectory, path: str) -> None:
    content = render_manifest(directory)
    if path == STDOUT:
        sys.stdout.write(content)
        return
    Path(path).write_text(content, encoding="utf-8")
