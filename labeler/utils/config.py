from typing import Any

import toml

_config: dict[str, Any] | None = None


class SecretNotFound(Exception):
    pass


def get_config() -> dict[str, Any] | None:
    return _config


def init(config: dict[str, Any] | None) -> dict[str, Any] | None:
    global _config  # noqa: PLW0603
    _config = config
    return _config


def init_from_toml(configfile: str) -> dict[str, Any] | None:
    return init(toml.load(configfile))


def read(secret: dict[str, str]) -> Any:
    path = secret["path"]
    field = secret["field"]
    try:
        config = read_all({"path": path})
        return config[field]
    except SecretNotFound:
        raise
    except Exception as e:
        raise SecretNotFound(f"key not found in config file {path}: {e!s}") from None


def read_all(secret: dict[str, str]) -> Any:
    path = secret["path"]
    try:
        path_tokens = path.split("/")
        config: Any = get_config()
        for t in path_tokens:
            config = config[t]
        return config
    except Exception as e:
        raise SecretNotFound(f"secret {path} not found in config file: {e!s}") from None
