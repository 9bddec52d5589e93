import logging
import os

from labeler.utils import config

LABELER_CONFIG = "LABELER_CONFIG"
LABELER_LOG_LEVEL = "LABELER_LOG_LEVEL"

LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def log_fmt(dry_run: bool | None = None) -> str:
    log_fmt = (
        "[%(asctime)s] [%(levelname)s] [DRY-RUN] "
        if dry_run
        else "[%(asctime)s] [%(levelname)s] "
    )

    log_fmt += "[%(filename)s:%(funcName)s:%(lineno)d] - %(message)s"

    return log_fmt


def init_env(
    log_level: str | None = None,
    config_file: str | None = None,
    dry_run: bool | None = None,
) -> None:
    # store env configs in environment variables. this way child processes
    # will inherit them and can set up the same environment by running
    # `init_env()` with no parameters.
    if log_level:
        os.environ[LABELER_LOG_LEVEL] = log_level
    if config_file:
        os.environ[LABELER_CONFIG] = config_file

    logging.basicConfig(
        format=log_fmt(dry_run=dry_run),
        datefmt=LOG_DATEFMT,
        level=getattr(logging, os.environ.get(LABELER_LOG_LEVEL, "INFO")),
    )

    # the settings file is optional, the token may come from GITHUB_TOKEN
    config_file = os.environ.get(LABELER_CONFIG)
    if config_file:
        config.init_from_toml(config_file)
