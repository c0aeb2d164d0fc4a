import logging
import sys

from .github_actions import format_command

LOGGER_NAME = "package_metadata_linter"
DEFAULT_FORMAT = "%(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are chatty at DEBUG (one line per HTTP connection).
NOISY_LOGGERS = ("urllib3",)

_WORKFLOW_COMMANDS = {
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


class _BelowLevelFilter(logging.Filter):
    """Pass records strictly below a level; the rest belongs to stderr."""

    def __init__(self, level: int) -> None:
        super().__init__()
        self._level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self._level


class WorkflowCommandFormatter(logging.Formatter):
    """Render warnings and errors as GitHub Actions annotations."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = _WORKFLOW_COMMANDS.get(record.levelno)
        if command is None:
            return message
        return format_command(command, message)


def configure_lint_logging(
    *,
    level: int = logging.INFO,
    stderr_level: int = logging.WARNING,
    fmt: str = DEFAULT_FORMAT,
    workflow_commands: bool = False,
) -> logging.Logger:
    """Configure the linter's logger for a CLI run.

    - records below ``stderr_level`` go to stdout next to the lint report
    - records at or above it go to stderr (as ``::warning::`` / ``::error::``
      annotations when ``workflow_commands`` is set)

    Only the package logger is touched; library loggers are capped at
    WARNING unless the run is at DEBUG level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    formatter = logging.Formatter(fmt)
    stderr_level = max(stderr_level, logging.DEBUG)

    stdout_handler = logging.StreamHandler(stream=sys.stdout)
    stdout_handler.addFilter(_BelowLevelFilter(stderr_level))
    stdout_handler.setFormatter(formatter)

    stderr_handler = logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setLevel(stderr_level)
    stderr_handler.setFormatter(
        WorkflowCommandFormatter(fmt) if workflow_commands else formatter
    )

    logger.addHandler(stdout_handler)
    logger.addHandler(stderr_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level if level <= logging.DEBUG else logging.WARNING)

    return logger
