import sys
import os
from pathlib import Path
from loguru import logger

_logging_configured = False

LOG_DIR = Path.home() / ".gemedit" / "logs"


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes")


def setup_logging(level="INFO", suppress_console=None, enable_file_logging=None, force=False):
    """
    Configure the loguru sinks for gemedit.

    Console output goes to stderr. The rotating file sink under LOG_DIR is
    opt-in through GEMEDIT_FILE_LOGGING=1 or enable_file_logging=True.

    Args:
        level: Logging level (default: INFO)
        suppress_console: If True, suppress console logging. If None, check GEMEDIT_MACHINE_MODE env var.
        enable_file_logging: If True, enable file logging. If None, check GEMEDIT_FILE_LOGGING env var.
        force: Reconfigure even if logging was already set up (used by the CLI --log-level flag)
    """
    global _logging_configured

    if _logging_configured and not force:
        return
    _logging_configured = True

    logger.remove()

    if suppress_console is None:
        suppress_console = _env_flag("GEMEDIT_MACHINE_MODE")

    # stdout belongs to the MCP stdio transport
    if not suppress_console:
        logger.add(
            sys.stderr,
            level=level,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
            colorize=True
        )

    if enable_file_logging is None:
        enable_file_logging = _env_flag("GEMEDIT_FILE_LOGGING")

    if enable_file_logging:
        LOG_DIR.mkdir(parents=True, exist_ok=True)

        logger.add(
            LOG_DIR / "gemedit.log",
            level="INFO",
            rotation="10 MB",
            retention="1 day",
            compression="gz",
            catch=True,
            serialize=False
        )


setup_logging()
