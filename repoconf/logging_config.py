from __future__ import annotations

"""Central logging configuration for repoconf.

Library code only creates module loggers; applications embedding repoconf
call :func:`setup_logging` once at start-up if they want its handlers.
"""

import logging
import logging.config
import os
from typing import Any, Dict, List

from repoconf.config import ConfigManager

__all__ = ["setup_logging"]

LOG_DIR_ENV_VAR = "REPOCONF_LOG_DIR"
DEBUG_MODULES_ENV_VAR = "REPOCONF_DEBUG_MODULES"

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging() -> None:
    """Configure logging from the YAML logging config, or a console fallback."""
    log_dir = os.environ.get(LOG_DIR_ENV_VAR, "logs")
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, "repoconf.log")

    logging_config = ConfigManager().get_logging_config()

    if logging_config and isinstance(logging_config, dict) and logging_config.get("version"):
        if "handlers" in logging_config and "file" in logging_config["handlers"]:
            logging_config["handlers"]["file"]["filename"] = log_file
        try:
            logging.config.dictConfig(logging_config)
            logging.getLogger("repoconf").info("===== Logging initialised from config files =====")
        except (ValueError, TypeError, AttributeError, ImportError) as exc:
            _setup_minimal_logging()
            logging.getLogger("repoconf").error("Invalid logging config, using console only: %s", exc)
    else:
        _setup_minimal_logging()

    _apply_debug_overrides()


def _setup_minimal_logging() -> None:
    """Set up console-only logging when no usable config is available."""
    minimal_config: Dict[str, Any] = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'simple': {
                'format': _FORMAT,
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'simple',
                'level': 'INFO',
            },
        },
        'root': {
            'level': 'INFO',
            'handlers': ['console'],
        },
    }
    logging.config.dictConfig(minimal_config)


def _debug_targets() -> List[str]:
    extra_modules = os.environ.get(DEBUG_MODULES_ENV_VAR, '').strip()
    return [m.strip() for m in extra_modules.split(',') if m.strip()]


def _apply_debug_overrides() -> None:
    """Switch loggers named in ``REPOCONF_DEBUG_MODULES`` to DEBUG.

    Example: ``REPOCONF_DEBUG_MODULES=repoconf.core.repoconf,repoconf.core.keyfile``
    """
    for name in _debug_targets():
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        # Ensure at least one handler emits DEBUG for this logger
        has_debug_handler = any(
            h.level == logging.NOTSET or h.level <= logging.DEBUG
            for h in logger.handlers
        )
        if not has_debug_handler:
            handler = logging.StreamHandler()
            handler.setLevel(logging.DEBUG)
            handler.setFormatter(logging.Formatter(_FORMAT))
            logger.addHandler(handler)
        logger.info("Debug override active for logger '%s'", name)
