"""Runtime configuration read from the environment.

Environment variables:
    HOOKCLI_DEBUG        enable debug mode (true/false)
    HOOKCLI_LOG_LEVEL    logging level name (DEBUG/INFO/WARNING/ERROR)
    HOOKCLI_LOG_FORMAT   log line format (human/debug/json)
    HOOKCLI_VERBOSE      default verbosity before global options are parsed (0-5)
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .types.enums import VerbLevel

ENV_DEBUG = "HOOKCLI_DEBUG"
ENV_LOG_LEVEL = "HOOKCLI_LOG_LEVEL"
ENV_LOG_FORMAT = "HOOKCLI_LOG_FORMAT"
ENV_VERBOSE = "HOOKCLI_VERBOSE"

LOG_FORMATS = ["human", "debug", "json"]

# commands slower than this are reported with a warning
PERFORMANCE_THRESHOLD_MS = 100

_TRUE_VALUES = {"1", "true", "yes", "on"}

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Framework settings shared by every application instance."""
    debug: bool = False
    log_level: Optional[str] = None
    log_format: str = "human"
    verbose: VerbLevel = VerbLevel.ERROR
    performance_threshold_ms: int = PERFORMANCE_THRESHOLD_MS

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Build the configuration from environment variables.

        Invalid values fall back to the defaults; an unusable setting must not
        prevent the application from starting.
        """
        env = os.environ if environ is None else environ

        debug = env.get(ENV_DEBUG, "false").strip().lower() in _TRUE_VALUES

        log_level = env.get(ENV_LOG_LEVEL)
        log_level = log_level.strip().upper() if log_level else None
        if log_level and not isinstance(logging.getLevelName(log_level), int):
            logger.warning(f"ignore {ENV_LOG_LEVEL}: invalid log level '{log_level}'")
            log_level = None

        log_format = env.get(ENV_LOG_FORMAT, "debug" if debug else "human").strip().lower()
        if log_format not in LOG_FORMATS:
            log_format = "human"

        verbose = VerbLevel.DEBUG if debug else VerbLevel.ERROR
        if env.get(ENV_VERBOSE):
            try:
                verbose = VerbLevel.from_value(env[ENV_VERBOSE])
            except ValueError as e:
                logger.warning(f"ignore {ENV_VERBOSE}: {e}")

        return cls(debug=debug, log_level=log_level, log_format=log_format, verbose=verbose)
