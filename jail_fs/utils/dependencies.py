"""
Configuration and dependency management for the jailed file system.
"""

import logging
from functools import lru_cache

from jail_fs.utils.config import ServiceConfig
from jail_fs.utils.session_manager import SessionManager

logger = logging.getLogger(__name__)


@lru_cache
def get_base_config() -> ServiceConfig:
    """
    Retrieves the base configuration from environment variables.

    This function is cached to avoid repeatedly reading and parsing environment
    variables.

    Returns:
        A cached instance of the ServiceConfig.
    """
    return ServiceConfig()


@lru_cache
def get_session_manager() -> SessionManager:
    """Returns a singleton instance of the SessionManager."""
    logger.info("Initializing SessionManager singleton.")
    return SessionManager(get_base_config())
