"""Deployment environment of the event planner.

Importing this module loads `.env` (python-dotenv), so it has to come before
any module that reads settings from os.environ. Hosted deployments set their
variables directly and ship no `.env` file.

Usage:
    from eventplanner.config.environment import IS_PRODUCTION_ENVIRONMENT
"""

import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEVELOPMENT = 'development'
PRODUCTION = 'production'
KNOWN_ENVIRONMENTS = (DEVELOPMENT, PRODUCTION)

load_dotenv()


def _read_environment() -> str:
    """Environment name from ENVIRONMENT; unknown or missing values mean development."""
    name = os.environ.get('ENVIRONMENT', '').strip().lower()
    if name not in KNOWN_ENVIRONMENTS:
        logger.warning(
            f"ENVIRONMENT='{name}' is not one of {', '.join(KNOWN_ENVIRONMENTS)}; "
            f"running as {DEVELOPMENT}."
        )
        return DEVELOPMENT
    return name


ENVIRONMENT_NAME = _read_environment()
IS_PRODUCTION_ENVIRONMENT = ENVIRONMENT_NAME == PRODUCTION

__all__ = ['ENVIRONMENT_NAME', 'IS_PRODUCTION_ENVIRONMENT']
