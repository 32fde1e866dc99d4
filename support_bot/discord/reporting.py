from __future__ import annotations

import logging

import sentry_sdk

from .. import __version__
from ..config.settings import Settings

logger = logging.getLogger(__name__)


def init_error_tracking(s: Settings) -> bool:
    """
    Initialise Sentry when SENTRY_DSN is set. Returns whether it is enabled.
    """
    if not s.sentry_enabled:
        logger.info("Error tracking disabled (SENTRY_DSN not set)")
        return False

    sentry_sdk.init(
        dsn=s.sentry_dsn,
        environment=s.env,
        release=f"leystryku-support-bot@{__version__}",
        traces_sample_rate=0.0,
    )
    logger.info("Error tracking enabled (environment=%s)", s.env)
    return True


def report_exception(exc: BaseException) -> None:
    # No-op until init_error_tracking() has configured a client.
    sentry_sdk.capture_exception(exc)
