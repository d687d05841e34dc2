"""Infrastructure utilities for Streamlit UI operations.

Abstracts Streamlit-specific infrastructure (st.rerun, st.session_state)
so tests can patch these functions instead of every st.rerun call site.

IMPORTANT: Only infrastructure belongs here (rerun, map version, polling).
"""

import logging
import time

import streamlit as st

from pinroute.constants import QueueConfig

logger = logging.getLogger(__name__)


def trigger_rerun(scope: str = "app") -> None:
    """Trigger Streamlit rerun with optional scope.

    In tests, patch 'pinroute.ui.infra.trigger_rerun' to prevent actual
    reruns (which raise StopExecution).

    Args:
        scope: Rerun scope - "app" for full rerun, "fragment" for partial.
    """
    st.rerun(scope=scope)


def bump_map_version() -> None:
    """Increment map_version to create a fresh Pydeck component.

    A fresh component applies the new camera region and has no memory of
    previous click events. Call this whenever the surface region changes.
    """
    old_version = st.session_state.get("map_version", 0)
    new_version = old_version + 1
    st.session_state.map_version = new_version
    logger.info(f"[MAP] Bumped map_version: {old_version} -> {new_version}")


def schedule_poll(seconds_until_next: float | None) -> None:
    """Rerun after a short sleep so pending MainQueue work gets drained.

    Args:
        seconds_until_next: Time until the next queued callback is due
            (None when only background work is outstanding)
    """
    delay = QueueConfig.POLL_INTERVAL_S
    if seconds_until_next is not None:
        delay = min(delay, max(seconds_until_next, 0.0))
    logger.debug(f"[QUEUE] Polling again in {delay:.2f}s")
    time.sleep(delay)
    trigger_rerun()
