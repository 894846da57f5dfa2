"""
User Details Extractor
======================
Resolves who (or what) started a run from the host's cause list.

Every cause is applied in the host's order, so with several causes the last
one wins. There is no precedence between cause types.
"""
from typing import Any, Iterable, Optional, Tuple

from run_stats.core import constants
from run_stats.host.causes import (
    Cause,
    SCMTriggerCause,
    TimerTriggerCause,
    UpstreamCause,
    UserIdCause,
)
from run_stats.models.build_stats import BuildStats


def _or_anonymous(value: Optional[Any]) -> str:
    if value is None:
        return constants.ANONYMOUS
    value = str(value)
    if not value.strip():
        return constants.ANONYMOUS
    return value


def resolve_cause(cause: Cause) -> Tuple[str, str]:
    """Map one cause to (started_user_id, started_user_name)."""
    if isinstance(cause, UserIdCause):
        return _or_anonymous(cause.user_id), _or_anonymous(cause.user_name)
    if isinstance(cause, UpstreamCause):
        return constants.UPSTREAM, constants.SYSTEM
    if isinstance(cause, SCMTriggerCause):
        return constants.SCM, constants.SYSTEM
    if isinstance(cause, TimerTriggerCause):
        return constants.TIMER, constants.SYSTEM
    return constants.UNKNOWN, constants.SYSTEM


def add_user_details(causes: Iterable[Cause], build: BuildStats) -> None:
    for cause in causes or ():
        build.started_user_id, build.started_user_name = resolve_cause(cause)
