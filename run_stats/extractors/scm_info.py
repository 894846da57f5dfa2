"""
SCM Info Extractor
==================
Fills the source-control section of a BuildStats from the run's environment.

Resolution rules:
    url    — GIT_URL, else SVN_URL
    branch — GIT_BRANCH
    commit — GIT_COMMIT

When there is no GIT_COMMIT, SVN_REVISION is written into url rather than
commit. Downstream reports depend on that mapping, so it is kept as is.
"""
import logging
from typing import Any, Mapping, Optional

from run_stats.core import constants
from run_stats.core.cancellation import CANCELLED, OK, CancellationToken, ExtractStatus
from run_stats.host.model import Build
from run_stats.models.build_stats import BuildStats, SCMInfo

logger = logging.getLogger(__name__)


def scm_info_from_environment(environment: Optional[Mapping[str, str]]) -> SCMInfo:
    scm_info = SCMInfo()
    if environment is None:
        return scm_info

    if environment.get(constants.GIT_URL) is not None:
        scm_info.url = environment[constants.GIT_URL]
    elif environment.get(constants.SVN_URL) is not None:
        scm_info.url = environment[constants.SVN_URL]

    if environment.get(constants.GIT_BRANCH) is not None:
        scm_info.branch = environment[constants.GIT_BRANCH]

    if environment.get(constants.GIT_COMMIT) is not None:
        scm_info.commit = environment[constants.GIT_COMMIT]
    elif environment.get(constants.SVN_REVISION) is not None:
        scm_info.url = environment[constants.SVN_REVISION]

    return scm_info


def add_scm_info(
    run: Build,
    listener: Any,
    build: BuildStats,
    token: CancellationToken,
) -> ExtractStatus:
    """
    Resolve the run environment and attach an SCMInfo to the build.

    Returns "cancelled" without touching the build if the host interrupts
    environment resolution or the token was already cancelled.
    """
    if token.is_cancelled:
        return CANCELLED

    environment = None
    try:
        environment = run.get_environment(listener)
    except InterruptedError as e:
        logger.warning("Interrupted while retrieving environment for %s: %s", run.url, e)
        token.cancel(f"environment resolution interrupted for {run.url}")
        return CANCELLED
    except OSError as e:
        logger.warning("Failed to retrieve environment for %s: %s", run.url, e, exc_info=True)

    build.scm_info = scm_info_from_environment(environment)
    return OK
