"""
Slave Info Extractor
====================
Describes the execution node a run is assigned to.

Only populated while the run holds an executor. The host-name lookup is a
blocking host call: an OSError is logged and the remaining fields are still
filled in, an interruption cancels the token.
"""
import logging
import re

from run_stats.core.cancellation import CANCELLED, OK, CancellationToken, ExtractStatus
from run_stats.host.model import Build
from run_stats.models.build_stats import BuildStats, SlaveInfo

logger = logging.getLogger(__name__)


def _root_name(root_path) -> str:
    if not root_path:
        return ""
    return re.split(r"[\\/]", str(root_path).rstrip("/\\"))[-1]


def add_slave_info(run: Build, build: BuildStats, token: CancellationToken) -> ExtractStatus:
    if token.is_cancelled:
        return CANCELLED

    executor = run.get_executor()
    if executor is None:
        return OK
    node = executor.get_node()
    if node is None:
        logger.debug("Executor of %s has no node attached", run.url)
        return OK

    slave_info = SlaveInfo()
    slave_info.slave_name = node.node_name or ""
    try:
        slave_info.vm_name = node.get_host_name() or ""
    except InterruptedError as e:
        logger.warning("Interrupted while retrieving hostname of slave for %s: %s", run.url, e)
        token.cancel(f"host name lookup interrupted for {run.url}")
        return CANCELLED
    except OSError as e:
        logger.warning("Failed to retrieve hostname of slave for %s: %s", run.url, e, exc_info=True)
    slave_info.label = node.label_string or ""
    slave_info.remote_fs = _root_name(node.get_root_path())

    build.slave_info = slave_info
    return OK
