"""
Run Stats Listener
==================
Entry point the build host calls when a run starts and when it is finalized.

Each call builds a fresh BuildStats snapshot, fills it from the run and
posts it to the statistics service. The listener is the failure boundary:
whatever goes wrong during extraction or delivery is logged as a warning and
never reaches the host, so the observed run is not blocked or altered.

Only full builds are reported. Lighter run types are ignored.

Dependencies (endpoint and CI root URL providers, delivery function, logger)
are injected so concurrent host threads share nothing mutable and tests can
substitute fakes.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from run_stats.client.rest_client import post_to_service
from run_stats.core import config, constants
from run_stats.core.cancellation import CANCELLED, CancellationToken
from run_stats.extractors.parameters import add_parameters
from run_stats.extractors.scm_info import add_scm_info
from run_stats.extractors.slave_info import add_slave_info
from run_stats.extractors.user_details import add_user_details
from run_stats.host.model import Build, Run
from run_stats.models.build_stats import BuildStats

DeliverFn = Callable[[str, BuildStats], Any]


def _non_negative(value: Any) -> int:
    """Negative or malformed host timings are reported as 0."""
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0


class RunStatsListener:
    """
    Reports run lifecycle events to the statistics service.
    """

    def __init__(
        self,
        endpoint_provider: Callable[[], str] = config.get_build_endpoint,
        root_url_provider: Callable[[], Optional[str]] = config.get_ci_root_url,
        deliver: DeliverFn = post_to_service,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.endpoint_provider = endpoint_provider
        self.root_url_provider = root_url_provider
        self.deliver = deliver
        self.logger = logger or logging.getLogger(__name__)

    def _rest_url(self) -> str:
        return self.endpoint_provider()

    def _new_build_stats(self, run: Build, result: str) -> BuildStats:
        return BuildStats(
            ci_url=self.root_url_provider() or "",
            job_name=run.parent.name,
            full_job_name=run.parent.full_name,
            number=run.number,
            result=result,
        )

    def on_started(self, run: Run, listener: Any = None,
                   token: Optional[CancellationToken] = None) -> None:
        """
        Report a run that has just started executing.

        ``token`` lets the host abort extraction cooperatively. It is checked
        before every blocking host call and again before delivery.
        """
        if not isinstance(run, Build):
            return
        rest_url = ""
        try:
            rest_url = self._rest_url()
            build_result = run.result if run.result is not None else constants.INPROGRESS
            build = self._new_build_stats(run, build_result)
            build.start_time = run.timestamp
            executor = run.get_executor()
            build.queue_time = _non_negative(executor.time_spent_in_queue) if executor is not None else 0

            if token is None:
                token = CancellationToken()
            add_user_details(run.get_causes(), build)
            if add_scm_info(run, listener, build, token) == CANCELLED:
                self._log_cancelled(run, token)
                return
            add_parameters(run, build)
            if add_slave_info(run, build, token) == CANCELLED:
                self._log_cancelled(run, token)
                return
            if token.is_cancelled:
                self._log_cancelled(run, token)
                return

            self.deliver(rest_url, build)
            self.logger.info("Started build and its status is : %s and start time is : %s",
                             build_result, run.timestamp)
        except Exception as e:
            self._log_failure(rest_url, run, e)

    def on_finalized(self, run: Run, token: Optional[CancellationToken] = None) -> None:
        """Report the final result and duration of a completed run."""
        if not isinstance(run, Build):
            return
        if token is not None and token.is_cancelled:
            self._log_cancelled(run, token)
            return
        rest_url = ""
        try:
            rest_url = self._rest_url()
            build_result = run.result if run.result is not None else constants.UNKNOWN
            build = self._new_build_stats(run, build_result)
            build.duration = _non_negative(run.duration)
            finished_at = datetime.now(timezone.utc)
            build.end_time = finished_at

            self.deliver(rest_url, build)
            self.logger.info("%s build is completed its status is : %s at time : %s",
                             run.parent.name, build_result, finished_at)
        except Exception as e:
            self._log_failure(rest_url, run, e)

    def _log_cancelled(self, run: Run, token: CancellationToken) -> None:
        self.logger.warning("Skipped reporting build %s: %s", run.display_name, token.reason)

    def _log_failure(self, rest_url: str, run: Run, error: Exception) -> None:
        self.logger.warning("Failed to call API %s for build %s: %s",
                            rest_url, run.display_name, error, exc_info=True)
