"""
Build Stats Model
=================
Pydantic models for the snapshot posted to the statistics service once per
lifecycle event.

Fields (JSON key in brackets):
    ci_url [ciUrl]                  — root URL of the CI instance
    job_name [jobName]              — short name of the owning job
    full_job_name [fullJobName]     — folder-qualified job name
    number                          — run number (>= 0)
    slave_info [slaveInfo]          — execution node context, always present
    start_time [startTime]          — run timestamp (epoch millis on the wire)
    end_time [endTime]              — finalization time; placeholder on started events
    started_user_id [startedUserId] — user id or cause sentinel
    started_user_name               — display name or "system"
    result                          — host result, "INPROGRESS" or "unknown"
    duration                        — run duration in milliseconds, 0 until finalized
    parameters                      — non-sensitive run parameters
    scm_info [scmInfo]              — source-control context, always present
    queue_time [queueTime]          — milliseconds spent in the queue (started only)
"""
from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel


def _now() -> datetime:
    return datetime.now(timezone.utc)


class _StatsModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SCMInfo(_StatsModel):
    url: str = ""
    branch: str = ""
    commit: str = ""


class SlaveInfo(_StatsModel):
    slave_name: str = ""
    vm_name: str = ""
    label: str = ""
    remote_fs: str = ""


class BuildStats(_StatsModel):
    ci_url: str = ""
    job_name: str = ""
    full_job_name: str = ""
    number: int = Field(default=0, ge=0)
    slave_info: SlaveInfo = Field(default_factory=SlaveInfo)
    start_time: datetime = Field(default_factory=_now)
    end_time: datetime = Field(default_factory=_now)
    started_user_id: str = ""
    started_user_name: str = ""
    result: str = ""
    duration: int = Field(default=0, ge=0)
    parameters: Dict[str, str] = Field(default_factory=dict)
    scm_info: SCMInfo = Field(default_factory=SCMInfo)
    queue_time: int = Field(default=0, ge=0)

    @field_serializer("start_time", "end_time", when_used="json")
    def serialize_epoch_millis(self, value: datetime) -> int:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp() * 1000)

    def to_payload(self) -> Dict[str, Any]:
        """Return the camelCase JSON body expected by the statistics service."""
        return self.model_dump(mode="json", by_alias=True)
