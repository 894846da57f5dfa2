"""
Causes
Host-recorded reasons a run was started.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class Cause:
    short_description: str = ""


@dataclass
class UserIdCause(Cause):
    user_id: Optional[str] = None
    user_name: Optional[str] = None


@dataclass
class UpstreamCause(Cause):
    upstream_project: str = ""
    upstream_build: int = 0


@dataclass
class SCMTriggerCause(Cause):
    pass


@dataclass
class TimerTriggerCause(Cause):
    pass
