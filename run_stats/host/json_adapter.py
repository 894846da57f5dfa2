"""
JSON Host Adapter
=================
Builds host objects from a JSON run description, for hosts that export run
events through a hook script instead of calling the listener in-process.

Payload shape (every key except job.name is optional):

    {
      "type": "build",                  # anything else is a non-build run
      "job": {"name": "api", "fullName": "team/api"},
      "number": 12,
      "displayName": "#12",
      "url": "job/team/job/api/12/",
      "timestamp": 1700000000000,       # epoch millis or ISO-8601
      "duration": 0,
      "result": null,
      "environment": {"GIT_URL": "..."},
      "causes": [{"type": "user", "userId": "alice", "userName": "Alice"},
                 {"type": "upstream"}, {"type": "scm"}, {"type": "timer"}],
      "parameters": [{"name": "TARGET", "type": "string", "value": "prod"},
                     {"name": "TOKEN", "type": "password", "value": "..."}],
      "executor": {"queueTime": 1500,
                   "node": {"name": "agent-1", "hostName": "vm-1",
                            "label": "linux", "rootPath": "/var/ci"}}
    }
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from run_stats.host.causes import (
    Cause,
    SCMTriggerCause,
    TimerTriggerCause,
    UpstreamCause,
    UserIdCause,
)
from run_stats.host.model import Build, Run
from run_stats.host.parameters import (
    BooleanParameterValue,
    PasswordParameterValue,
    StringParameterValue,
)


class PayloadError(ValueError):
    """Raised when a run description cannot be turned into host objects."""


@dataclass
class JsonJob:
    name: str
    full_name: str


@dataclass
class JsonNode:
    node_name: str = ""
    label_string: str = ""
    host_name: Optional[str] = None
    root_path: Optional[str] = None

    def get_host_name(self) -> Optional[str]:
        return self.host_name

    def get_root_path(self) -> Optional[str]:
        return self.root_path


@dataclass
class JsonExecutor:
    time_spent_in_queue: int = 0
    node: Optional[JsonNode] = None

    def get_node(self) -> Optional[JsonNode]:
        return self.node


class JsonRun(Run):
    def __init__(self, data: Dict[str, Any]) -> None:
        job = _object(data.get("job"), "job")
        if not job.get("name"):
            raise PayloadError("job.name is required")
        self.parent = JsonJob(name=str(job["name"]), full_name=str(job.get("fullName") or job["name"]))
        self.number = int(data.get("number", 0))
        self.display_name = data.get("displayName") or f"#{self.number}"
        self.url = data.get("url", "")
        self.timestamp = _parse_time(data.get("timestamp"))
        self.duration = int(data.get("duration", 0))
        self.result = data.get("result")


class JsonBuild(JsonRun, Build):
    def __init__(self, data: Dict[str, Any]) -> None:
        super().__init__(data)
        environment = data.get("environment")
        self.environment: Optional[Dict[str, str]] = (
            None if environment is None else _object(environment, "environment")
        )
        self.causes: List[Cause] = [_parse_cause(c) for c in _array(data.get("causes"), "causes")]
        raw_params = data.get("parameters")
        self.parameters = (
            None if raw_params is None
            else [_parse_parameter(p) for p in _array(raw_params, "parameters")]
        )
        self.executor = _parse_executor(data.get("executor"))

    def get_executor(self) -> Optional[JsonExecutor]:
        return self.executor

    def get_environment(self, listener: Any = None) -> Optional[Dict[str, str]]:
        return self.environment

    def get_causes(self) -> List[Cause]:
        return self.causes

    def get_parameters(self):
        return self.parameters


def _object(value: Any, what: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise PayloadError(f"{what} must be a JSON object, got {type(value).__name__}")
    return value


def _array(value: Any, what: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise PayloadError(f"{what} must be a JSON array, got {type(value).__name__}")
    return value


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _parse_bool(value: Any, what: str) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise PayloadError(f"{what} must be a boolean, got {value!r}")


def _parse_time(value: Any) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    text = str(value).strip()
    # fromisoformat only accepts a trailing Z from Python 3.11
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise PayloadError(f"Invalid timestamp: {value!r}") from e
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _parse_cause(data: Any) -> Cause:
    data = _object(data, "cause")
    kind = data.get("type", "")
    description = data.get("shortDescription", "")
    if kind == "user":
        return UserIdCause(description, user_id=_optional_str(data.get("userId")),
                           user_name=_optional_str(data.get("userName")))
    if kind == "upstream":
        return UpstreamCause(description, upstream_project=data.get("upstreamProject", ""),
                             upstream_build=int(data.get("upstreamBuild", 0)))
    if kind == "scm":
        return SCMTriggerCause(description)
    if kind == "timer":
        return TimerTriggerCause(description)
    return Cause(description)


def _parse_parameter(data: Any):
    data = _object(data, "parameter")
    name = data.get("name")
    if not name:
        raise PayloadError("parameter without a name")
    name = str(name)
    kind = data.get("type", "string")
    sensitive = _parse_bool(data.get("sensitive"), f"parameters.{name}.sensitive")
    if kind == "password":
        return PasswordParameterValue(name, data.get("value", ""))
    if kind == "boolean":
        return BooleanParameterValue(name, _parse_bool(data.get("value"), f"parameters.{name}.value"),
                                     sensitive)
    return StringParameterValue(name, data.get("value", ""), sensitive)


def _parse_executor(data: Any) -> Optional[JsonExecutor]:
    data = _object(data, "executor")
    if not data:
        return None
    node_data = _object(data.get("node"), "executor.node")
    node = None
    if node_data:
        node = JsonNode(
            node_name=str(node_data.get("name", "")),
            label_string=str(node_data.get("label", "")),
            host_name=_optional_str(node_data.get("hostName")),
            root_path=_optional_str(node_data.get("rootPath")),
        )
    return JsonExecutor(time_spent_in_queue=int(data.get("queueTime", 0)), node=node)


def run_from_payload(data: Dict[str, Any]) -> Run:
    """Return a JsonBuild for build payloads and a plain JsonRun otherwise."""
    if not isinstance(data, dict):
        raise PayloadError("run description must be a JSON object")
    if data.get("type", "build") == "build":
        return JsonBuild(data)
    return JsonRun(data)
