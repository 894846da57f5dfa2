"""
Host Model
==========
Narrow, read-only views of the objects the build host hands to the listener.

Only what the extractors read is modelled here. Host integrations subclass
Run / Build (or satisfy the protocols) and tests substitute simple fakes.

Blocking host calls (environment resolution, host-name lookup) may raise:
    OSError          — the data could not be obtained; extraction carries on
    InterruptedError — the host asked the current thread to stop
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from run_stats.host.causes import Cause


class Job(Protocol):
    name: str
    full_name: str


class Node(Protocol):
    node_name: str
    label_string: str

    def get_host_name(self) -> Optional[str]: ...

    def get_root_path(self) -> Optional[str]: ...


class Executor(Protocol):
    time_spent_in_queue: int

    def get_node(self) -> Optional[Node]: ...


class ParameterValue(Protocol):
    name: str
    is_sensitive: bool

    def build_environment(self, run: "Run", env: Dict[str, str]) -> None: ...


class Run(ABC):
    """Any run the host reports, including lightweight non-build executions."""

    parent: Job
    number: int
    display_name: str
    url: str
    timestamp: datetime
    duration: int
    result: Optional[str]


class Build(Run):
    """A full build-like run: the only kind the listener reports on."""

    @abstractmethod
    def get_executor(self) -> Optional[Executor]: ...

    @abstractmethod
    def get_environment(self, listener: Any = None) -> Optional[Dict[str, str]]: ...

    @abstractmethod
    def get_causes(self) -> List["Cause"]: ...

    @abstractmethod
    def get_parameters(self) -> Optional[List[ParameterValue]]:
        """Return the declared parameter values, or None when the run has none attached."""
