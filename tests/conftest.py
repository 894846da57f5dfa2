"""
Shared fakes of the host objects the listener reads.
"""
from datetime import datetime, timezone

import pytest

from run_stats.host.model import Build, Run


class FakeJob:
    def __init__(self, name="api", full_name="team/api"):
        self.name = name
        self.full_name = full_name


class FakeNode:
    def __init__(self, node_name="agent-1", host_name="vm-agent-1", label_string="linux docker",
                 root_path="/var/lib/ci", host_name_error=None):
        self.node_name = node_name
        self.label_string = label_string
        self.host_name = host_name
        self.root_path = root_path
        self.host_name_error = host_name_error

    def get_host_name(self):
        if self.host_name_error is not None:
            raise self.host_name_error
        return self.host_name

    def get_root_path(self):
        return self.root_path


class FakeExecutor:
    def __init__(self, node=None, time_spent_in_queue=1500):
        self.node = node
        self.time_spent_in_queue = time_spent_in_queue

    def get_node(self):
        return self.node


class FakeRun(Run):
    def __init__(self, job=None, number=7, result=None, duration=0, timestamp=None):
        self.parent = job or FakeJob()
        self.number = number
        self.display_name = f"#{number}"
        self.url = f"job/{self.parent.full_name}/{number}/"
        self.timestamp = timestamp or datetime(2024, 3, 16, 12, 0, tzinfo=timezone.utc)
        self.duration = duration
        self.result = result


class FakeBuild(FakeRun, Build):
    def __init__(self, environment=None, environment_error=None, causes=None, parameters=None,
                 executor=None, **kwargs):
        super().__init__(**kwargs)
        self.environment = environment
        self.environment_error = environment_error
        self.causes = causes or []
        self.parameters = parameters
        self.executor = executor
        self.environment_calls = 0

    def get_executor(self):
        return self.executor

    def get_environment(self, listener=None):
        self.environment_calls += 1
        if self.environment_error is not None:
            raise self.environment_error
        return self.environment

    def get_causes(self):
        return self.causes

    def get_parameters(self):
        return self.parameters


@pytest.fixture
def make_build():
    return FakeBuild


@pytest.fixture
def make_run():
    return FakeRun


@pytest.fixture
def make_executor():
    def _make(with_node=True, time_spent_in_queue=1500, **node_kwargs):
        node = FakeNode(**node_kwargs) if with_node else None
        return FakeExecutor(node=node, time_spent_in_queue=time_spent_in_queue)
    return _make
