"""
Parameter Values
================
The host's common parameter types. Each one contributes itself to a
host-style environment map; password values are always sensitive.
"""
from dataclasses import dataclass
from typing import Dict


@dataclass
class StringParameterValue:
    name: str
    value: str = ""
    is_sensitive: bool = False

    def build_environment(self, run, env: Dict[str, str]) -> None:
        env[self.name] = "" if self.value is None else str(self.value)


@dataclass
class BooleanParameterValue:
    name: str
    value: bool = False
    is_sensitive: bool = False

    def build_environment(self, run, env: Dict[str, str]) -> None:
        env[self.name] = "true" if self.value else "false"


@dataclass
class PasswordParameterValue:
    name: str
    value: str = ""

    @property
    def is_sensitive(self) -> bool:
        return True

    def build_environment(self, run, env: Dict[str, str]) -> None:
        env[self.name] = self.value
