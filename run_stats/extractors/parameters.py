"""
Parameters Extractor
Collects non-sensitive run parameters. Sensitive values are never read.
"""
from typing import Dict

from run_stats.host.model import Build
from run_stats.models.build_stats import BuildStats


def add_parameters(run: Build, build: BuildStats) -> None:
    values = run.get_parameters()
    if values is None:
        return

    env: Dict[str, str] = {}
    for value in values:
        if not value.is_sensitive:
            value.build_environment(run, env)
    build.parameters = env
