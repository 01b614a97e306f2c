import pytest
from typing import Iterator
from os import environ
from unittest.mock import patch

import dlt
from dlt.common.typing import DictStrAny
from dlt.common.configuration.container import Container
from dlt.common.configuration.specs import PluggableRunContext
from dlt.common.configuration.providers import (
    EnvironProvider,
    ConfigTomlProvider,
    SecretsTomlProvider,
)
from dlt.common.pipeline import LoadInfo, PipelineContext

# get env variable with destinations
ALL_DESTINATIONS = dlt.config.get("ALL_DESTINATIONS", list) or [
    "duckdb",
]


@pytest.fixture(autouse=True)
def drop_pipeline() -> Iterator[None]:
    """Deactivates the pipeline created in the test"""
    yield
    if Container()[PipelineContext].is_active():
        Container()[PipelineContext].deactivate()


@pytest.fixture(autouse=True, scope="session")
def test_config_providers():
    """Creates set of config providers where tomls are loaded from sources/.dlt"""
    config_root = "./sources/.dlt"

    # inject provider context so the original providers are restored at the end
    def _initial_providers(self):
        return [
            EnvironProvider(),
            SecretsTomlProvider(settings_dir=config_root),
            ConfigTomlProvider(settings_dir=config_root),
        ]

    with patch(
        "dlt.common.runtime.run_context.RunContext.initial_providers",
        _initial_providers,
    ):
        Container()[PluggableRunContext].reload_providers()
        yield


@pytest.fixture(scope="function", autouse=True)
def preserve_environ() -> Iterator[None]:
    """Restores the environ after the test was run"""
    saved_environ = environ.copy()
    yield
    environ.clear()
    environ.update(saved_environ)


def assert_load_info(info: LoadInfo, expected_load_packages: int = 1) -> None:
    """Asserts that expected number of packages was loaded and there are no failed jobs"""
    assert len(info.loads_ids) == expected_load_packages
    # all packages loaded
    assert all(package.state == "loaded" for package in info.load_packages) is True
    # no failed jobs in any of the packages
    info.raise_on_failed_jobs()


def load_table_counts(p: dlt.Pipeline, *table_names: str) -> DictStrAny:
    """Returns row counts for `table_names` as dict"""
    with p.sql_client() as c:
        query = "\nUNION ALL\n".join(
            [
                f"SELECT '{name}' as name, COUNT(1) as c FROM {c.make_qualified_table_name(name)}"
                for name in table_names
            ]
        )
        with c.execute_query(query) as cur:
            rows = list(cur.fetchall())
            return {r[0]: r[1] for r in rows}
