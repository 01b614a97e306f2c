import os
import logging

# will run the following auto use fixtures for all tests ie. to deactivate pipelines, restore env variables and config providers after each test
from tests.utils import (
    drop_pipeline,
    test_config_providers,
    preserve_environ,
)

# will force duckdb to be created in pipeline folder
from dlt.destinations.impl.duckdb.configuration import DuckDbCredentials

DuckDbCredentials.database = ":pipeline:"


def pytest_configure(config):
    # no telemetry calls while http is mocked
    os.environ["RUNTIME__DLTHUB_TELEMETRY"] = "False"

    # disable connection pool logging
    logging.getLogger("urllib3").setLevel("WARNING")
