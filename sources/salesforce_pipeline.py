"""Pipeline to load Salesforce object descriptions into Duckdb."""

from typing import List

import dlt
from salesforce import salesforce_source


def load_descriptions(object_names: List[str]) -> None:
    """Execute a pipeline that loads the descriptions of the given Salesforce objects.

    Connection settings are read from SALESFORCE_* environment variables or from
    .dlt/secrets.toml under [sources.salesforce].
    """

    pipeline = dlt.pipeline(
        pipeline_name="salesforce",
        destination="duckdb",
        dataset_name="salesforce_data",
    )
    load_info = pipeline.run(salesforce_source(object_names=object_names))
    print(load_info)


if __name__ == "__main__":
    # Add the objects you want to describe to the list.
    load_descriptions(["Account", "Contact", "Opportunity"])
