"""Source that loads object descriptions (name, label and fields) from the Salesforce REST API.

Authentication uses the 'OAuth 2.0 Username Password Flow'. Every setting can
be passed explicitly, placed under `[sources.salesforce]` in dlt config (e.g.
secrets.toml or SOURCES__SALESFORCE__PASSWORD) or set as a `SALESFORCE_*`
environment variable, e.g. SALESFORCE_API_HOST or SALESFORCE_PASSWORD.

Salesforce api docs: https://developer.salesforce.com/docs/atlas.en-us.api_rest.meta/api_rest/resources_sobject_describe.htm
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence

import dlt
from dlt.common.typing import TDataItem
from dlt.sources import DltResource, DltSource

from .exceptions import (
    SalesforceAuthenticationError,
    SalesforceClientError,
    SalesforceConfigurationError,
    SalesforceDecodeError,
    SalesforceRequestError,
)
from .helpers.client import SalesforceClient, configure_client
from .helpers.credentials import (
    configuration_from_providers,
    resolve_provider_configuration,
)
from .helpers.models import Description
from .settings import DEFAULT_AUTH_TIMEOUT, DEFAULT_REQUEST_TIMEOUT, PLACEHOLDER_ID


def description_to_item(description: Description) -> TDataItem:
    """Maps a description to the item stored in the `description` table."""
    item: Dict[str, Any] = {"id": PLACEHOLDER_ID}
    item.update(description.to_dict())
    return item


def salesforce_source(
    object_names: Optional[List[str]] = None,
    api_host: Optional[str] = None,
    api_version: Optional[str] = None,
    auth_host: Optional[str] = None,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    grant_type: Optional[str] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    auth_timeout: float = DEFAULT_AUTH_TIMEOUT,
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
) -> DltSource:
    """
    The source for Salesforce object descriptions. The only resource is `description`.

    The eight connection settings are not injected by dlt: values not passed here are read
    from the `sources.salesforce` config section only, then from `SALESFORCE_*` variables.
    The client logs in once, before the source is returned.

    Args:
        object_names: API names of the objects to describe, e.g. ["Account", "Contact"].
            Taken from `sources.salesforce.object_names` if not given.
        api_host: URI of the Salesforce API, e.g. https://xyz.my.salesforce.com
        api_version: Version of the Salesforce API, e.g. v59.0
        auth_host: URI of the OAuth2 token endpoint.
        client_id: Client ID of the connected app.
        client_secret: Client secret of the connected app.
        grant_type: OAuth2 grant type, usually "password".
        username: Salesforce username.
        password: Salesforce password.
        auth_timeout: Timeout in seconds of the token request. Defaults to 5.
        request_timeout: Timeout in seconds of describe requests. Defaults to 10.

    Returns:
        DltSource: The `salesforce` source.
    """
    configuration = resolve_provider_configuration(
        configuration_from_providers(
            {
                "api_host": api_host,
                "api_version": api_version,
                "auth_host": auth_host,
                "client_id": client_id,
                "client_secret": client_secret,
                "grant_type": grant_type,
                "username": username,
                "password": password,
            }
        )
    )
    client = configure_client(
        configuration, auth_timeout=auth_timeout, request_timeout=request_timeout
    )

    if object_names is None:
        return salesforce_descriptions(client)
    return salesforce_descriptions(client, object_names=object_names)


@dlt.source(name="salesforce")
def salesforce_descriptions(
    client: SalesforceClient, object_names: List[str] = dlt.config.value
) -> Iterable[DltResource]:
    """Source with the `description` resource, reading descriptions through a logged in `client`."""
    return (description_resource(client, object_names),)


def description_resource(
    client: SalesforceClient, object_names: Sequence[str]
) -> DltResource:
    @dlt.resource(name="description", primary_key="name", write_disposition="replace")
    def description() -> Iterable[TDataItem]:
        for object_name in object_names:
            yield description_to_item(client.get_description(object_name))

    return description


__all__ = [
    "salesforce_source",
    "salesforce_descriptions",
    "description_resource",
    "description_to_item",
    "SalesforceClient",
    "SalesforceClientError",
    "SalesforceConfigurationError",
    "SalesforceAuthenticationError",
    "SalesforceRequestError",
    "SalesforceDecodeError",
]
