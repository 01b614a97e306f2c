"""
This module handles how the Salesforce connection settings are read.

Every setting can be given explicitly, under the `sources.salesforce` dlt config
section or through a `SALESFORCE_<NAME>` environment variable, in that order
of precedence.
"""
import os
from typing import Any, Dict, List, Mapping, Optional

import dlt
from dlt.common.configuration.specs import (
    BaseConfiguration,
    CredentialsConfiguration,
    configspec,
)
from dlt.common.typing import TSecretStrValue

from ..exceptions import MissingConfigurationField, SalesforceConfigurationError
from ..settings import (
    CONFIGURATION_FIELDS,
    CONFIGURATION_FIELD_TITLES,
    ENV_PREFIX,
    PROVIDER_SECTION,
    SECRET_FIELDS,
)


@configspec
class SalesforceCredentials(CredentialsConfiguration):
    """
    This class is used to store 'OAuth 2.0 Username Password Flow Credentials' for a connected app.
    """

    auth_host: str = None
    client_id: str = None
    client_secret: TSecretStrValue = None
    grant_type: str = None
    username: str = None
    password: TSecretStrValue = None

    def has_all_fields(self) -> bool:
        return all(
            getattr(self, name) is not None
            for name in (
                "auth_host",
                "client_id",
                "client_secret",
                "grant_type",
                "username",
                "password",
            )
        )

    def to_form(self) -> Dict[str, str]:
        """Fields posted to the token endpoint."""
        return {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "grant_type": self.grant_type,
            "username": self.username,
            "password": self.password,
        }


@configspec
class SalesforceProviderConfiguration(BaseConfiguration):
    api_host: str = None
    api_version: str = None
    auth_host: str = None
    client_id: str = None
    client_secret: TSecretStrValue = None
    grant_type: str = None
    username: str = None
    password: TSecretStrValue = None

    def credentials(self) -> SalesforceCredentials:
        return SalesforceCredentials(
            auth_host=self.auth_host,
            client_id=self.client_id,
            client_secret=self.client_secret,
            grant_type=self.grant_type,
            username=self.username,
            password=self.password,
        )

    def masked(self) -> Dict[str, Any]:
        """Returns the settings as a dict safe to log."""
        return {
            name: "***" if name in SECRET_FIELDS else getattr(self, name)
            for name in CONFIGURATION_FIELDS
        }


def env_var_name(field: str) -> str:
    return ENV_PREFIX + field.upper()


def configuration_from_providers(
    explicit: Optional[Mapping[str, Optional[str]]] = None,
) -> Dict[str, Optional[str]]:
    """Fills settings not given explicitly from dlt config providers.

    Only the fully qualified `sources.salesforce.<name>` keys are looked up, so
    generic variables such as USERNAME or PASSWORD are never picked up.
    """
    explicit = explicit or {}
    values: Dict[str, Optional[str]] = {}
    for field in CONFIGURATION_FIELDS:
        value = explicit.get(field)
        if value is None:
            accessor = dlt.secrets if field in SECRET_FIELDS else dlt.config
            value = accessor.get(f"{PROVIDER_SECTION}.{field}")
        values[field] = value
    return values


def _missing_field(field: str) -> MissingConfigurationField:
    env_var = env_var_name(field)
    title = f"Missing Salesforce {CONFIGURATION_FIELD_TITLES[field]}"
    detail = (
        "The provider cannot create the Salesforce API client as there is a missing or empty value "
        f"for the Salesforce {CONFIGURATION_FIELD_TITLES[field].lower()}. "
        f"Set the {field} value in the configuration or use the {env_var} environment variable. "
        "If either is already set, ensure the value is not empty."
    )
    return MissingConfigurationField(field, env_var, title, detail)


def resolve_provider_configuration(
    explicit: Optional[Mapping[str, Optional[str]]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> SalesforceProviderConfiguration:
    """Merges explicit settings with `SALESFORCE_*` environment variables.

    Args:
        explicit: Settings given in code or config files. A value that is not None
            overrides the environment, even when it is empty.
        environ: The environment to read from. Defaults to `os.environ`.

    Raises:
        SalesforceConfigurationError: Listing every setting that is empty after
            merging, one entry per setting.

    Returns:
        SalesforceProviderConfiguration: The resolved settings.
    """
    explicit = explicit or {}
    environ = os.environ if environ is None else environ

    values: Dict[str, Optional[str]] = {}
    missing: List[MissingConfigurationField] = []
    for field in CONFIGURATION_FIELDS:
        value = environ.get(env_var_name(field), "")
        if explicit.get(field) is not None:
            value = explicit[field]
        if not value:
            missing.append(_missing_field(field))
        values[field] = value

    if missing:
        raise SalesforceConfigurationError(missing)

    return SalesforceProviderConfiguration(**values)
