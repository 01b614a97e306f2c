"""Salesforce source settings and constants"""

# Timeouts in seconds for the token exchange and for describe calls
DEFAULT_AUTH_TIMEOUT = 5.0
DEFAULT_REQUEST_TIMEOUT = 10.0

ENV_PREFIX = "SALESFORCE_"

DESCRIBE_ENDPOINT = "{api_host}/services/data/{api_version}/sobjects/{object_name}/describe"

# Value of the `id` column on every description item
PLACEHOLDER_ID = "placeholder"

# Order in which configuration fields are resolved and reported
CONFIGURATION_FIELDS = (
    "api_host",
    "api_version",
    "auth_host",
    "client_id",
    "client_secret",
    "grant_type",
    "username",
    "password",
)

# Human readable names used in configuration error messages
CONFIGURATION_FIELD_TITLES = {
    "api_host": "API Host",
    "api_version": "API Version",
    "auth_host": "Auth Host",
    "client_id": "Client ID",
    "client_secret": "Client Secret",
    "grant_type": "Grant Type",
    "username": "Username",
    "password": "Password",
}

SECRET_FIELDS = ("client_id", "client_secret", "password")

# dlt config section holding the settings, e.g. [sources.salesforce] in secrets.toml
PROVIDER_SECTION = "sources.salesforce"
