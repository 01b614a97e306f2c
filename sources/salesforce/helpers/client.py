"""Salesforce REST API client.

Authentication happens once: the client exchanges OAuth2 password grant
credentials for a bearer token when it is constructed and sends that token
verbatim with every request. There is no refresh; an expired token surfaces
as a `SalesforceRequestError` on the next call.
"""
from dataclasses import dataclass
from typing import Optional

import requests
from requests.auth import AuthBase

from dlt.common import logger
from dlt.sources.helpers.requests import Session
from dlt.sources.helpers.requests.retry import Client

from ..exceptions import (
    SalesforceAuthenticationError,
    SalesforceClientError,
    SalesforceDecodeError,
    SalesforceRequestError,
)
from ..settings import DEFAULT_AUTH_TIMEOUT, DEFAULT_REQUEST_TIMEOUT, DESCRIBE_ENDPOINT
from .credentials import SalesforceCredentials, SalesforceProviderConfiguration
from .models import Description, TokenResponse


class BearerTokenAuth(AuthBase):
    def __init__(self, token: str):
        self.token = token

    def __call__(self, request):
        request.headers["Authorization"] = f"Bearer {self.token}"
        return request


def create_http_session() -> Session:
    """Returns a session that sends every request exactly once and never raises on status."""
    return Client(
        request_max_attempts=1,
        raise_for_status=False,
        status_codes=(),
        exceptions=(),
    ).session


@dataclass(frozen=True)
class SalesforceSession:
    """Everything an authenticated call needs. Never changes after login."""

    api_host: str
    api_version: str
    bearer_token: str = ""
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @property
    def auth(self) -> BearerTokenAuth:
        return BearerTokenAuth(self.bearer_token)


def acquire_token(
    credentials: SalesforceCredentials,
    timeout: float = DEFAULT_AUTH_TIMEOUT,
    http: Optional[Session] = None,
) -> str:
    """Exchanges password grant credentials for a bearer token.

    The credentials are posted as a multipart form to `credentials.auth_host`.

    Args:
        credentials: A complete set of credentials.
        timeout: Request timeout in seconds.
        http: Session to send the request with. A new single attempt session is used if not given.

    Raises:
        SalesforceAuthenticationError: If the endpoint does not answer with 200 and
            a JSON body containing an `access_token`.
        requests.RequestException: On transport failures.

    Returns:
        str: The access token.
    """
    # (None, value) tuples make requests encode plain form fields, not file parts
    files = {name: (None, value) for name, value in credentials.to_form().items()}

    logger.info(f"Requesting Salesforce bearer token from {credentials.auth_host}")
    http = http if http is not None else create_http_session()
    response = http.post(credentials.auth_host, files=files, timeout=timeout)

    if response.status_code != 200:
        logger.warning(
            f"Token request failed with status: {response.status_code}, body: {response.text}"
        )
        raise SalesforceAuthenticationError(
            credentials.auth_host, response.status_code, response.text
        )

    try:
        token = TokenResponse.model_validate(response.json())
    except ValueError as exc:
        logger.warning(f"Could not decode token response: {exc}")
        raise SalesforceAuthenticationError(
            credentials.auth_host,
            response.status_code,
            response.text,
            msg=f"Could not decode the token response: {exc}",
        ) from exc

    if not token.access_token:
        logger.warning(f"Token response has no access_token, body: {response.text}")
        raise SalesforceAuthenticationError(
            credentials.auth_host,
            response.status_code,
            response.text,
            msg="The token response does not contain an access_token.",
        )
    return token.access_token


def describe_url(api_host: str, api_version: str, object_name: str) -> str:
    return DESCRIBE_ENDPOINT.format(
        api_host=api_host, api_version=api_version, object_name=object_name
    )


def describe(
    session: SalesforceSession,
    object_name: str,
    http: Optional[Session] = None,
) -> Description:
    """Fetches the description (name, label and fields) of a Salesforce object.

    Args:
        session: The authenticated session to use.
        object_name: API name of the object, forwarded into the URL as is.
        http: Session to send the request with. A new single attempt session is used if not given.

    Raises:
        SalesforceRequestError: If the API answers with anything but 200.
        SalesforceDecodeError: If the body is not a description.
        requests.RequestException: On transport failures.

    Returns:
        Description: The decoded description.
    """
    url = describe_url(session.api_host, session.api_version, object_name)

    logger.info(f"Making GET request to {url}")
    http = http if http is not None else create_http_session()
    response = http.get(url, auth=session.auth, timeout=session.request_timeout)

    if response.status_code != 200:
        logger.warning(
            f"Describe of {object_name} failed with status: {response.status_code}"
        )
        raise SalesforceRequestError(response.status_code, response.text)

    try:
        return Description.model_validate(response.json())
    except ValueError as exc:
        raise SalesforceDecodeError(object_name, str(exc)) from exc


class SalesforceClient:
    """A Salesforce REST API client.

    The client logs in once, on construction, and is read only afterwards, so a
    single instance may be shared between threads.

    Attributes:
        http: The requests session all calls go through.
        session: The post login state (host, version, token, timeout).
    """

    def __init__(
        self,
        api_host: str,
        api_version: str,
        credentials: Optional[SalesforceCredentials] = None,
        auth_timeout: float = DEFAULT_AUTH_TIMEOUT,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        http: Optional[Session] = None,
    ) -> None:
        """
        Args:
            api_host: Base URL of the Salesforce instance, e.g. https://xyz.my.salesforce.com
            api_version: API version, e.g. v59.0
            credentials: Password grant credentials. If missing or incomplete no login
                happens and requests are sent with an empty bearer token.
            auth_timeout: Timeout in seconds of the token request.
            request_timeout: Timeout in seconds of describe requests.
            http: Optional requests session, e.g. to set proxies.
        """
        self.http = http if http is not None else create_http_session()

        bearer_token = ""
        if credentials is not None and credentials.has_all_fields():
            bearer_token = acquire_token(credentials, timeout=auth_timeout, http=self.http)
        else:
            logger.info("Salesforce credentials not provided, skipping login")

        self._session = SalesforceSession(
            api_host=api_host,
            api_version=api_version,
            bearer_token=bearer_token,
            request_timeout=request_timeout,
        )

    @property
    def session(self) -> SalesforceSession:
        return self._session

    @property
    def bearer_token(self) -> str:
        return self._session.bearer_token

    @property
    def is_authenticated(self) -> bool:
        return bool(self._session.bearer_token)

    def get_description(self, object_name: str) -> Description:
        """Returns the description of a single object."""
        return describe(self._session, object_name, http=self.http)


def configure_client(
    configuration: SalesforceProviderConfiguration,
    auth_timeout: float = DEFAULT_AUTH_TIMEOUT,
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
    http: Optional[Session] = None,
) -> SalesforceClient:
    """Creates a logged in client from resolved settings.

    Transport failures during login are re-raised as `SalesforceClientError`,
    chained to the original exception.
    """
    logger.info("Configuring Salesforce client")
    logger.debug(f"Creating Salesforce client with {configuration.masked()}")

    try:
        client = SalesforceClient(
            api_host=configuration.api_host,
            api_version=configuration.api_version,
            credentials=configuration.credentials(),
            auth_timeout=auth_timeout,
            request_timeout=request_timeout,
            http=http,
        )
    except requests.RequestException as exc:
        raise SalesforceClientError(
            "Unable to Create Salesforce API Client. "
            "An unexpected error occurred when creating the Salesforce API client. "
            f"Salesforce Client Error: {exc}"
        ) from exc

    logger.info("Configured Salesforce client")
    return client
