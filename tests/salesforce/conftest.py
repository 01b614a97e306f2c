import json

import pytest
import requests_mock

from sources.salesforce.helpers.credentials import SalesforceCredentials

MOCK_API_HOST = "https://xyz.my.salesforce.com"
MOCK_API_VERSION = "v59.0"
MOCK_AUTH_HOST = "https://login.salesforce.com/services/oauth2/token"
MOCK_TOKEN = "XYZ"

TRAINING_COURSE = {
    "name": "test",
    "label": "Training Course",
    "fields": [
        {"name": "OwnerId", "label": "Owner ID", "type": "reference"},
        {"name": "Name", "label": "Course Name", "type": "string"},
    ],
}

PROVIDER_ENV = {
    "SALESFORCE_API_HOST": MOCK_API_HOST,
    "SALESFORCE_API_VERSION": MOCK_API_VERSION,
    "SALESFORCE_AUTH_HOST": MOCK_AUTH_HOST,
    "SALESFORCE_CLIENT_ID": "a",
    "SALESFORCE_CLIENT_SECRET": "b",
    "SALESFORCE_GRANT_TYPE": "password",
    "SALESFORCE_USERNAME": "u",
    "SALESFORCE_PASSWORD": "p",
}


def describe_url(object_name: str) -> str:
    return f"{MOCK_API_HOST}/services/data/{MOCK_API_VERSION}/sobjects/{object_name}/describe"


@pytest.fixture
def credentials() -> SalesforceCredentials:
    return SalesforceCredentials(
        auth_host=MOCK_AUTH_HOST,
        client_id="a",
        client_secret="b",
        grant_type="password",
        username="u",
        password="p",
    )


@pytest.fixture
def mock_salesforce():
    """Token endpoint issuing MOCK_TOKEN and a describe endpoint that only
    answers requests carrying that token."""
    with requests_mock.Mocker() as m:
        m.post(
            MOCK_AUTH_HOST,
            json={"access_token": MOCK_TOKEN, "token_type": "Bearer"},
        )

        def describe(request, context):
            if request.headers.get("Authorization") != f"Bearer {MOCK_TOKEN}":
                context.status_code = 401
                return json.dumps(
                    [{"message": "Session expired or invalid", "errorCode": "INVALID_SESSION_ID"}]
                )
            return json.dumps(TRAINING_COURSE)

        m.get(describe_url("test"), text=describe)
        m.get(
            describe_url("Missing"),
            status_code=404,
            text='{"error":"not found"}',
        )

        yield m
