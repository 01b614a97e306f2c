from typing import NamedTuple, Optional, Sequence


class SalesforceClientError(Exception):
    pass


class MissingConfigurationField(NamedTuple):
    field: str
    env_var: str
    title: str
    detail: str


class SalesforceConfigurationError(SalesforceClientError):
    def __init__(self, missing: Sequence[MissingConfigurationField]) -> None:
        self.missing = list(missing)
        msg = "The provider cannot create the Salesforce API client. " + " ".join(
            f"{m.title}: {m.detail}" for m in self.missing
        )
        super().__init__(msg)

    @property
    def missing_fields(self) -> Sequence[str]:
        return [m.field for m in self.missing]


class SalesforceAuthenticationError(SalesforceClientError):
    def __init__(
        self, auth_host: str, status_code: Optional[int], body: str, msg: str = ""
    ) -> None:
        self.auth_host = auth_host
        self.status_code = status_code
        self.body = body
        msg = (
            f'Failed to obtain a bearer token from "{auth_host}". '
            + (msg or f"status: {status_code}, body: {body}")
        )
        super().__init__(msg)


class SalesforceRequestError(SalesforceClientError):
    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"status: {status_code}, body: {body}")


class SalesforceDecodeError(SalesforceClientError):
    def __init__(self, object_name: str, msg: str = "") -> None:
        self.object_name = object_name
        msg = f'Failed decoding the description of "{object_name}". ' + msg
        super().__init__(msg)
