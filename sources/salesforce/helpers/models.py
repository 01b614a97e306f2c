"""Models for the payloads exchanged with the Salesforce REST API.

Decoding is tolerant: unknown keys are ignored and missing or null strings
decode to empty strings, so partial payloads never fail validation.
"""
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TokenResponse(BaseModel):
    """Body returned by the OAuth2 token endpoint."""

    model_config = ConfigDict(extra="ignore")

    access_token: str = ""
    token_type: str = ""

    @field_validator("access_token", "token_type", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class DescriptionField(BaseModel):
    """A single field of a described object.

    Attributes:
        name: API name of the field, e.g. `OwnerId`
        label: Display label, e.g. `Owner ID`
        type: Salesforce field type, e.g. `reference`
    """

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    label: str = ""
    type: str = ""  # noqa: A003

    @field_validator("name", "label", "type", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class Description(BaseModel):
    """Metadata of a Salesforce object as returned by the describe endpoint.

    Attributes:
        name: API name of the object
        label: Display label of the object
        fields: Fields of the object, in the order the API returned them
    """

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    label: str = ""
    fields: List[DescriptionField] = Field(default_factory=list)

    @field_validator("name", "label", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("fields", mode="before")
    @classmethod
    def _null_to_no_fields(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()
