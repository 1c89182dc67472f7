"""
Base Schema Models for the Reseller SDK

This module defines the base model every other schema inherits from and the
small value types returned by SDK operations.

Core Classes:
    - SDKModel: Pydantic base model with alias population and dict export
    - Credentials: Bearer token and user secret pair
    - ValidationResult: Cleaned parameters or a field -> message error map

Dependencies:
    - pydantic: For data validation and serialization
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, JsonValue, TypeAdapter, model_validator


# Decoded API responses: Null | Bool | Number | String | Array | Object
json_adapter: TypeAdapter[JsonValue] = TypeAdapter(JsonValue)


class SDKModel(BaseModel):
    """
    Pydantic base model shared by the SDK schemas.

    Fields may be populated either by name or by alias, so the same model
    reads camelCase settings files and snake_case keyword arguments.
    """

    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self, by_alias: bool = False) -> Dict[str, Any]:
        """
        Convert model to dictionary representation.

        Args:
            by_alias: Use field aliases (e.g. ``bearerToken``) as keys.

        Returns:
            Dict[str, Any]: Dictionary with all model fields.
        """
        return self.model_dump(by_alias=by_alias)


class Credentials(SDKModel):
    """
    Bearer token and user secret of an authenticated reseller.

    An empty ``bearer_token`` means the session is unauthenticated. The
    ``user_secret`` is the key the API uses to sign order callbacks.

    Attributes:
        bearer_token: Token sent as ``Authorization: Bearer <token>``.
        user_secret: Shared secret for callback signature verification.
    """

    bearer_token: str = Field(default="", alias="bearerToken")
    user_secret: str = Field(default="", alias="userSecret")


class ValidationResult(SDKModel):
    """
    Outcome of validating an operation's parameters.

    Either ``data`` holds the cleaned parameters or ``errors`` holds one
    message per failing field, never both: as soon as one error exists the
    cleaned parameters are discarded.

    Attributes:
        data: Cleaned field -> value mapping.
        errors: Field -> error message mapping.
    """

    data: Dict[str, Any] = Field(default_factory=dict)
    errors: Dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _discard_data_on_error(self) -> "ValidationResult":
        if self.errors:
            self.data = {}
        return self

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        """
        Wire-compatible shape: the cleaned map, or ``{"errors": {...}}``.
        """
        if self.errors:
            return {"errors": dict(self.errors)}
        return dict(self.data)
