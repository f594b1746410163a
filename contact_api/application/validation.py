"""Declarative request schemas and the service that applies them."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Type, TypeVar, Union

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..domain.errors import ServiceError

logger = logging.getLogger(__name__)


class _Schema(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", strict=True)


class RegisterUserRequest(_Schema):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=100)
    name: str = Field(min_length=1, max_length=100)


class LoginUserRequest(_Schema):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=100)


class UpdateUserRequest(_Schema):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    password: Optional[str] = Field(default=None, min_length=1, max_length=100)

    @field_validator("name", "password", mode="before")
    @classmethod
    def check_not_null(cls, value: Any) -> Any:
        # May be omitted, but a present key must carry a value.
        if value is None:
            raise ValueError("must not be null")
        return value


class CreateContactRequest(_Schema):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, min_length=1, max_length=20)

    @field_validator("last_name", "email", "phone", mode="before")
    @classmethod
    def check_not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("must not be null")
        return value

    @field_validator("email")
    @classmethod
    def check_email(cls, value: Optional[str]) -> Optional[str]:
        """Accept a bare address only and keep it exactly as sent."""
        if value is not None:
            try:
                validate_email(value, check_deliverability=False)
            except EmailNotValidError as exc:
                raise ValueError(str(exc)) from exc
        return value


class UpdateContactRequest(CreateContactRequest):
    id: int = Field(gt=0)


class SearchContactRequest(_Schema):
    # Query-string values arrive as text.
    model_config = ConfigDict(strict=False)

    name: Optional[str] = Field(default=None, max_length=100)
    email: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=20)
    page: int = Field(default=1, ge=1)
    size: int = Field(default=10, ge=1, le=100)


class UserValidation:
    REGISTER = RegisterUserRequest
    LOGIN = LoginUserRequest
    UPDATE = UpdateUserRequest


class ContactValidation:
    CREATE = CreateContactRequest
    UPDATE = UpdateContactRequest
    SEARCH = SearchContactRequest


SCHEMAS: Dict[str, Type[BaseModel]] = {
    "user.register": UserValidation.REGISTER,
    "user.login": UserValidation.LOGIN,
    "user.update": UserValidation.UPDATE,
    "contact.create": ContactValidation.CREATE,
    "contact.update": ContactValidation.UPDATE,
    "contact.search": ContactValidation.SEARCH,
}

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class ValidationService:
    """Applies a named schema to an untrusted payload."""

    def validate(self, schema: Union[str, Type[SchemaT]], payload: Any) -> SchemaT:
        """
        Validate ``payload`` against ``schema``.

        Args:
            schema: Schema class or its registered operation name
            payload: Decoded request body or query mapping

        Returns:
            The validated, immutable schema instance

        Raises:
            ServiceError: kind VALIDATION, whatever the underlying cause
        """
        model = SCHEMAS[schema] if isinstance(schema, str) else schema
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            logger.debug("%s rejected payload: %s", model.__name__, exc.errors(include_input=False))
            raise ServiceError.validation(exc.errors(include_input=False)) from exc
