"""Car inventory schemas."""

from datetime import datetime
from typing import Any

from pydantic import (
    AliasChoices,
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError

_IMAGE_URL_ALIASES = AliasChoices("imageUrl", "image_url")
_URL_ADAPTER = TypeAdapter(AnyUrl)


def _reject_bool(value: Any) -> Any:
    # JSON true/false would otherwise be coerced to 1.0/0.0
    if isinstance(value, bool):
        raise ValueError("Input should be a number, not a boolean")
    return value


def _check_url(value: str | None) -> str | None:
    # Validate as a URL but keep the caller's spelling; AnyUrl normalizes
    if value is None:
        return value
    try:
        _URL_ADAPTER.validate_python(value)
    except PydanticValidationError as e:
        raise ValueError("Input should be an absolute URL") from e
    return value


class CarCreate(BaseModel):
    """Add a car to the inventory."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., ge=0, allow_inf_nan=False)
    mileage: float = Field(..., ge=0, allow_inf_nan=False)
    color: str = Field(..., min_length=1, max_length=50)
    image_url: str = Field(..., max_length=2048, validation_alias=_IMAGE_URL_ALIASES)

    @field_validator("price", "mileage", mode="before")
    @classmethod
    def numbers_only(cls, value: Any) -> Any:
        return _reject_bool(value)

    @field_validator("image_url")
    @classmethod
    def absolute_url(cls, value: str | None) -> str | None:
        return _check_url(value)


class CarUpdate(BaseModel):
    """Partial update of a car. Omitted fields are left unchanged."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, min_length=1, max_length=255)
    price: float | None = Field(None, ge=0, allow_inf_nan=False)
    mileage: float | None = Field(None, ge=0, allow_inf_nan=False)
    color: str | None = Field(None, min_length=1, max_length=50)
    image_url: str | None = Field(None, max_length=2048, validation_alias=_IMAGE_URL_ALIASES)

    @field_validator("price", "mileage", mode="before")
    @classmethod
    def numbers_only(cls, value: Any) -> Any:
        return _reject_bool(value)

    @field_validator("image_url")
    @classmethod
    def absolute_url(cls, value: str | None) -> str | None:
        return _check_url(value)

    @field_validator("*")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Field may not be null")
        return value


class CarFilter(BaseModel):
    """Inventory query filters. Every supplied filter narrows the result (AND)."""

    max_price: float | None = Field(None, ge=0, allow_inf_nan=False)
    max_mileage: float | None = Field(None, ge=0, allow_inf_nan=False)
    color: str | None = Field(None, max_length=50)

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        # The inventory form submits empty strings for unused filters
        if isinstance(value, str) and not value.strip():
            return None
        return value


class CarResponse(BaseModel):
    """Car response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    price: float
    mileage: float
    color: str
    image_url: str = Field(..., validation_alias=_IMAGE_URL_ALIASES, serialization_alias="imageUrl")
    created_at: datetime
    updated_at: datetime


class CarMutationResponse(BaseModel):
    message: str
    car: CarResponse
