"""Pydantic models for SecurePass request payloads and results."""

from __future__ import annotations

from typing import Any, Dict, Literal, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import InvalidRequestError

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 64
DEFAULT_PASSWORD_LENGTH = 16
MAX_BULK_COUNT = 1000

ModelT = TypeVar("ModelT", bound=BaseModel)


def clamp_length(length: Optional[int]) -> int:
    # 0 and None both fall back to the default length
    return min(max(length or DEFAULT_PASSWORD_LENGTH, MIN_PASSWORD_LENGTH), MAX_PASSWORD_LENGTH)


def clamp_count(count: int) -> int:
    return min(count, MAX_BULK_COUNT)


def build_model(model: Type[ModelT], data: Dict[str, Any]) -> ModelT:
    """Validate ``data`` into ``model``, reporting failures as InvalidRequestError."""
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        errors = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise InvalidRequestError(f"Invalid {model.__name__}: {errors}") from exc


class PasswordOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    length: Optional[int] = None
    include_uppercase: Optional[bool] = Field(None, alias="includeUppercase")
    include_lowercase: Optional[bool] = Field(None, alias="includeLowercase")
    include_numbers: Optional[bool] = Field(None, alias="includeNumbers")
    include_symbols: Optional[bool] = Field(None, alias="includeSymbols")

    @property
    def effective_length(self) -> int:
        return clamp_length(self.length)

    def to_payload(self) -> Dict[str, Any]:
        # an unset flag counts as enabled
        return {
            "length": self.effective_length,
            "includeUppercase": self.include_uppercase is not False,
            "includeLowercase": self.include_lowercase is not False,
            "includeNumbers": self.include_numbers is not False,
            "includeSymbols": self.include_symbols is not False,
        }


class BulkRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    count: int

    def to_params(self, options: PasswordOptions) -> Dict[str, int]:
        return {"count": clamp_count(self.count), "length": options.effective_length}


class TeamMemberAction(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    action: Literal["add_member", "remove_member", "update_role"]
    team_id: str = Field(..., min_length=1, alias="teamId")
    member_email: str = Field(..., min_length=1, alias="memberEmail")
    role: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class TeamQuery(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    team_id: str = Field(..., min_length=1, alias="teamId")

    def to_params(self) -> Dict[str, str]:
        return self.model_dump(by_alias=True)


class ConnectionStatus(BaseModel):
    success: bool
    message: str
    data: Any = None


__all__ = [
    "BulkRequest",
    "ConnectionStatus",
    "PasswordOptions",
    "TeamMemberAction",
    "TeamQuery",
    "build_model",
    "clamp_count",
    "clamp_length",
    "MAX_BULK_COUNT",
    "MAX_PASSWORD_LENGTH",
    "MIN_PASSWORD_LENGTH",
    "DEFAULT_PASSWORD_LENGTH",
]
