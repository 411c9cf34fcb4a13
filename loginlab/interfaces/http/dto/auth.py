from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError


def _not_blank(value: str, label: str) -> str:
    if not value.strip():
        raise PydanticCustomError("blank", "{label} must not be blank", {"label": label})
    return value


def _normalise_name(value: str, label: str) -> str:
    # Login ids and nicknames are stored stripped; login must strip the same way
    return _not_blank(value, label).strip()


class JoinRequestDTO(BaseModel):
    login_id: str = Field(alias="loginId", max_length=64)
    password: str = Field(max_length=128)
    password_check: str = Field(alias="passwordCheck", max_length=128)
    nickname: str = Field(max_length=64)

    model_config = ConfigDict(validate_by_name=True, str_strip_whitespace=False)

    @field_validator("login_id", "nickname")
    @classmethod
    def _strip_and_require(cls, value: str, info) -> str:
        return _normalise_name(value, info.field_name)

    @field_validator("password", "password_check")
    @classmethod
    def _require_password(cls, value: str, info) -> str:
        return _not_blank(value, info.field_name)


class LoginRequestDTO(BaseModel):
    login_id: str = Field(alias="loginId", max_length=64)
    password: str = Field(max_length=128)

    model_config = ConfigDict(validate_by_name=True)

    @field_validator("login_id")
    @classmethod
    def _strip_login_id(cls, value: str) -> str:
        return _normalise_name(value, "login_id")

    @field_validator("password")
    @classmethod
    def _require_password(cls, value: str) -> str:
        return _not_blank(value, "password")


class UserViewDTO(BaseModel):
    id: int
    login_id: str = Field(serialization_alias="loginId")
    nickname: str
    role: str


class PrincipalViewDTO(BaseModel):
    id: int
    display_name: str = Field(serialization_alias="displayName")
    role: str
    kind: str
    authorities: list[str]
    attributes: dict[str, object] = Field(default_factory=dict)


class AuthSuccessDTO(BaseModel):
    ok: bool = True
    login_type: str = Field(serialization_alias="loginType")
    nickname: str | None = None
