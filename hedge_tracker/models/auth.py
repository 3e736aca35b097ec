from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LoginIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId", min_length=1)
    password: str = Field(..., min_length=1)


class RegisterIn(LoginIn):
    password: str = Field(..., min_length=8)


class TokenOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    token: str
    user_id: str = Field(..., alias="userId")
    token_type: str = Field("bearer", alias="tokenType")
