# helpdesk/accounts/schemas.py
from pydantic import BaseModel, Field


class RoleOut(BaseModel):
    role_id: int
    role_name: str

    model_config = {"from_attributes": True}


class AccountOut(BaseModel):
    account_id: int
    username: str
    role_id: int

    model_config = {"from_attributes": True}


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: str
