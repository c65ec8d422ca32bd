from pydantic import BaseModel, Field

from indica.schemas.user import UserOut


class LoginRequest(BaseModel):
    cpf_cnpj: str = Field(min_length=1, max_length=18)
    password: str = Field(min_length=1)


class PasswordUpdate(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6, max_length=128)


class TokenResponse(BaseModel):
    message: str
    token: str
    token_type: str = 'bearer'
    user: UserOut
