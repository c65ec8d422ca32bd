import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from indica.models.user import RoleEnum

_TELEFONE_RE = re.compile(r'^\(\d{2}\) \d{4,5}-\d{4}$')
_EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def normalizar_cpf_cnpj(valor: str) -> str:
    return re.sub(r'\D', '', valor or '')


def validar_cpf_cnpj(valor: str) -> str:
    digitos = normalizar_cpf_cnpj(valor)
    if len(digitos) not in (11, 14):
        raise ValueError('CPF deve ter 11 dígitos ou CNPJ 14 dígitos.')
    return digitos


def validar_telefone(valor: str) -> str:
    if not _TELEFONE_RE.match(valor):
        raise ValueError('Telefone deve estar no formato (99) 99999-9999.')
    return valor


def validar_email(valor: str) -> str:
    valor = valor.strip().lower()
    if not _EMAIL_RE.match(valor):
        raise ValueError('Email inválido.')
    return valor


class UserCreate(BaseModel):
    cpf_cnpj: str = Field(min_length=11, max_length=18)
    name: str = Field(min_length=2, max_length=100)
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=6, max_length=128)
    phone: str
    city_id: int | None = None

    @field_validator('cpf_cnpj')
    @classmethod
    def validate_cpf_cnpj(cls, valor: str) -> str:
        return validar_cpf_cnpj(valor)

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, valor: str) -> str:
        return validar_telefone(valor)

    @field_validator('email')
    @classmethod
    def validate_email(cls, valor: str) -> str:
        return validar_email(valor)


class ProfileUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=100)
    phone: str | None = None
    password: str | None = Field(default=None, min_length=6, max_length=128)
    city_id: int | None = None

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, valor: str | None) -> str | None:
        return validar_telefone(valor) if valor is not None else None


class UserAdminUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=100)
    email: str | None = Field(default=None, min_length=3, max_length=255)
    phone: str | None = None
    role: RoleEnum | None = None
    is_active: bool | None = None
    entity_id: int | None = None
    city_id: int | None = None

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, valor: str | None) -> str | None:
        return validar_telefone(valor) if valor is not None else None

    @field_validator('email')
    @classmethod
    def validate_email(cls, valor: str | None) -> str | None:
        return validar_email(valor) if valor is not None else None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    cpf_cnpj: str
    name: str
    email: str
    phone: str
    role: RoleEnum
    entity_id: int | None
    city_id: int | None
    is_active: bool
    created_at: datetime


class UserResumoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
