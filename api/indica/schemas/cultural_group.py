from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from indica.models.cultural_group import GroupRoleEnum
from indica.schemas.common import PaginacaoOut
from indica.schemas.endereco import Endereco
from indica.schemas.user import validar_email


class RedesSociais(BaseModel):
    facebook: str | None = None
    instagram: str | None = None
    youtube: str | None = None
    other: str | None = None


class CulturalGroupCreate(BaseModel):
    name: str = Field(min_length=2, max_length=255)
    description: str = Field(min_length=1, max_length=2000)
    founding_date: date
    cultural_area: list[str] = Field(min_length=1)
    address: Endereco
    contact_email: str = Field(min_length=3, max_length=255)
    contact_phone: str = Field(min_length=8, max_length=20)
    social_media: RedesSociais = Field(default_factory=RedesSociais)
    portfolio_links: list[str] = Field(default_factory=list)
    achievements: list[str] = Field(default_factory=list)

    @field_validator('contact_email')
    @classmethod
    def validate_contact_email(cls, valor: str) -> str:
        return validar_email(valor)


class CulturalGroupUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=255)
    description: str | None = Field(default=None, min_length=1, max_length=2000)
    founding_date: date | None = None
    cultural_area: list[str] | None = None
    address: Endereco | None = None
    contact_email: str | None = Field(default=None, min_length=3, max_length=255)
    contact_phone: str | None = Field(default=None, min_length=8, max_length=20)
    social_media: RedesSociais | None = None
    portfolio_links: list[str] | None = None
    achievements: list[str] | None = None

    @field_validator('contact_email')
    @classmethod
    def validate_contact_email(cls, valor: str | None) -> str | None:
        return validar_email(valor) if valor is not None else None


class MemberAdd(BaseModel):
    user_id: int
    role: GroupRoleEnum = GroupRoleEnum.member


class MemberRoleUpdate(BaseModel):
    role: GroupRoleEnum


class GroupDocumentCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    type: str | None = Field(default=None, max_length=100)
    path: str = Field(min_length=1, max_length=500)

    @field_validator('path')
    @classmethod
    def validate_path(cls, valor: str) -> str:
        # Arquivos do próprio storage só entram pela rota de upload.
        valor = valor.strip()
        if valor.startswith(('http://', 'https://')):
            return valor
        if valor.startswith('/uploads/') and '..' not in valor.split('/') and '\\' not in valor:
            return valor
        raise ValueError('Caminho de documento inválido')


class GroupMemberOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    role: GroupRoleEnum
    joined_at: datetime


class GroupDocumentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    type: str | None
    path: str
    uploaded_by: int | None
    uploaded_at: datetime


class CulturalGroupOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    founding_date: date
    cultural_area: list[str]
    address: dict
    contact_email: str
    contact_phone: str
    social_media: dict
    portfolio_links: list[str]
    achievements: list[str]
    is_active: bool
    created_by: int | None
    members: list[GroupMemberOut]
    documents: list[GroupDocumentOut]
    created_at: datetime
    updated_at: datetime


class CulturalGroupListOut(BaseModel):
    groups: list[CulturalGroupOut]
    pagination: PaginacaoOut
