from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from indica.models.entity import EntityStatusEnum, EntityTypeEnum
from indica.schemas.user import validar_email

CNPJ_PATTERN = r'^\d{2}\.\d{3}\.\d{3}/\d{4}-\d{2}$'


class Representante(BaseModel):
    name: str = Field(min_length=2, max_length=150)
    cpf: str | None = None
    position: str | None = None
    email: str | None = None
    phone: str | None = None


class ConselhoCultural(BaseModel):
    law_number: str | None = None
    law_date: date | None = None
    last_election_date: date | None = None
    term_end_date: date | None = None
    members_count: int | None = Field(default=None, ge=0)
    is_active: bool = True


class FundoCultural(BaseModel):
    law_number: str | None = None
    law_date: date | None = None
    cnpj: str | None = None
    manager: str | None = None


class PlanoCultural(BaseModel):
    law_number: str | None = None
    start_date: date | None = None
    end_date: date | None = None


class DadosBancarios(BaseModel):
    bank: str
    agency: str
    account: str
    account_type: str | None = None


class DocumentoExigido(BaseModel):
    name: str
    path: str | None = None
    required: bool = True


class EntityCreate(BaseModel):
    name: str = Field(min_length=2, max_length=255)
    type: EntityTypeEnum
    cnpj: str = Field(pattern=CNPJ_PATTERN)
    address: str = Field(min_length=3)
    contact_email: str = Field(min_length=3, max_length=255)
    contact_phone: str = Field(min_length=8, max_length=20)
    city_id: int | None = None
    legal_representative: Representante | None = None
    technical_representative: Representante | None = None
    cultural_council: ConselhoCultural | None = None
    cultural_fund: FundoCultural | None = None
    cultural_plan: PlanoCultural | None = None
    bank_info: DadosBancarios | None = None
    required_documents: list[DocumentoExigido] = Field(default_factory=list)

    @field_validator('contact_email')
    @classmethod
    def validate_contact_email(cls, valor: str) -> str:
        return validar_email(valor)


class EntityUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=255)
    type: EntityTypeEnum | None = None
    address: str | None = Field(default=None, min_length=3)
    contact_email: str | None = Field(default=None, min_length=3, max_length=255)
    contact_phone: str | None = Field(default=None, min_length=8, max_length=20)
    city_id: int | None = None
    legal_representative: Representante | None = None
    technical_representative: Representante | None = None
    cultural_council: ConselhoCultural | None = None
    cultural_fund: FundoCultural | None = None
    cultural_plan: PlanoCultural | None = None
    bank_info: DadosBancarios | None = None
    required_documents: list[DocumentoExigido] | None = None

    @field_validator('contact_email')
    @classmethod
    def validate_contact_email(cls, valor: str | None) -> str | None:
        return validar_email(valor) if valor is not None else None


class EntityStatusUpdate(BaseModel):
    status: EntityStatusEnum


class EntityOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    type: EntityTypeEnum
    cnpj: str
    address: str
    contact_email: str
    contact_phone: str
    city_id: int | None
    legal_representative: dict | None
    technical_representative: dict | None
    cultural_council: dict | None
    cultural_fund: dict | None
    cultural_plan: dict | None
    bank_info: dict | None
    required_documents: list
    status: EntityStatusEnum
    is_active: bool
    created_at: datetime
    updated_at: datetime


class EntityResumoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    contact_email: str
    contact_phone: str
