from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from indica.models.cultural_event import CATEGORIAS_EVENTO, TIPOS_EVENTO, EventStatusEnum
from indica.schemas.city import validar_uf


def validar_tipo_evento(valor: str) -> str:
    if valor not in TIPOS_EVENTO:
        raise ValueError('Tipo de evento inválido')
    return valor


def validar_categoria_evento(valor: str) -> str:
    if valor not in CATEGORIAS_EVENTO:
        raise ValueError('Categoria de evento inválida')
    return valor


class CulturalEventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1, max_length=5000)
    start_date: datetime
    end_date: datetime
    city: str = Field(min_length=1, max_length=120)
    state: str
    event_type: str
    category: str
    status: EventStatusEnum = EventStatusEnum.upcoming
    address: str | None = Field(default=None, max_length=255)
    website: str | None = Field(default=None, max_length=500)
    contact_info: str | None = Field(default=None, max_length=255)
    image_url: str | None = Field(default=None, max_length=500)

    @field_validator('state')
    @classmethod
    def validate_state(cls, valor: str) -> str:
        return validar_uf(valor)

    @field_validator('event_type')
    @classmethod
    def validate_event_type(cls, valor: str) -> str:
        return validar_tipo_evento(valor)

    @field_validator('category')
    @classmethod
    def validate_category(cls, valor: str) -> str:
        return validar_categoria_evento(valor)


class CulturalEventUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1, max_length=5000)
    start_date: datetime | None = None
    end_date: datetime | None = None
    city: str | None = Field(default=None, min_length=1, max_length=120)
    state: str | None = None
    event_type: str | None = None
    category: str | None = None
    status: EventStatusEnum | None = None
    address: str | None = Field(default=None, max_length=255)
    website: str | None = Field(default=None, max_length=500)
    contact_info: str | None = Field(default=None, max_length=255)
    image_url: str | None = Field(default=None, max_length=500)

    @field_validator('state')
    @classmethod
    def validate_state(cls, valor: str | None) -> str | None:
        return validar_uf(valor) if valor is not None else None

    @field_validator('event_type')
    @classmethod
    def validate_event_type(cls, valor: str | None) -> str | None:
        return validar_tipo_evento(valor) if valor is not None else None

    @field_validator('category')
    @classmethod
    def validate_category(cls, valor: str | None) -> str | None:
        return validar_categoria_evento(valor) if valor is not None else None


class CulturalEventOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    start_date: datetime
    end_date: datetime
    city: str
    state: str
    event_type: str
    category: str
    status: EventStatusEnum
    created_by: int
    address: str | None
    website: str | None
    contact_info: str | None
    image_url: str | None
    created_at: datetime
    updated_at: datetime
