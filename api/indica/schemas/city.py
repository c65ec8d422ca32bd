from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from indica.models.city import REGIOES, UFS


def validar_uf(valor: str) -> str:
    uf = valor.strip().upper()
    if uf not in UFS:
        raise ValueError('UF inválida.')
    return uf


class CityCreate(BaseModel):
    name: str = Field(min_length=2, max_length=120)
    state: str = Field(min_length=2, max_length=2)
    ibge_code: str | None = Field(default=None, pattern=r'^\d{7}$')
    is_capital: bool = False
    region: str | None = None
    population: int | None = Field(default=None, ge=0)

    @field_validator('state')
    @classmethod
    def validate_state(cls, valor: str) -> str:
        return validar_uf(valor)

    @field_validator('region')
    @classmethod
    def validate_region(cls, valor: str | None) -> str | None:
        if valor is not None and valor not in REGIOES:
            raise ValueError('Região inválida.')
        return valor

    @field_validator('name')
    @classmethod
    def validate_name(cls, valor: str) -> str:
        return valor.strip()


class CityFindOrCreate(BaseModel):
    name: str = Field(min_length=2, max_length=120)
    state: str = Field(min_length=2, max_length=2)

    @field_validator('state')
    @classmethod
    def validate_state(cls, valor: str) -> str:
        return validar_uf(valor)

    @field_validator('name')
    @classmethod
    def validate_name(cls, valor: str) -> str:
        return valor.strip()


class CityOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    state: str
    ibge_code: str | None
    is_capital: bool
    region: str | None
    population: int | None
    is_active: bool
    created_at: datetime
