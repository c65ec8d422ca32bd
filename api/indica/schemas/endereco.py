from pydantic import BaseModel, Field, field_validator

from indica.schemas.city import validar_uf


class Endereco(BaseModel):
    street: str = Field(min_length=1)
    number: str = Field(min_length=1)
    complement: str | None = None
    neighborhood: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=2, max_length=2)
    zip_code: str = Field(pattern=r'^\d{5}-\d{3}$')

    @field_validator('state')
    @classmethod
    def validate_state(cls, valor: str) -> str:
        return validar_uf(valor)
