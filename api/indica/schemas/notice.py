from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from indica.models.notice import NoticeStatusEnum
from indica.schemas.common import PaginacaoOut
from indica.schemas.entity import EntityResumoOut


class CriterioAvaliacao(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    weight: float = Field(ge=0, le=10)
    description: str = Field(min_length=1)


class Cotas(BaseModel):
    race: float = Field(default=0, ge=0, le=100)
    indigenous: float = Field(default=0, ge=0, le=100)
    disability: float = Field(default=0, ge=0, le=100)


class Acessibilidade(BaseModel):
    architectural: list[str] = Field(default_factory=list)
    communicational: list[str] = Field(default_factory=list)
    attitudinal: list[str] = Field(default_factory=list)


class Etapa(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    start_date: date
    end_date: date
    description: str | None = None


class PrazosRecurso(BaseModel):
    habilitation_days: int = Field(default=0, ge=0)
    result_days: int = Field(default=0, ge=0)


class DocumentoHabilitacao(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    required: bool = True


class NoticeCreate(BaseModel):
    title: str = Field(min_length=3, max_length=255)
    description: str = Field(min_length=1)
    entity_id: int
    city_id: int
    start_date: datetime
    end_date: datetime
    total_amount: float = Field(gt=0)
    min_application_value: float = Field(ge=0)
    max_application_value: float = Field(ge=0)
    status: NoticeStatusEnum = NoticeStatusEnum.draft
    categories: list[str] = Field(default_factory=list)
    requirements: list[str] = Field(default_factory=list)
    documents: list[str] = Field(default_factory=list)
    evaluation_criteria: list[CriterioAvaliacao] = Field(default_factory=list)
    quotas: Cotas = Field(default_factory=Cotas)
    accessibility: Acessibilidade = Field(default_factory=Acessibilidade)
    stages: list[Etapa] = Field(default_factory=list)
    appeal_periods: PrazosRecurso = Field(default_factory=PrazosRecurso)
    habilitation_documents: list[DocumentoHabilitacao] = Field(default_factory=list)


class NoticeUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=3, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    entity_id: int | None = None
    city_id: int | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    total_amount: float | None = Field(default=None, gt=0)
    min_application_value: float | None = Field(default=None, ge=0)
    max_application_value: float | None = Field(default=None, ge=0)
    categories: list[str] | None = None
    requirements: list[str] | None = None
    documents: list[str] | None = None
    evaluation_criteria: list[CriterioAvaliacao] | None = None
    quotas: Cotas | None = None
    accessibility: Acessibilidade | None = None
    stages: list[Etapa] | None = None
    appeal_periods: PrazosRecurso | None = None
    habilitation_documents: list[DocumentoHabilitacao] | None = None


class NoticeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    entity_id: int
    city_id: int
    entity: EntityResumoOut | None = None
    start_date: datetime
    end_date: datetime
    total_amount: float
    min_application_value: float
    max_application_value: float
    status: NoticeStatusEnum
    categories: list[str]
    requirements: list
    documents: list
    evaluation_criteria: list
    quotas: dict
    accessibility: dict
    stages: list
    appeal_periods: dict
    habilitation_documents: list
    budget: dict
    created_at: datetime
    updated_at: datetime


class NoticeListOut(BaseModel):
    notices: list[NoticeOut]
    pagination: PaginacaoOut
