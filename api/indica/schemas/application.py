from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from indica.models.application import ApplicationStatusEnum
from indica.models.notice import NoticeStatusEnum
from indica.schemas.common import PaginacaoOut


class DocumentoInscricao(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    path: str = Field(min_length=1)
    uploaded_at: datetime | None = None


class ApplicationCreate(BaseModel):
    notice_id: int
    project_name: str = Field(min_length=3, max_length=255)
    project_description: str = Field(min_length=1)
    requested_amount: float = Field(gt=0)
    form_data: dict = Field(default_factory=dict)
    documents: list[DocumentoInscricao] = Field(default_factory=list)


class ApplicationUpdate(BaseModel):
    project_name: str | None = Field(default=None, min_length=3, max_length=255)
    project_description: str | None = Field(default=None, min_length=1)
    requested_amount: float | None = Field(default=None, gt=0)
    form_data: dict | None = None
    documents: list[DocumentoInscricao] | None = None


class NoticeResumoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    start_date: datetime
    end_date: datetime
    status: NoticeStatusEnum


class ApplicationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    notice_id: int
    user_id: int
    notice: NoticeResumoOut | None = None
    project_name: str
    project_description: str
    requested_amount: float
    status: ApplicationStatusEnum
    form_data: dict
    documents: list
    evaluations: list
    submitted_at: datetime | None
    created_at: datetime
    updated_at: datetime


class ApplicationListOut(BaseModel):
    applications: list[ApplicationOut]
    pagination: PaginacaoOut
