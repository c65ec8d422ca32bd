from datetime import datetime

from pydantic import BaseModel, ConfigDict

from indica.models.application import ApplicationStatusEnum
from indica.models.auditlog import AcaoAuditEnum

STATUS_INSCRICAO_LABELS = {
    ApplicationStatusEnum.draft: 'Rascunho',
    ApplicationStatusEnum.submitted: 'Enviada',
    ApplicationStatusEnum.evaluation: 'Em Avaliação',
    ApplicationStatusEnum.approved: 'Aprovada',
    ApplicationStatusEnum.rejected: 'Reprovada',
}


class AuditLogOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    entidade: str
    entidade_id: int
    acao: AcaoAuditEnum
    old_value: dict | None
    new_value: dict | None
    created_by: int | None
    notice_id: int | None
    created_at: datetime


class StatusContagemOut(BaseModel):
    status: ApplicationStatusEnum
    label: str
    quantidade: int


class ResumoInscricoesOut(BaseModel):
    notice_id: int
    titulo: str
    total: int
    valor_total_solicitado: float
    por_status: list[StatusContagemOut]
