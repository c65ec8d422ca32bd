from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from indica.core.rbac import require_roles
from indica.db.session import get_db
from indica.models.application import Application, ApplicationStatusEnum
from indica.models.auditlog import AuditLog
from indica.models.notice import Notice
from indica.models.user import RoleEnum, User
from indica.schemas.reports import (
    STATUS_INSCRICAO_LABELS,
    AuditLogOut,
    ResumoInscricoesOut,
    StatusContagemOut,
)

router = APIRouter(prefix='/api', tags=['Relatórios'])


@router.get('/logs', response_model=list[AuditLogOut])
def listar_logs(
    entidade: str | None = Query(default=None),
    entidade_id: int | None = Query(default=None),
    notice_id: int | None = Query(default=None),
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(RoleEnum.admin)),
) -> list[AuditLogOut]:
    query = select(AuditLog).order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
    if entidade:
        query = query.where(AuditLog.entidade == entidade)
    if entidade_id:
        query = query.where(AuditLog.entidade_id == entidade_id)
    if notice_id:
        query = query.where(AuditLog.notice_id == notice_id)
    return list(db.scalars(query.limit(limit)).all())


@router.get('/reports/notices/{notice_id}/applications-summary', response_model=ResumoInscricoesOut)
def resumo_inscricoes(
    notice_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(RoleEnum.admin)),
) -> ResumoInscricoesOut:
    notice = db.get(Notice, notice_id)
    if not notice:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Edital não encontrado')

    rows = db.execute(
        select(Application.status, func.count(Application.id), func.coalesce(func.sum(Application.requested_amount), 0))
        .where(Application.notice_id == notice_id)
        .group_by(Application.status)
    ).all()
    contagem = {status_atual: (quantidade, valor) for status_atual, quantidade, valor in rows}

    por_status = [
        StatusContagemOut(
            status=status_inscricao,
            label=STATUS_INSCRICAO_LABELS[status_inscricao],
            quantidade=contagem.get(status_inscricao, (0, 0))[0],
        )
        for status_inscricao in ApplicationStatusEnum
    ]
    return ResumoInscricoesOut(
        notice_id=notice.id,
        titulo=notice.title,
        total=sum(quantidade for quantidade, _ in contagem.values()),
        valor_total_solicitado=float(sum(valor for _, valor in contagem.values())),
        por_status=por_status,
    )
