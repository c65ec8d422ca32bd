from typing import Any

from fastapi.encoders import jsonable_encoder
from sqlalchemy.orm import Session

from indica.models.auditlog import AcaoAuditEnum, AuditLog


def dump_model(model) -> dict:
    """Snapshot das colunas do registro, já serializado para a coluna JSON."""
    return jsonable_encoder({column.name: getattr(model, column.name) for column in model.__table__.columns})


def registrar_log(
    db: Session,
    entidade: str,
    entidade_id: int,
    acao: AcaoAuditEnum,
    created_by: int | None,
    old_value: dict | None = None,
    new_value: dict | None = None,
    notice_id: int | None = None,
) -> AuditLog:
    log = AuditLog(
        entidade=entidade,
        entidade_id=entidade_id,
        acao=acao,
        old_value=jsonable_encoder(old_value) if old_value is not None else None,
        new_value=jsonable_encoder(new_value) if new_value is not None else None,
        created_by=created_by,
        notice_id=notice_id,
    )
    db.add(log)
    return log


def registrar_mudanca_status(
    db: Session,
    entidade: str,
    entidade_id: int,
    campo: str,
    anterior: Any,
    novo: Any,
    created_by: int | None,
    notice_id: int | None = None,
    **detalhes: Any,
) -> AuditLog:
    # Transições de publicação, envio e ativação gravam só o campo alterado.
    return registrar_log(
        db,
        entidade=entidade,
        entidade_id=entidade_id,
        acao=AcaoAuditEnum.STATUS_CHANGE,
        created_by=created_by,
        old_value={campo: anterior},
        new_value={campo: novo, **detalhes},
        notice_id=notice_id,
    )
