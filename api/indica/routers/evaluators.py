import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from indica.core.errors import DuplicateRecordError
from indica.core.rbac import require_roles, sem_permissao
from indica.core.security import get_current_user
from indica.db.session import get_db
from indica.models.auditlog import AcaoAuditEnum
from indica.models.entity import Entity
from indica.models.evaluator import Evaluator
from indica.models.user import RoleEnum, User
from indica.schemas.common import MensagemOut
from indica.schemas.evaluator import (
    EvaluatorAdminUpdate,
    EvaluatorCreate,
    EvaluatorOut,
    EvaluatorStatusUpdate,
    EvaluatorUpdate,
)
from indica.services.audit_logger import dump_model, registrar_log, registrar_mudanca_status
from indica.services.papeis import promover_a_parecerista, rebaixar_a_agente

router = APIRouter(prefix='/api/evaluators', tags=['Pareceristas'])
logger = structlog.get_logger(__name__)

MENSAGEM_PARECERISTA_DUPLICADO = 'Este usuário já é um parecerista'


def _buscar_parecerista(db: Session, evaluator_id: int) -> Evaluator:
    evaluator = db.get(Evaluator, evaluator_id)
    if not evaluator:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Parecerista não encontrado')
    return evaluator


@router.get('', response_model=list[EvaluatorOut])
def listar_pareceristas(
    entity_id: int | None = Query(default=None),
    specialty: str | None = Query(default=None),
    active: bool | None = Query(default=None),
    q: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[EvaluatorOut]:
    stmt = select(Evaluator).join(Evaluator.user).options(joinedload(Evaluator.user))
    if entity_id is not None:
        stmt = stmt.where(Evaluator.entity_id == entity_id)
    if active is not None:
        stmt = stmt.where(Evaluator.is_active.is_(active))
    if q:
        termo = f'%{q.strip().lower()}%'
        stmt = stmt.where(or_(func.lower(User.name).like(termo), func.lower(Evaluator.biography).like(termo)))
    evaluators = list(db.scalars(stmt.order_by(User.name, Evaluator.id)).unique().all())
    if specialty:
        # Especialidades ficam em JSON; o filtro por item é feito em memória.
        alvo = specialty.strip().lower()
        evaluators = [item for item in evaluators if alvo in {valor.lower() for valor in item.specialties}]
    return evaluators


@router.get('/{evaluator_id}', response_model=EvaluatorOut)
def obter_parecerista(evaluator_id: int, db: Session = Depends(get_db)) -> EvaluatorOut:
    return _buscar_parecerista(db, evaluator_id)


@router.post('', response_model=EvaluatorOut, status_code=status.HTTP_201_CREATED)
def criar_parecerista(
    payload: EvaluatorCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(RoleEnum.admin)),
) -> EvaluatorOut:
    entity_id = payload.entity_id or current_user.entity_id
    if not entity_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Entidade não especificada')
    if not db.get(Entity, entity_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Entidade não encontrada')
    user = db.get(User, payload.user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Usuário não encontrado')
    if db.scalar(select(Evaluator.id).where(Evaluator.user_id == user.id)):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MENSAGEM_PARECERISTA_DUPLICADO)

    evaluator = Evaluator(**payload.model_dump(exclude={'entity_id'}), entity_id=entity_id)
    promover_a_parecerista(user)
    db.add(evaluator)
    try:
        db.flush()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateRecordError(MENSAGEM_PARECERISTA_DUPLICADO) from exc

    registrar_log(
        db,
        entidade='parecerista',
        entidade_id=evaluator.id,
        acao=AcaoAuditEnum.CREATE,
        created_by=current_user.id,
        new_value=dump_model(evaluator),
    )
    db.commit()
    db.refresh(evaluator)
    logger.info('parecerista_criado', evaluator_id=evaluator.id, user_id=user.id, entity_id=entity_id)
    return evaluator


@router.put('/{evaluator_id}', response_model=EvaluatorOut)
def atualizar_parecerista(
    evaluator_id: int,
    payload: EvaluatorAdminUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> EvaluatorOut:
    evaluator = _buscar_parecerista(db, evaluator_id)
    eh_admin = current_user.role == RoleEnum.admin
    if not eh_admin and evaluator.user_id != current_user.id:
        raise sem_permissao()

    # Só o admin altera vínculo com ente e situação.
    campos_permitidos = EvaluatorAdminUpdate.model_fields if eh_admin else EvaluatorUpdate.model_fields
    data = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True).items()
        if field in campos_permitidos
    }
    if data.get('entity_id') is not None and not db.get(Entity, data['entity_id']):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Entidade não encontrada')

    old_value = dump_model(evaluator)
    for field, value in data.items():
        if value is None and field in ('entity_id', 'is_active', 'specialties'):
            continue
        setattr(evaluator, field, value)

    db.flush()
    registrar_log(
        db,
        entidade='parecerista',
        entidade_id=evaluator.id,
        acao=AcaoAuditEnum.UPDATE,
        created_by=current_user.id,
        old_value=old_value,
        new_value=dump_model(evaluator),
    )
    db.commit()
    db.refresh(evaluator)
    return evaluator


@router.patch('/{evaluator_id}/status', response_model=EvaluatorOut)
def alterar_status_parecerista(
    evaluator_id: int,
    payload: EvaluatorStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(RoleEnum.admin)),
) -> EvaluatorOut:
    evaluator = _buscar_parecerista(db, evaluator_id)
    if evaluator.entity_id != current_user.entity_id:
        raise sem_permissao()
    ativo_anterior = evaluator.is_active
    evaluator.is_active = payload.is_active
    registrar_mudanca_status(
        db,
        entidade='parecerista',
        entidade_id=evaluator.id,
        campo='is_active',
        anterior=ativo_anterior,
        novo=payload.is_active,
        created_by=current_user.id,
    )
    db.commit()
    db.refresh(evaluator)
    return evaluator


@router.delete('/{evaluator_id}', response_model=MensagemOut)
def remover_parecerista(
    evaluator_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(RoleEnum.admin)),
) -> MensagemOut:
    evaluator = _buscar_parecerista(db, evaluator_id)
    user = evaluator.user
    old_value = dump_model(evaluator)

    if user is not None:
        rebaixar_a_agente(user)
    db.delete(evaluator)
    registrar_log(
        db,
        entidade='parecerista',
        entidade_id=evaluator_id,
        acao=AcaoAuditEnum.DELETE,
        created_by=current_user.id,
        old_value=old_value,
    )
    db.commit()
    logger.info('parecerista_removido', evaluator_id=evaluator_id)
    return MensagemOut(message='Parecerista removido com sucesso')
