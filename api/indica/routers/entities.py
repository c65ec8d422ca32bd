import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from indica.core.rbac import require_roles
from indica.db.session import get_db
from indica.models.auditlog import AcaoAuditEnum
from indica.models.city import City
from indica.models.entity import Entity, EntityStatusEnum, EntityTypeEnum
from indica.models.user import RoleEnum, User
from indica.schemas.common import MensagemOut
from indica.schemas.entity import EntityCreate, EntityOut, EntityStatusUpdate, EntityUpdate
from indica.services.audit_logger import dump_model, registrar_log, registrar_mudanca_status

router = APIRouter(prefix='/api/entities', tags=['Entes federados'])
logger = structlog.get_logger(__name__)


def _buscar_ente(db: Session, entity_id: int) -> Entity:
    entity = db.get(Entity, entity_id)
    if not entity:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Ente federado não encontrado')
    return entity


def _validar_cidade(db: Session, city_id: int | None) -> None:
    if city_id is not None and not db.get(City, city_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Cidade não encontrada.')


@router.get('', response_model=list[EntityOut])
def listar_entes(
    type: EntityTypeEnum | None = Query(default=None),
    entity_status: EntityStatusEnum | None = Query(default=None, alias='status'),
    city_id: int | None = Query(default=None),
    q: str | None = Query(default=None),
    include_inactive: bool = Query(default=False),
    db: Session = Depends(get_db),
) -> list[EntityOut]:
    stmt = select(Entity)
    if not include_inactive:
        stmt = stmt.where(Entity.is_active.is_(True))
    if type is not None:
        stmt = stmt.where(Entity.type == type)
    if entity_status is not None:
        stmt = stmt.where(Entity.status == entity_status)
    if city_id is not None:
        stmt = stmt.where(Entity.city_id == city_id)
    if q:
        termo = f'%{q.strip().lower()}%'
        stmt = stmt.where(or_(func.lower(Entity.name).like(termo), Entity.cnpj.like(termo)))
    return list(db.scalars(stmt.order_by(Entity.name)).all())


@router.get('/{entity_id}', response_model=EntityOut)
def obter_ente(entity_id: int, db: Session = Depends(get_db)) -> EntityOut:
    return _buscar_ente(db, entity_id)


@router.post('', response_model=EntityOut, status_code=status.HTTP_201_CREATED)
def criar_ente(
    payload: EntityCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(RoleEnum.admin)),
) -> EntityOut:
    if db.scalar(select(Entity.id).where(Entity.cnpj == payload.cnpj)):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Já existe ente federado com este CNPJ.')
    _validar_cidade(db, payload.city_id)

    entity = Entity(**payload.model_dump(mode='json'))
    db.add(entity)
    db.flush()
    registrar_log(
        db,
        entidade='ente_federado',
        entidade_id=entity.id,
        acao=AcaoAuditEnum.CREATE,
        created_by=current_user.id,
        new_value=dump_model(entity),
    )
    db.commit()
    db.refresh(entity)
    return entity


@router.put('/{entity_id}', response_model=EntityOut)
def atualizar_ente(
    entity_id: int,
    payload: EntityUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(RoleEnum.admin)),
) -> EntityOut:
    entity = _buscar_ente(db, entity_id)
    old_value = dump_model(entity)
    data = payload.model_dump(mode='json', exclude_unset=True)
    _validar_cidade(db, data.get('city_id'))

    for field, value in data.items():
        setattr(entity, field, value)

    db.flush()
    registrar_log(
        db,
        entidade='ente_federado',
        entidade_id=entity.id,
        acao=AcaoAuditEnum.UPDATE,
        created_by=current_user.id,
        old_value=old_value,
        new_value=dump_model(entity),
    )
    db.commit()
    db.refresh(entity)
    return entity


@router.patch('/{entity_id}/status', response_model=EntityOut)
def alterar_status_ente(
    entity_id: int,
    payload: EntityStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(RoleEnum.admin)),
) -> EntityOut:
    entity = _buscar_ente(db, entity_id)
    status_anterior = entity.status
    entity.status = payload.status
    registrar_mudanca_status(
        db,
        entidade='ente_federado',
        entidade_id=entity.id,
        campo='status',
        anterior=status_anterior,
        novo=payload.status,
        created_by=current_user.id,
    )
    db.commit()
    db.refresh(entity)
    logger.info('status_ente_alterado', entity_id=entity.id, status=payload.status.value)
    return entity


@router.delete('/{entity_id}', response_model=MensagemOut)
def desativar_ente(
    entity_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(RoleEnum.admin)),
) -> MensagemOut:
    entity = _buscar_ente(db, entity_id)
    entity.is_active = False
    registrar_log(
        db,
        entidade='ente_federado',
        entidade_id=entity.id,
        acao=AcaoAuditEnum.DELETE,
        created_by=current_user.id,
        old_value={'is_active': True},
        new_value={'is_active': False},
    )
    db.commit()
    return MensagemOut(message='Ente federado desativado com sucesso.')
