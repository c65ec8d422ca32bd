from datetime import datetime

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from indica.core.rbac import require_roles
from indica.core.security import get_optional_user
from indica.db.session import get_db
from indica.models.auditlog import AcaoAuditEnum
from indica.models.city import City
from indica.models.entity import Entity
from indica.models.notice import Notice, NoticeStatusEnum
from indica.models.user import RoleEnum, User
from indica.schemas.common import MensagemOut, montar_paginacao
from indica.schemas.notice import NoticeCreate, NoticeListOut, NoticeOut, NoticeUpdate
from indica.services.audit_logger import dump_model, registrar_log, registrar_mudanca_status
from indica.services.editais import FiltroEditais, listar_editais

router = APIRouter(prefix='/api/notices', tags=['Editais'])
logger = structlog.get_logger(__name__)


def _buscar_edital(db: Session, notice_id: int) -> Notice:
    notice = db.get(Notice, notice_id)
    if not notice:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Edital não encontrado')
    return notice


def _validar_referencias(db: Session, entity_id: int | None, city_id: int | None) -> None:
    if entity_id is not None and not db.get(Entity, entity_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Ente federado não encontrado')
    if city_id is not None and not db.get(City, city_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Cidade não encontrada')


def _snapshot(notice: Notice) -> dict:
    data = dump_model(notice)
    data['categories'] = notice.categories
    return data


def _alterar_status(
    db: Session,
    notice: Notice,
    novo_status: NoticeStatusEnum,
    current_user: User,
) -> None:
    status_anterior = notice.status
    notice.status = novo_status
    registrar_mudanca_status(
        db,
        entidade='edital',
        entidade_id=notice.id,
        campo='status',
        anterior=status_anterior,
        novo=novo_status,
        created_by=current_user.id,
        notice_id=notice.id,
    )
    db.commit()
    db.refresh(notice)
    logger.info('status_edital_alterado', notice_id=notice.id, de=status_anterior.value, para=novo_status.value)


@router.get('', response_model=NoticeListOut)
def listar(
    notice_status: NoticeStatusEnum | None = Query(default=NoticeStatusEnum.published, alias='status'),
    category: str | None = Query(default=None),
    entity_id: int | None = Query(default=None),
    city_id: int | None = Query(default=None),
    start_date: datetime | None = Query(default=None),
    end_date: datetime | None = Query(default=None),
    q: str | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User | None = Depends(get_optional_user),
) -> NoticeListOut:
    filtro = FiltroEditais(
        status=notice_status,
        category=category,
        entity_id=entity_id,
        city_id=city_id,
        start_from=start_date,
        end_until=end_date,
        q=q,
    )
    notices, total = listar_editais(db, filtro, page, limit, current_user)
    return NoticeListOut(
        notices=[NoticeOut.model_validate(notice) for notice in notices],
        pagination=montar_paginacao(total, page, limit),
    )


@router.get('/{notice_id}', response_model=NoticeOut)
def obter(notice_id: int, db: Session = Depends(get_db)) -> NoticeOut:
    return _buscar_edital(db, notice_id)


@router.post('', response_model=NoticeOut, status_code=status.HTTP_201_CREATED)
def criar(
    payload: NoticeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(RoleEnum.admin)),
) -> NoticeOut:
    _validar_referencias(db, payload.entity_id, payload.city_id)

    data = payload.model_dump(mode='json', exclude={'categories', 'start_date', 'end_date', 'status'})
    notice = Notice(**data, start_date=payload.start_date, end_date=payload.end_date, status=payload.status)
    notice.categories = payload.categories
    notice.sincronizar_orcamento()
    db.add(notice)
    db.flush()
    registrar_log(
        db,
        entidade='edital',
        entidade_id=notice.id,
        acao=AcaoAuditEnum.CREATE,
        created_by=current_user.id,
        new_value=_snapshot(notice),
        notice_id=notice.id,
    )
    db.commit()
    db.refresh(notice)
    logger.info('edital_criado', notice_id=notice.id, status=notice.status.value)
    return notice


@router.put('/{notice_id}', response_model=NoticeOut)
def atualizar(
    notice_id: int,
    payload: NoticeUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(RoleEnum.admin)),
) -> NoticeOut:
    notice = _buscar_edital(db, notice_id)
    old_value = _snapshot(notice)
    campos = payload.model_fields_set
    _validar_referencias(db, payload.entity_id, payload.city_id)

    data = payload.model_dump(mode='json', exclude_unset=True, exclude={'categories', 'start_date', 'end_date'})
    for field, value in data.items():
        if value is None:
            continue
        setattr(notice, field, value)
    if 'start_date' in campos and payload.start_date is not None:
        notice.start_date = payload.start_date
    if 'end_date' in campos and payload.end_date is not None:
        notice.end_date = payload.end_date
    if 'categories' in campos and payload.categories is not None:
        notice.categories = payload.categories
    notice.sincronizar_orcamento()

    db.flush()
    registrar_log(
        db,
        entidade='edital',
        entidade_id=notice.id,
        acao=AcaoAuditEnum.UPDATE,
        created_by=current_user.id,
        old_value=old_value,
        new_value=_snapshot(notice),
        notice_id=notice.id,
    )
    db.commit()
    db.refresh(notice)
    return notice


@router.patch('/{notice_id}/publish', response_model=NoticeOut)
def publicar(
    notice_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(RoleEnum.admin)),
) -> NoticeOut:
    notice = _buscar_edital(db, notice_id)
    if notice.status != NoticeStatusEnum.draft:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Apenas editais em rascunho podem ser publicados',
        )
    _alterar_status(db, notice, NoticeStatusEnum.published, current_user)
    return notice


@router.patch('/{notice_id}/close', response_model=NoticeOut)
def encerrar(
    notice_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(RoleEnum.admin)),
) -> NoticeOut:
    notice = _buscar_edital(db, notice_id)
    if notice.status != NoticeStatusEnum.published:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Apenas editais publicados podem ser encerrados',
        )
    _alterar_status(db, notice, NoticeStatusEnum.closed, current_user)
    return notice


@router.delete('/{notice_id}', response_model=MensagemOut)
def cancelar(
    notice_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(RoleEnum.admin)),
) -> MensagemOut:
    notice = _buscar_edital(db, notice_id)
    _alterar_status(db, notice, NoticeStatusEnum.canceled, current_user)
    return MensagemOut(message='Edital cancelado com sucesso')
