from datetime import datetime

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from indica.core.security import get_current_user
from indica.db.session import get_db
from indica.models.cultural_event import CulturalEvent, EventStatusEnum
from indica.models.user import User
from indica.schemas.city import validar_uf
from indica.schemas.cultural_event import CulturalEventCreate, CulturalEventOut, CulturalEventUpdate

router = APIRouter(prefix='/api/cultural-events', tags=['Agenda cultural'])
logger = structlog.get_logger(__name__)


def _buscar_evento(db: Session, event_id: int) -> CulturalEvent:
    cultural_event = db.get(CulturalEvent, event_id)
    if not cultural_event:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Evento não encontrado')
    return cultural_event


def _exigir_criador(cultural_event: CulturalEvent, user: User, acao: str) -> None:
    if cultural_event.created_by != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=f'Sem permissão para {acao} este evento')


@router.get('', response_model=list[CulturalEventOut])
def listar_eventos(
    start_date: datetime | None = Query(default=None),
    end_date: datetime | None = Query(default=None),
    state: str | None = Query(default=None),
    city: str | None = Query(default=None),
    event_type: str | None = Query(default=None),
    category: str | None = Query(default=None),
    event_status: EventStatusEnum | None = Query(default=None, alias='status'),
    db: Session = Depends(get_db),
) -> list[CulturalEventOut]:
    stmt = select(CulturalEvent)
    # O intervalo só filtra quando as duas pontas são informadas.
    if start_date is not None and end_date is not None:
        stmt = stmt.where(CulturalEvent.start_date >= start_date, CulturalEvent.start_date <= end_date)
    if state:
        try:
            stmt = stmt.where(CulturalEvent.state == validar_uf(state))
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='UF inválida.') from exc
    if city:
        stmt = stmt.where(CulturalEvent.city == city)
    if event_type:
        stmt = stmt.where(CulturalEvent.event_type == event_type)
    if category:
        stmt = stmt.where(CulturalEvent.category == category)
    if event_status is not None:
        stmt = stmt.where(CulturalEvent.status == event_status)
    return list(db.scalars(stmt.order_by(CulturalEvent.start_date, CulturalEvent.id)).all())


@router.get('/{event_id}', response_model=CulturalEventOut)
def obter_evento(event_id: int, db: Session = Depends(get_db)) -> CulturalEventOut:
    return _buscar_evento(db, event_id)


@router.post('', response_model=CulturalEventOut, status_code=status.HTTP_201_CREATED)
def criar_evento(
    payload: CulturalEventCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> CulturalEventOut:
    cultural_event = CulturalEvent(**payload.model_dump(), created_by=current_user.id)
    db.add(cultural_event)
    db.commit()
    db.refresh(cultural_event)
    logger.info('evento_cultural_criado', event_id=cultural_event.id, user_id=current_user.id)
    return cultural_event


@router.put('/{event_id}', response_model=CulturalEventOut)
def atualizar_evento(
    event_id: int,
    payload: CulturalEventUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> CulturalEventOut:
    cultural_event = _buscar_evento(db, event_id)
    _exigir_criador(cultural_event, current_user, 'editar')

    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is None and field not in ('address', 'website', 'contact_info', 'image_url'):
            continue
        setattr(cultural_event, field, value)
    db.commit()
    db.refresh(cultural_event)
    return cultural_event


@router.delete('/{event_id}', status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def remover_evento(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    cultural_event = _buscar_evento(db, event_id)
    _exigir_criador(cultural_event, current_user, 'deletar')
    db.delete(cultural_event)
    db.commit()
    logger.info('evento_cultural_removido', event_id=event_id, user_id=current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
