from typing import Any
from uuid import uuid4

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from indica.core.rbac import require_roles, sem_permissao
from indica.db.session import get_db
from indica.models.entity import Entity
from indica.models.entity_portal import SECOES, SECOES_LISTA, SECOES_OBJETO, EntityPortal
from indica.models.user import RoleEnum, User
from indica.schemas.common import MensagemOut
from indica.schemas.entity_portal import EntityPortalOut, EntityPortalUpdate

router = APIRouter(prefix='/api/entity-portal/entity/{entity_id}', tags=['Portal da transparência'])


def _buscar_portal(db: Session, entity_id: int) -> EntityPortal | None:
    return db.scalar(select(EntityPortal).where(EntityPortal.entity_id == entity_id))


def _portal_ou_404(db: Session, entity_id: int) -> EntityPortal:
    portal = _buscar_portal(db, entity_id)
    if not portal:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Portal não encontrado')
    return portal


def _exigir_gestor_do_ente(user: User, entity_id: int) -> None:
    if user.entity_id != entity_id:
        raise sem_permissao()


def _portal_para_edicao(db: Session, entity_id: int) -> EntityPortal:
    portal = _buscar_portal(db, entity_id)
    if portal is not None:
        return portal
    if not db.get(Entity, entity_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Ente federado não encontrado')
    portal = EntityPortal(entity_id=entity_id)
    db.add(portal)
    return portal


def _localizar_lista(portal: EntityPortal, section: str) -> tuple[str, str | None, list]:
    secao, _, sublista = section.partition('.')
    valor = getattr(portal, secao) or ({} if sublista else [])
    if sublista:
        return secao, sublista, list(valor.get(sublista) or [])
    return secao, None, list(valor)


def _gravar_lista(portal: EntityPortal, secao: str, sublista: str | None, itens: list) -> None:
    # Colunas JSON são reatribuídas para o ORM detectar a mudança.
    if sublista:
        setattr(portal, secao, {**(getattr(portal, secao) or {}), sublista: itens})
    else:
        setattr(portal, secao, itens)


def _salvar(db: Session, portal: EntityPortal) -> EntityPortal:
    db.commit()
    db.refresh(portal)
    return portal


@router.get('', response_model=EntityPortalOut)
def obter_portal(entity_id: int, db: Session = Depends(get_db)) -> EntityPortalOut:
    return _portal_ou_404(db, entity_id)


@router.put('', response_model=EntityPortalOut)
def salvar_portal(
    entity_id: int,
    payload: EntityPortalUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(RoleEnum.admin)),
) -> EntityPortalOut:
    _exigir_gestor_do_ente(current_user, entity_id)
    portal = _portal_para_edicao(db, entity_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is None:
            continue
        setattr(portal, field, value)
    return _salvar(db, portal)


@router.put('/section/{section}', response_model=EntityPortalOut)
def salvar_secao(
    entity_id: int,
    section: str,
    conteudo: Any = Body(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(RoleEnum.admin)),
) -> EntityPortalOut:
    _exigir_gestor_do_ente(current_user, entity_id)
    if section not in SECOES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Seção inválida')
    esperado = dict if section in SECOES_OBJETO else list
    if not isinstance(conteudo, esperado):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Conteúdo incompatível com a seção')

    portal = _portal_para_edicao(db, entity_id)
    setattr(portal, section, conteudo)
    return _salvar(db, portal)


@router.post('/section/{section}', response_model=EntityPortalOut, status_code=status.HTTP_201_CREATED)
def adicionar_item(
    entity_id: int,
    section: str,
    item: dict = Body(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(RoleEnum.admin)),
) -> EntityPortalOut:
    _exigir_gestor_do_ente(current_user, entity_id)
    if section not in SECOES_LISTA:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Seção inválida ou não é uma lista')

    portal = _portal_para_edicao(db, entity_id)
    secao, sublista, itens = _localizar_lista(portal, section)
    itens.append({**item, 'id': uuid4().hex})
    _gravar_lista(portal, secao, sublista, itens)
    return _salvar(db, portal)


@router.delete('/section/{section}/item/{item_id}', response_model=EntityPortalOut)
def remover_item(
    entity_id: int,
    section: str,
    item_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(RoleEnum.admin)),
) -> EntityPortalOut:
    _exigir_gestor_do_ente(current_user, entity_id)
    if section not in SECOES_LISTA:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Seção não encontrada')

    portal = _portal_ou_404(db, entity_id)
    secao, sublista, itens = _localizar_lista(portal, section)
    restantes = [item for item in itens if str(item.get('id')) != item_id]
    if len(restantes) == len(itens):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Item não encontrado')
    _gravar_lista(portal, secao, sublista, restantes)
    return _salvar(db, portal)


@router.delete('', response_model=MensagemOut)
def remover_portal(
    entity_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(RoleEnum.admin)),
) -> MensagemOut:
    _exigir_gestor_do_ente(current_user, entity_id)
    portal = _portal_ou_404(db, entity_id)
    db.delete(portal)
    db.commit()
    return MensagemOut(message='Portal removido com sucesso')
