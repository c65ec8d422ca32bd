from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, selectinload

from indica.models.notice import Notice, NoticeCategory, NoticeStatusEnum
from indica.models.user import User


@dataclass
class FiltroEditais:
    status: NoticeStatusEnum | None = NoticeStatusEnum.published
    category: str | None = None
    entity_id: int | None = None
    city_id: int | None = None
    start_from: datetime | None = None
    end_until: datetime | None = None
    q: str | None = None


def _condicoes(filtro: FiltroEditais) -> list:
    condicoes = []
    if filtro.status is not None:
        condicoes.append(Notice.status == filtro.status)
    if filtro.category:
        condicoes.append(Notice.category_rows.any(NoticeCategory.name == filtro.category))
    if filtro.entity_id is not None:
        condicoes.append(Notice.entity_id == filtro.entity_id)
    if filtro.city_id is not None:
        condicoes.append(Notice.city_id == filtro.city_id)
    if filtro.start_from is not None:
        condicoes.append(Notice.start_date >= filtro.start_from)
    if filtro.end_until is not None:
        condicoes.append(Notice.end_date <= filtro.end_until)
    if filtro.q:
        termo = f'%{filtro.q.strip().lower()}%'
        condicoes.append(or_(func.lower(Notice.title).like(termo), func.lower(Notice.description).like(termo)))
    return condicoes


def _contar(db: Session, condicoes: list) -> int:
    return db.scalar(select(func.count(Notice.id)).where(*condicoes)) or 0


def _buscar(db: Session, condicoes: list, skip: int, limit: int) -> list[Notice]:
    stmt = (
        select(Notice)
        .options(selectinload(Notice.category_rows), selectinload(Notice.entity))
        .where(*condicoes)
        .order_by(Notice.start_date.desc(), Notice.id.desc())
        .offset(skip)
        .limit(limit)
    )
    return list(db.scalars(stmt).all())


def listar_editais(
    db: Session,
    filtro: FiltroEditais,
    page: int,
    limit: int,
    usuario: User | None = None,
) -> tuple[list[Notice], int]:
    """Lista editais paginados, priorizando a cidade do usuário logado.

    Quando o usuário tem cidade e não filtrou por cidade, a página é montada em
    duas fases: primeiro os editais da cidade dele, depois o restante da página
    com editais das demais cidades. As duas partes são apenas concatenadas, então
    a página não fica ordenada globalmente por data quando ambas contribuem.
    """
    skip = (page - 1) * limit
    condicoes = _condicoes(filtro)
    total = _contar(db, condicoes)

    cidade_usuario = usuario.city_id if usuario is not None else None
    if cidade_usuario is None or filtro.city_id is not None:
        return _buscar(db, condicoes, skip, limit), total

    da_cidade = [*condicoes, Notice.city_id == cidade_usuario]
    outras_cidades = [*condicoes, Notice.city_id != cidade_usuario]

    editais = _buscar(db, da_cidade, skip, limit)
    restante = limit - len(editais)
    if restante > 0:
        total_cidade = _contar(db, da_cidade)
        skip_outras = max(0, skip - total_cidade)
        editais.extend(_buscar(db, outras_cidades, skip_outras, restante))
    return editais, total
