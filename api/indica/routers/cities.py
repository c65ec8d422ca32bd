from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from indica.core.rbac import require_roles
from indica.core.security import get_current_user
from indica.db.session import get_db
from indica.models.city import City
from indica.models.user import RoleEnum, User
from indica.schemas.city import CityCreate, CityFindOrCreate, CityOut, validar_uf

router = APIRouter(prefix='/api/cities', tags=['Cidades'])


def _buscar_por_nome(db: Session, name: str, state: str) -> City | None:
    return db.scalar(
        select(City).where(func.lower(City.name) == name.strip().lower(), City.state == state.strip().upper())
    )


def _uf_ou_400(valor: str) -> str:
    try:
        return validar_uf(valor)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='UF inválida.') from exc


@router.get('', response_model=list[CityOut])
def listar_cidades(
    state: str | None = Query(default=None),
    q: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[CityOut]:
    stmt = select(City).where(City.is_active.is_(True))
    if state:
        stmt = stmt.where(City.state == _uf_ou_400(state))
    if q:
        stmt = stmt.where(func.lower(City.name).like(f'%{q.strip().lower()}%'))
    return list(db.scalars(stmt.order_by(City.state, City.name)).all())


@router.get('/search', response_model=CityOut)
def buscar_cidade(
    name: str | None = Query(default=None),
    state: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> CityOut:
    if not name or not state:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Nome da cidade e estado são obrigatórios')
    city = _buscar_por_nome(db, name, state)
    if not city:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Cidade não encontrada')
    return city


@router.get('/state/{uf}', response_model=list[CityOut])
def listar_cidades_por_estado(uf: str, db: Session = Depends(get_db)) -> list[CityOut]:
    stmt = select(City).where(City.state == _uf_ou_400(uf), City.is_active.is_(True)).order_by(City.name)
    return list(db.scalars(stmt).all())


@router.get('/{city_id}', response_model=CityOut)
def obter_cidade(city_id: int, db: Session = Depends(get_db)) -> CityOut:
    city = db.get(City, city_id)
    if not city:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Cidade não encontrada')
    return city


@router.post('', response_model=CityOut, status_code=status.HTTP_201_CREATED)
def criar_cidade(
    payload: CityCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(RoleEnum.admin)),
) -> CityOut:
    if _buscar_por_nome(db, payload.name, payload.state):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Cidade já cadastrada')
    if payload.ibge_code and db.scalar(select(City.id).where(City.ibge_code == payload.ibge_code)):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Código IBGE já cadastrado')

    city = City(**payload.model_dump())
    db.add(city)
    db.commit()
    db.refresh(city)
    return city


@router.post('/find-or-create', response_model=CityOut)
def buscar_ou_criar_cidade(
    payload: CityFindOrCreate,
    response: Response,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> CityOut:
    city = _buscar_por_nome(db, payload.name, payload.state)
    if city:
        return city

    city = City(name=payload.name, state=payload.state)
    db.add(city)
    db.commit()
    db.refresh(city)
    response.status_code = status.HTTP_201_CREATED
    return city
