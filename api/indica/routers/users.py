from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from indica.core.rbac import require_roles
from indica.core.security import get_current_user, hash_password
from indica.db.session import get_db
from indica.models.city import City
from indica.models.entity import Entity
from indica.models.user import RoleEnum, User
from indica.schemas.user import ProfileUpdate, UserAdminUpdate, UserOut

router = APIRouter(prefix='/api/users', tags=['Usuários'])


def _buscar_usuario(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Usuário não encontrado')
    return user


def _validar_referencias(db: Session, entity_id: int | None, city_id: int | None) -> None:
    if entity_id is not None and not db.get(Entity, entity_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Entidade não encontrada.')
    if city_id is not None and not db.get(City, city_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Cidade não encontrada.')


@router.get('/profile', response_model=UserOut)
def obter_perfil(current_user: User = Depends(get_current_user)) -> UserOut:
    return current_user


@router.put('/profile', response_model=UserOut)
def atualizar_perfil(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UserOut:
    data = payload.model_dump(exclude_unset=True, exclude_none=True)
    _validar_referencias(db, None, data.get('city_id'))
    senha = data.pop('password', None)
    for field, value in data.items():
        setattr(current_user, field, value)
    if senha:
        current_user.password_hash = hash_password(senha)
    db.commit()
    db.refresh(current_user)
    return current_user


@router.get('', response_model=list[UserOut])
def listar_usuarios(
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(RoleEnum.admin)),
) -> list[UserOut]:
    return list(db.scalars(select(User).order_by(User.name)).all())


@router.get('/{user_id}', response_model=UserOut)
def obter_usuario(
    user_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(RoleEnum.admin)),
) -> UserOut:
    return _buscar_usuario(db, user_id)


@router.put('/{user_id}', response_model=UserOut)
def atualizar_usuario(
    user_id: int,
    payload: UserAdminUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(RoleEnum.admin)),
) -> UserOut:
    user = _buscar_usuario(db, user_id)
    data = payload.model_dump(exclude_unset=True)
    _validar_referencias(db, data.get('entity_id'), data.get('city_id'))
    if 'email' in data and data['email'] != user.email:
        em_uso = db.scalar(select(User.id).where(User.email == data['email'], User.id != user.id))
        if em_uso:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Email já cadastrado.')
    for field, value in data.items():
        if value is None and field not in ('entity_id', 'city_id'):
            continue
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    return user
