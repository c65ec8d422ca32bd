import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from indica.core.security import create_access_token, get_current_user, hash_password, verify_password
from indica.db.session import get_db
from indica.models.city import City
from indica.models.user import RoleEnum, User
from indica.schemas.auth import LoginRequest, PasswordUpdate, TokenResponse
from indica.schemas.common import MensagemOut
from indica.schemas.user import UserCreate, UserOut, normalizar_cpf_cnpj

# Montado em /api/auth e no caminho legado /auth.
router = APIRouter(tags=['Autenticação'])
logger = structlog.get_logger(__name__)


@router.post('/register', response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(payload: UserCreate, db: Session = Depends(get_db)) -> TokenResponse:
    existing = db.scalar(select(User).where(or_(User.cpf_cnpj == payload.cpf_cnpj, User.email == payload.email)))
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Usuário já cadastrado com este CPF/CNPJ ou email.',
        )
    if payload.city_id is not None and not db.get(City, payload.city_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Cidade não encontrada.')

    # Cadastro público sempre cria agente cultural.
    new_user = User(
        cpf_cnpj=payload.cpf_cnpj,
        name=payload.name,
        email=payload.email,
        phone=payload.phone,
        city_id=payload.city_id,
        role=RoleEnum.agent,
        password_hash=hash_password(payload.password),
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    logger.info('usuario_registrado', user_id=new_user.id)
    return TokenResponse(message='Usuário registrado com sucesso', token=create_access_token(new_user), user=new_user)


@router.post('/login', response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> TokenResponse:
    user = db.scalar(select(User).where(User.cpf_cnpj == normalizar_cpf_cnpj(payload.cpf_cnpj)))
    if not user:
        logger.warning('login_recusado', motivo='usuario_inexistente')
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='Credenciais inválidas.')
    if not user.is_active:
        logger.warning('login_recusado', motivo='conta_desativada', user_id=user.id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail='Conta desativada. Entre em contato com o administrador.',
        )
    if not verify_password(payload.password, user.password_hash):
        logger.warning('login_recusado', motivo='senha_incorreta', user_id=user.id)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='Credenciais inválidas.')

    return TokenResponse(message='Login realizado com sucesso', token=create_access_token(user), user=user)


@router.get('/me', response_model=UserOut)
def me(current_user: User = Depends(get_current_user)) -> UserOut:
    return current_user


@router.get('/profile', response_model=UserOut, include_in_schema=False)
def profile(current_user: User = Depends(get_current_user)) -> UserOut:
    return current_user


@router.put('/password', response_model=MensagemOut)
def update_password(
    payload: PasswordUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MensagemOut:
    if not verify_password(payload.current_password, current_user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='Senha atual incorreta.')
    current_user.password_hash = hash_password(payload.new_password)
    db.commit()
    logger.info('senha_atualizada', user_id=current_user.id)
    return MensagemOut(message='Senha atualizada com sucesso.')
