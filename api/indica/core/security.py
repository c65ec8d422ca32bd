from datetime import datetime

import structlog
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.orm import Session

from indica.core.config import get_settings
from indica.core.tempo import agora
from indica.db.session import get_db
from indica.models.user import User

settings = get_settings()
logger = structlog.get_logger(__name__)
pwd_context = CryptContext(schemes=['pbkdf2_sha256'], deprecated='auto')
oauth2_scheme = OAuth2PasswordBearer(tokenUrl='/api/auth/login')
oauth2_scheme_opcional = OAuth2PasswordBearer(tokenUrl='/api/auth/login', auto_error=False)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user: User, now: datetime | None = None) -> str:
    expire = (now or agora()) + settings.jwt_expires_delta()
    payload = {'id': user.id, 'role': user.role.value, 'exp': expire}
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def _usuario_do_token(token: str, db: Session) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail='Token inválido ou expirado.',
        headers={'WWW-Authenticate': 'Bearer'},
    )

    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        user_id = payload.get('id')
        if user_id is None:
            raise credentials_exception
        user_id_int = int(user_id)
    except JWTError as exc:
        raise credentials_exception from exc
    except (TypeError, ValueError) as exc:
        raise credentials_exception from exc

    user = db.scalar(select(User).where(User.id == user_id_int))
    if user is None or not user.is_active:
        logger.warning('token_rejeitado', user_id=user_id_int)
        raise credentials_exception
    return user


def get_current_user(
    token: str | None = Depends(oauth2_scheme_opcional),
    db: Session = Depends(get_db),
) -> User:
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail='Token de autenticação não fornecido.',
            headers={'WWW-Authenticate': 'Bearer'},
        )
    return _usuario_do_token(token, db)


def get_optional_user(
    token: str | None = Depends(oauth2_scheme_opcional),
    db: Session = Depends(get_db),
) -> User | None:
    """Rotas públicas que apenas personalizam a resposta para quem está logado."""
    if not token:
        return None
    try:
        return _usuario_do_token(token, db)
    except HTTPException:
        logger.info('token_ignorado_em_rota_publica')
        return None
