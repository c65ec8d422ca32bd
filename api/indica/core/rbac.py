from fastapi import Depends, HTTPException, status

from indica.core.security import get_current_user
from indica.models.user import RoleEnum, User

MENSAGEM_SEM_PERMISSAO = 'Você não possui permissão para esta ação.'


def sem_permissao() -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=MENSAGEM_SEM_PERMISSAO)


def require_roles(*roles: RoleEnum):
    def dependency(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise sem_permissao()
        return current_user

    return dependency
