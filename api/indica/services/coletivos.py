from fastapi import HTTPException, status

from indica.models.cultural_group import CulturalGroup, GroupMember, GroupRoleEnum
from indica.models.user import User

MENSAGEM_ULTIMO_ADMIN = 'Não é possível remover o último administrador do coletivo'


def buscar_membro(grupo: CulturalGroup, user_id: int) -> GroupMember | None:
    return next((membro for membro in grupo.members if membro.user_id == user_id), None)


def eh_membro(grupo: CulturalGroup, user: User) -> bool:
    return buscar_membro(grupo, user.id) is not None


def eh_admin_do_grupo(grupo: CulturalGroup, user: User) -> bool:
    membro = buscar_membro(grupo, user.id)
    return membro is not None and membro.role == GroupRoleEnum.admin


def garantir_admin_restante(grupo: CulturalGroup, membro: GroupMember) -> None:
    """Bloqueia a saída ou rebaixamento do único admin do coletivo."""
    if membro.role != GroupRoleEnum.admin:
        return
    admins = [item for item in grupo.members if item.role == GroupRoleEnum.admin]
    if len(admins) <= 1:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MENSAGEM_ULTIMO_ADMIN)
