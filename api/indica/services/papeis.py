import structlog

from indica.models.user import RoleEnum, User

logger = structlog.get_logger(__name__)


def promover_a_parecerista(user: User) -> None:
    """Concede o papel de parecerista, inclusive a administradores.

    Não faz commit: a alteração segue na mesma transação do registro de parecerista.
    """
    if user.role != RoleEnum.evaluator:
        logger.info('usuario_promovido_a_parecerista', user_id=user.id, papel_anterior=user.role.value)
    user.role = RoleEnum.evaluator


def rebaixar_a_agente(user: User) -> None:
    if user.role == RoleEnum.admin:
        return
    user.role = RoleEnum.agent
    logger.info('usuario_rebaixado_a_agente', user_id=user.id)
