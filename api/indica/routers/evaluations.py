from fastapi import APIRouter, Depends, HTTPException, status

from indica.core.rbac import require_roles
from indica.models.user import RoleEnum, User

router = APIRouter(prefix='/api/evaluations', tags=['Avaliações'])

apenas_pareceristas = require_roles(RoleEnum.evaluator, RoleEnum.admin)
apenas_admin = require_roles(RoleEnum.admin)


def _nao_implementado() -> HTTPException:
    return HTTPException(status_code=status.HTTP_501_NOT_IMPLEMENTED, detail='Funcionalidade em desenvolvimento')


@router.post('')
def criar_avaliacao(_: User = Depends(apenas_pareceristas)):
    raise _nao_implementado()


@router.get('/my-evaluations')
def listar_minhas_avaliacoes(_: User = Depends(apenas_pareceristas)):
    raise _nao_implementado()


@router.get('/application/{application_id}')
def listar_avaliacoes_da_inscricao(application_id: int, _: User = Depends(apenas_admin)):
    raise _nao_implementado()


@router.post('/application/{application_id}/assign')
def designar_pareceristas(application_id: int, _: User = Depends(apenas_admin)):
    raise _nao_implementado()


@router.get('/{evaluation_id}')
def obter_avaliacao(evaluation_id: int, _: User = Depends(apenas_pareceristas)):
    raise _nao_implementado()


@router.put('/{evaluation_id}')
def atualizar_avaliacao(evaluation_id: int, _: User = Depends(apenas_pareceristas)):
    raise _nao_implementado()
