from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from indica.core.security import get_current_user
from indica.db.session import get_db
from indica.models.agent_profile import AgentProfile
from indica.models.user import User
from indica.schemas.agent_profile import AgentProfileOut, AgentProfilePublicOut, AgentProfileUpsert
from indica.schemas.common import MensagemOut

router = APIRouter(prefix='/api/agent-profile', tags=['Perfil do agente'])


def _perfil_do_usuario(db: Session, user_id: int) -> AgentProfile | None:
    return db.scalar(select(AgentProfile).where(AgentProfile.user_id == user_id))


def _perfil_ou_404(db: Session, user_id: int) -> AgentProfile:
    profile = _perfil_do_usuario(db, user_id)
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Perfil não encontrado')
    return profile


@router.post('', response_model=AgentProfileOut)
def salvar_perfil(
    payload: AgentProfileUpsert,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AgentProfileOut:
    profile = _perfil_do_usuario(db, current_user.id)
    if profile is None:
        profile = AgentProfile(user_id=current_user.id)
        db.add(profile)

    for field, value in payload.model_dump(mode='json', exclude={'date_of_birth'}).items():
        setattr(profile, field, value)
    profile.date_of_birth = payload.date_of_birth
    db.commit()
    db.refresh(profile)
    return profile


@router.get('', response_model=AgentProfileOut)
def obter_perfil(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AgentProfileOut:
    return _perfil_ou_404(db, current_user.id)


@router.delete('', response_model=MensagemOut)
def remover_perfil(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MensagemOut:
    profile = _perfil_ou_404(db, current_user.id)
    db.delete(profile)
    db.commit()
    return MensagemOut(message='Perfil removido com sucesso')


@router.get('/public/{user_id}', response_model=AgentProfilePublicOut)
def obter_perfil_publico(user_id: int, db: Session = Depends(get_db)) -> AgentProfilePublicOut:
    # O schema público não expõe renda, composição familiar nem dados de deficiência.
    return _perfil_ou_404(db, user_id)
