from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, selectinload

from indica.core.rbac import sem_permissao
from indica.core.security import get_current_user
from indica.db.session import get_db
from indica.models.cultural_group import CulturalGroup, GroupDocument, GroupMember, GroupRoleEnum
from indica.models.user import User
from indica.schemas.common import montar_paginacao
from indica.schemas.cultural_group import (
    CulturalGroupCreate,
    CulturalGroupListOut,
    CulturalGroupOut,
    CulturalGroupUpdate,
    GroupDocumentCreate,
    MemberAdd,
    MemberRoleUpdate,
)
from indica.services.coletivos import buscar_membro, eh_admin_do_grupo, eh_membro, garantir_admin_restante
from indica.services.uploads import remover_arquivo, salvar_arquivo

router = APIRouter(prefix='/api/cultural-groups', tags=['Coletivos culturais'])


def _buscar_coletivo(db: Session, group_id: int) -> CulturalGroup:
    group = db.get(CulturalGroup, group_id)
    if not group:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Coletivo não encontrado')
    return group


def _buscar_como_admin(db: Session, group_id: int, user: User) -> CulturalGroup:
    group = _buscar_coletivo(db, group_id)
    if not eh_admin_do_grupo(group, user):
        raise sem_permissao()
    return group


def _buscar_como_membro(db: Session, group_id: int, user: User) -> CulturalGroup:
    group = _buscar_coletivo(db, group_id)
    if not eh_membro(group, user):
        raise sem_permissao()
    return group


def _membro_ou_404(group: CulturalGroup, user_id: int) -> GroupMember:
    membro = buscar_membro(group, user_id)
    if membro is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Membro não encontrado')
    return membro


def _salvar(db: Session, group: CulturalGroup) -> CulturalGroup:
    db.commit()
    db.refresh(group)
    return group


@router.post('', response_model=CulturalGroupOut, status_code=status.HTTP_201_CREATED)
def criar_coletivo(
    payload: CulturalGroupCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> CulturalGroupOut:
    group = CulturalGroup(**payload.model_dump(mode='json', exclude={'founding_date'}))
    group.founding_date = payload.founding_date
    group.created_by = current_user.id
    # Quem cria o coletivo é o primeiro administrador.
    group.members = [GroupMember(user_id=current_user.id, role=GroupRoleEnum.admin)]
    db.add(group)
    return _salvar(db, group)


@router.get('', response_model=CulturalGroupListOut)
def listar_coletivos(
    search: str | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> CulturalGroupListOut:
    condicoes = [CulturalGroup.is_active.is_(True)]
    if search:
        termo = f'%{search.strip().lower()}%'
        condicoes.append(or_(func.lower(CulturalGroup.name).like(termo), func.lower(CulturalGroup.description).like(termo)))

    total = db.scalar(select(func.count(CulturalGroup.id)).where(*condicoes)) or 0
    groups = db.scalars(
        select(CulturalGroup)
        .options(selectinload(CulturalGroup.members), selectinload(CulturalGroup.documents))
        .where(*condicoes)
        .order_by(CulturalGroup.created_at.desc(), CulturalGroup.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    ).all()
    return CulturalGroupListOut(
        groups=[CulturalGroupOut.model_validate(group) for group in groups],
        pagination=montar_paginacao(total, page, limit),
    )


@router.get('/{group_id}', response_model=CulturalGroupOut)
def obter_coletivo(
    group_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> CulturalGroupOut:
    return _buscar_coletivo(db, group_id)


@router.put('/{group_id}', response_model=CulturalGroupOut)
def atualizar_coletivo(
    group_id: int,
    payload: CulturalGroupUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> CulturalGroupOut:
    group = _buscar_como_admin(db, group_id, current_user)
    data = payload.model_dump(mode='json', exclude_unset=True, exclude={'founding_date'})
    for field, value in data.items():
        if value is None:
            continue
        setattr(group, field, value)
    if payload.founding_date is not None:
        group.founding_date = payload.founding_date
    return _salvar(db, group)


@router.post('/{group_id}/members', response_model=CulturalGroupOut)
def adicionar_membro(
    group_id: int,
    payload: MemberAdd,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> CulturalGroupOut:
    group = _buscar_como_admin(db, group_id, current_user)
    if not db.get(User, payload.user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Usuário não encontrado')
    if buscar_membro(group, payload.user_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Usuário já é membro do coletivo')

    group.members.append(GroupMember(user_id=payload.user_id, role=payload.role))
    return _salvar(db, group)


@router.delete('/{group_id}/members/{member_user_id}', response_model=CulturalGroupOut)
def remover_membro(
    group_id: int,
    member_user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> CulturalGroupOut:
    group = _buscar_como_admin(db, group_id, current_user)
    membro = _membro_ou_404(group, member_user_id)
    garantir_admin_restante(group, membro)
    group.members.remove(membro)
    return _salvar(db, group)


@router.put('/{group_id}/members/{member_user_id}', response_model=CulturalGroupOut)
def alterar_papel_membro(
    group_id: int,
    member_user_id: int,
    payload: MemberRoleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> CulturalGroupOut:
    group = _buscar_como_admin(db, group_id, current_user)
    membro = _membro_ou_404(group, member_user_id)
    if payload.role != GroupRoleEnum.admin:
        garantir_admin_restante(group, membro)
    membro.role = payload.role
    return _salvar(db, group)


@router.post('/{group_id}/documents', response_model=CulturalGroupOut)
def adicionar_documento(
    group_id: int,
    payload: GroupDocumentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> CulturalGroupOut:
    group = _buscar_como_membro(db, group_id, current_user)
    group.documents.append(GroupDocument(**payload.model_dump(), uploaded_by=current_user.id))
    return _salvar(db, group)


@router.post('/{group_id}/documents/upload', response_model=CulturalGroupOut)
def enviar_documento(
    group_id: int,
    file: UploadFile = File(...),
    name: str | None = Form(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> CulturalGroupOut:
    group = _buscar_como_membro(db, group_id, current_user)
    arquivo = salvar_arquivo(file, f'groups/{group.id}')
    group.documents.append(
        GroupDocument(
            name=name or arquivo['name'],
            type=arquivo['type'],
            path=arquivo['path'],
            uploaded_by=current_user.id,
        )
    )
    return _salvar(db, group)


@router.delete('/{group_id}/documents/{document_id}', response_model=CulturalGroupOut)
def remover_documento(
    group_id: int,
    document_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> CulturalGroupOut:
    group = _buscar_coletivo(db, group_id)
    documento = next((item for item in group.documents if item.id == document_id), None)
    if documento is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Documento não encontrado')
    if not eh_admin_do_grupo(group, current_user) and documento.uploaded_by != current_user.id:
        raise sem_permissao()

    caminho = documento.path
    group.documents.remove(documento)
    group = _salvar(db, group)
    remover_arquivo(caminho)
    return group
