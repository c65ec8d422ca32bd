import structlog
from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from indica.core.errors import DuplicateRecordError
from indica.core.rbac import require_roles, sem_permissao
from indica.core.security import get_current_user
from indica.core.tempo import agora, como_utc
from indica.db.session import get_db
from indica.models.application import Application, ApplicationStatusEnum
from indica.models.auditlog import AcaoAuditEnum
from indica.models.notice import Notice, NoticeStatusEnum
from indica.models.user import RoleEnum, User
from indica.schemas.application import ApplicationCreate, ApplicationListOut, ApplicationOut, ApplicationUpdate
from indica.schemas.common import montar_paginacao
from indica.services.audit_logger import dump_model, registrar_log, registrar_mudanca_status
from indica.services.uploads import salvar_arquivo

router = APIRouter(prefix='/api/applications', tags=['Inscrições'])
logger = structlog.get_logger(__name__)

MENSAGEM_INSCRICAO_DUPLICADA = 'Você já possui uma inscrição para este edital'


def _buscar_inscricao(db: Session, application_id: int) -> Application:
    application = db.get(Application, application_id)
    if not application:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Inscrição não encontrada')
    return application


def _buscar_inscricao_propria(db: Session, application_id: int, user: User) -> Application:
    application = _buscar_inscricao(db, application_id)
    if application.user_id != user.id:
        raise sem_permissao()
    return application


def _exigir_rascunho(application: Application, acao: str) -> None:
    if application.status != ApplicationStatusEnum.draft:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f'Apenas inscrições em rascunho podem ser {acao}',
        )


def _listar(db: Session, condicoes: list, page: int, limit: int) -> ApplicationListOut:
    total = db.scalar(select(func.count(Application.id)).where(*condicoes)) or 0
    applications = db.scalars(
        select(Application)
        .options(selectinload(Application.notice))
        .where(*condicoes)
        .order_by(Application.created_at.desc(), Application.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    ).all()
    return ApplicationListOut(
        applications=[ApplicationOut.model_validate(application) for application in applications],
        pagination=montar_paginacao(total, page, limit),
    )


@router.post('', response_model=ApplicationOut, status_code=status.HTTP_201_CREATED)
def criar_inscricao(
    payload: ApplicationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(RoleEnum.agent)),
) -> ApplicationOut:
    notice = db.get(Notice, payload.notice_id)
    if not notice:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Edital não encontrado')
    if notice.status != NoticeStatusEnum.published:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Este edital não está aberto para inscrições')
    agora_utc = agora()
    if not como_utc(notice.start_date) <= agora_utc <= como_utc(notice.end_date):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Este edital não está no período de inscrições')

    existente = db.scalar(
        select(Application.id).where(Application.user_id == current_user.id, Application.notice_id == notice.id)
    )
    if existente:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MENSAGEM_INSCRICAO_DUPLICADA)

    application = Application(
        **payload.model_dump(mode='json'),
        user_id=current_user.id,
        status=ApplicationStatusEnum.draft,
    )
    db.add(application)
    try:
        db.flush()
    except IntegrityError as exc:
        # Corrida entre duas requisições simultâneas para o mesmo par usuário/edital.
        db.rollback()
        raise DuplicateRecordError(MENSAGEM_INSCRICAO_DUPLICADA) from exc

    registrar_log(
        db,
        entidade='inscricao',
        entidade_id=application.id,
        acao=AcaoAuditEnum.CREATE,
        created_by=current_user.id,
        new_value=dump_model(application),
        notice_id=notice.id,
    )
    db.commit()
    db.refresh(application)
    logger.info('inscricao_criada', application_id=application.id, notice_id=notice.id, user_id=current_user.id)
    return application


@router.get('/my-applications', response_model=ApplicationListOut)
def listar_minhas_inscricoes(
    application_status: ApplicationStatusEnum | None = Query(default=None, alias='status'),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ApplicationListOut:
    condicoes = [Application.user_id == current_user.id]
    if application_status is not None:
        condicoes.append(Application.status == application_status)
    return _listar(db, condicoes, page, limit)


@router.get('', response_model=ApplicationListOut)
def listar_inscricoes(
    application_status: ApplicationStatusEnum | None = Query(default=None, alias='status'),
    notice_id: int | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(RoleEnum.admin)),
) -> ApplicationListOut:
    condicoes = []
    if application_status is not None:
        condicoes.append(Application.status == application_status)
    if notice_id is not None:
        condicoes.append(Application.notice_id == notice_id)
    return _listar(db, condicoes, page, limit)


@router.get('/{application_id}', response_model=ApplicationOut)
def obter_inscricao(
    application_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ApplicationOut:
    application = _buscar_inscricao(db, application_id)
    if application.user_id != current_user.id and current_user.role not in (RoleEnum.admin, RoleEnum.evaluator):
        raise sem_permissao()
    return application


@router.put('/{application_id}', response_model=ApplicationOut)
def atualizar_inscricao(
    application_id: int,
    payload: ApplicationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ApplicationOut:
    application = _buscar_inscricao_propria(db, application_id, current_user)
    _exigir_rascunho(application, 'editadas')

    old_value = dump_model(application)
    for field, value in payload.model_dump(mode='json', exclude_unset=True).items():
        if value is None:
            continue
        setattr(application, field, value)

    db.flush()
    registrar_log(
        db,
        entidade='inscricao',
        entidade_id=application.id,
        acao=AcaoAuditEnum.UPDATE,
        created_by=current_user.id,
        old_value=old_value,
        new_value=dump_model(application),
        notice_id=application.notice_id,
    )
    db.commit()
    db.refresh(application)
    return application


@router.patch('/{application_id}/submit', response_model=ApplicationOut)
def enviar_inscricao(
    application_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ApplicationOut:
    application = _buscar_inscricao_propria(db, application_id, current_user)
    _exigir_rascunho(application, 'enviadas')

    notice = db.get(Notice, application.notice_id)
    if not notice:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Edital não encontrado')
    momento = agora()
    if momento > como_utc(notice.end_date):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='O período de inscrições para este edital já encerrou',
        )

    application.status = ApplicationStatusEnum.submitted
    application.submitted_at = momento
    registrar_mudanca_status(
        db,
        entidade='inscricao',
        entidade_id=application.id,
        campo='status',
        anterior=ApplicationStatusEnum.draft,
        novo=ApplicationStatusEnum.submitted,
        created_by=current_user.id,
        notice_id=notice.id,
        submitted_at=momento,
    )
    db.commit()
    db.refresh(application)
    logger.info('inscricao_enviada', application_id=application.id, notice_id=notice.id)
    return application


@router.post('/{application_id}/documents', response_model=ApplicationOut, status_code=status.HTTP_201_CREATED)
def anexar_documento(
    application_id: int,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ApplicationOut:
    application = _buscar_inscricao_propria(db, application_id, current_user)
    _exigir_rascunho(application, 'editadas')

    arquivo = salvar_arquivo(file, f'applications/{application.id}')
    documento = {'name': arquivo['name'], 'path': arquivo['path'], 'uploaded_at': agora().isoformat()}
    # Lista JSON é reatribuída para o ORM detectar a mudança.
    application.documents = [*application.documents, documento]
    db.commit()
    db.refresh(application)
    return application
