import time
from contextlib import asynccontextmanager

import structlog
import uvicorn
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy import or_, select

from indica.core.config import get_settings
from indica.core.errors import registrar_handlers
from indica.core.logging import configurar_logging
from indica.core.security import hash_password
from indica.db.session import SessionLocal, aguardar_banco
from indica.models.user import RoleEnum, User
from indica.routers import (
    agent_profiles,
    applications,
    auth,
    cities,
    cultural_events,
    cultural_groups,
    entities,
    entity_portals,
    evaluations,
    evaluators,
    notices,
    reports,
    users,
)
from indica.services.s3_storage import ensure_bucket_exists

settings = get_settings()
configurar_logging(settings.LOG_LEVEL)
logger = structlog.get_logger(__name__)


def _seed_admin_user() -> None:
    with SessionLocal() as db:
        admin = db.scalar(
            select(User).where(or_(User.email == settings.ADMIN_EMAIL, User.cpf_cnpj == settings.ADMIN_CPF_CNPJ))
        )
        if admin:
            return
        db.add(
            User(
                cpf_cnpj=settings.ADMIN_CPF_CNPJ,
                name=settings.ADMIN_NAME,
                email=settings.ADMIN_EMAIL,
                phone=settings.ADMIN_PHONE,
                role=RoleEnum.admin,
                password_hash=hash_password(settings.ADMIN_PASSWORD),
            )
        )
        db.commit()
        logger.info('admin_criado', email=settings.ADMIN_EMAIL)


def _setup_storage_with_retry() -> None:
    tentativas = 10
    for tentativa in range(1, tentativas + 1):
        try:
            ensure_bucket_exists()
            return
        except (BotoCoreError, ClientError) as exc:
            if tentativa == tentativas:
                if settings.S3_STRICT_STARTUP:
                    raise
                logger.warning(
                    'bucket_indisponivel',
                    bucket=settings.S3_BUCKET,
                    detalhe='O upload de arquivos pode falhar até ajustar S3.',
                    erro=str(exc),
                )
                return
            time.sleep(2)


@asynccontextmanager
async def lifespan(_: FastAPI):
    aguardar_banco()
    if settings.STORAGE_BACKEND == 's3':
        _setup_storage_with_retry()
    _seed_admin_user()
    logger.info('api_iniciada', porta=settings.PORT)
    yield


app = FastAPI(title=settings.APP_NAME, version='1.0.0', lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)
registrar_handlers(app)

app.include_router(auth.router, prefix='/api/auth')
# Caminho legado usado por clientes antigos.
app.include_router(auth.router, prefix='/auth', include_in_schema=False)
app.include_router(users.router)
app.include_router(cities.router)
app.include_router(entities.router)
app.include_router(notices.router)
app.include_router(applications.router)
app.include_router(evaluators.router)
app.include_router(evaluations.router)
app.include_router(cultural_groups.router)
app.include_router(cultural_events.router)
app.include_router(agent_profiles.router)
app.include_router(entity_portals.router)
app.include_router(reports.router)

app.mount('/uploads', StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name='uploads')


@app.get('/')
def root() -> dict[str, str]:
    return {'message': 'API INDICA em execução. Acesse /docs para documentação.'}


@app.get('/api/health')
def health() -> dict[str, str]:
    return {'status': 'ok'}


def run() -> None:
    uvicorn.run('indica.main:app', host='0.0.0.0', port=settings.PORT)
