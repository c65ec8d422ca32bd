import time
from collections.abc import Generator

import structlog
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from indica.core.config import get_settings

settings = get_settings()
logger = structlog.get_logger(__name__)


def _criar_engine(url: str) -> Engine:
    if url.startswith('sqlite'):
        return create_engine(url, connect_args={'check_same_thread': False}, poolclass=StaticPool)
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=10,
        connect_args={'connect_timeout': settings.DB_CONNECT_TIMEOUT},
    )


engine = _criar_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


@event.listens_for(Engine, 'connect')
def _habilitar_fk_sqlite(dbapi_conn, connection_record):
    if 'sqlite' in type(dbapi_conn).__module__:
        cursor = dbapi_conn.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def aguardar_banco() -> None:
    tentativas = settings.DB_RETRY_ATTEMPTS
    for tentativa in range(1, tentativas + 1):
        try:
            with engine.connect() as conn:
                conn.execute(text('SELECT 1'))
            logger.info('banco_conectado', tentativa=tentativa)
            return
        except OperationalError as exc:
            if tentativa == tentativas:
                logger.error('banco_indisponivel', tentativas=tentativas)
                raise
            logger.warning(
                'banco_reconectando',
                tentativa=tentativa,
                espera_segundos=settings.DB_RETRY_DELAY,
                erro=str(exc.orig),
            )
            time.sleep(settings.DB_RETRY_DELAY)
