import re
from datetime import timedelta
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

_DURACAO_RE = re.compile(r'^\s*(\d+)\s*([smhd]?)\s*$')
_UNIDADES = {'s': 'seconds', 'm': 'minutes', 'h': 'hours', 'd': 'days', '': 'seconds'}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    APP_NAME: str = 'INDICA - Editais e Fomento à Cultura'
    DATABASE_URL: str = 'postgresql+psycopg://indica:indica@db:5432/indica'
    DB_CONNECT_TIMEOUT: int = 10
    DB_RETRY_DELAY: float = 5.0
    DB_RETRY_ATTEMPTS: int = 10

    JWT_SECRET: str = 'indica_secret_key'
    JWT_ALGORITHM: str = 'HS256'
    JWT_EXPIRES_IN: str = '24h'

    PORT: int = 5000
    FRONTEND_URL: str = 'http://localhost:5173'
    LOG_LEVEL: str = 'INFO'

    UPLOAD_DIR: str = 'uploads'
    UPLOAD_MAX_BYTES: int = 5 * 1024 * 1024
    STORAGE_BACKEND: str = 'local'

    S3_ENDPOINT: str = 'http://minio:9000'
    S3_ACCESS_KEY: str = 'minio'
    S3_SECRET_KEY: str = 'minio12345'
    S3_BUCKET: str = 'indica-uploads'
    S3_REGION: str = 'us-east-1'
    S3_STRICT_STARTUP: bool = False

    ADMIN_CPF_CNPJ: str = '00000000000'
    ADMIN_NAME: str = 'Administrador INDICA'
    ADMIN_EMAIL: str = 'admin@indica.com.br'
    ADMIN_PHONE: str = '(61) 99999-9999'
    ADMIN_PASSWORD: str = 'admin123'

    def cors_origins(self) -> list[str]:
        origins = [origin.strip() for origin in self.FRONTEND_URL.split(',') if origin.strip()]
        return origins or ['http://localhost:5173']

    def jwt_expires_delta(self) -> timedelta:
        match = _DURACAO_RE.match(self.JWT_EXPIRES_IN)
        if not match:
            return timedelta(hours=24)
        quantidade, unidade = match.groups()
        return timedelta(**{_UNIDADES[unidade]: int(quantidade)})


@lru_cache
def get_settings() -> Settings:
    return Settings()
