import shutil
from pathlib import Path
from uuid import uuid4

import structlog
from botocore.exceptions import ClientError
from fastapi import HTTPException, UploadFile, status

from indica.core.config import get_settings
from indica.services.s3_storage import parse_s3_uri, remover_objeto, upload_fileobj

settings = get_settings()
logger = structlog.get_logger(__name__)

TIPOS_PERMITIDOS = frozenset(
    {
        'image/jpeg',
        'image/png',
        'image/gif',
        'application/pdf',
        'application/msword',
        'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
        'application/vnd.ms-excel',
        'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    }
)
PREFIXO_PUBLICO = '/uploads'


def _tamanho(file: UploadFile) -> int:
    file.file.seek(0, 2)
    tamanho = file.file.tell()
    file.file.seek(0)
    return tamanho


def validar_arquivo(file: UploadFile) -> None:
    if not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Arquivo inválido.')
    if file.content_type not in TIPOS_PERMITIDOS:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Tipo de arquivo não permitido')
    if _tamanho(file) > settings.UPLOAD_MAX_BYTES:
        limite_mb = settings.UPLOAD_MAX_BYTES // (1024 * 1024)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f'Arquivo excede o tamanho máximo de {limite_mb}MB',
        )


def salvar_arquivo(file: UploadFile, subdiretorio: str) -> dict:
    """Valida e grava o upload, devolvendo os metadados a guardar no registro.

    No backend local o arquivo vai para ``UPLOAD_DIR/<subdiretorio>`` e é servido
    em ``/uploads``; no backend S3 o caminho guardado é a URI ``s3://``.
    """
    validar_arquivo(file)
    nome_gerado = f'{uuid4().hex}{Path(file.filename).suffix.lower()}'
    chave = f'{subdiretorio}/{nome_gerado}'

    if settings.STORAGE_BACKEND == 's3':
        caminho = upload_fileobj(file.file, chave, file.content_type)
    else:
        destino = Path(settings.UPLOAD_DIR) / subdiretorio
        destino.mkdir(parents=True, exist_ok=True)
        with (destino / nome_gerado).open('wb') as saida:
            shutil.copyfileobj(file.file, saida)
        caminho = f'{PREFIXO_PUBLICO}/{chave}'

    logger.info('arquivo_armazenado', caminho=caminho, tipo=file.content_type)
    return {'name': file.filename, 'type': file.content_type, 'path': caminho}


def caminho_local(caminho: str) -> Path | None:
    """Resolve ``/uploads/...`` para o disco; ``None`` se escapar de ``UPLOAD_DIR``."""
    if not caminho.startswith(f'{PREFIXO_PUBLICO}/'):
        return None
    raiz = Path(settings.UPLOAD_DIR).resolve()
    alvo = (raiz / caminho[len(PREFIXO_PUBLICO) + 1 :]).resolve()
    if alvo == raiz or raiz not in alvo.parents:
        return None
    return alvo


def remover_arquivo(caminho: str | None) -> None:
    if not caminho:
        return
    try:
        parseado = parse_s3_uri(caminho)
        if parseado:
            if parseado[0] != settings.S3_BUCKET:
                logger.warning('remocao_recusada', caminho=caminho, motivo='bucket')
                return
            remover_objeto(caminho)
            return
        alvo = caminho_local(caminho)
        if alvo is None:
            logger.warning('remocao_recusada', caminho=caminho, motivo='fora_de_uploads')
            return
        alvo.unlink(missing_ok=True)
    except (OSError, ClientError) as exc:
        logger.warning('falha_ao_remover_arquivo', caminho=caminho, erro=str(exc))
