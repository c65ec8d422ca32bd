import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)


class ModelValidationError(ValueError):
    """Violação de invariante detectada na camada de modelo."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class DuplicateRecordError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def _campo(loc: tuple) -> str:
    partes = [str(parte) for parte in loc if parte not in ('body', 'query', 'path')]
    return '.'.join(partes) or 'body'


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == 'Not Found':
        message = f'Rota {request.url.path} não encontrada'
    else:
        message = exc.detail
    return JSONResponse(status_code=exc.status_code, content={'message': message}, headers=getattr(exc, 'headers', None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [{'field': _campo(tuple(erro.get('loc', ()))), 'message': erro.get('msg', '')} for erro in exc.errors()]
    logger.info('requisicao_invalida', path=request.url.path, errors=errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'message': 'Dados inválidos fornecidos.', 'errors': errors},
    )


async def model_validation_handler(request: Request, exc: ModelValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'message': exc.message, 'errors': [{'field': exc.field, 'message': exc.message}]},
    )


async def duplicate_record_handler(request: Request, exc: DuplicateRecordError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={'message': exc.message})


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning('violacao_de_integridade', path=request.url.path, erro=str(exc.orig))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'message': 'Registro duplicado ou referência inválida.'},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error('erro_nao_tratado', path=request.url.path, method=request.method, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={'message': 'Erro interno do servidor'},
    )


def registrar_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ModelValidationError, model_validation_handler)
    app.add_exception_handler(DuplicateRecordError, duplicate_record_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
