from pydantic import BaseModel


class MensagemOut(BaseModel):
    message: str


class PaginacaoOut(BaseModel):
    total: int
    page: int
    limit: int
    pages: int


def montar_paginacao(total: int, page: int, limit: int) -> PaginacaoOut:
    return PaginacaoOut(total=total, page=page, limit=limit, pages=(total + limit - 1) // limit if limit else 0)
