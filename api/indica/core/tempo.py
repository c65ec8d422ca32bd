from datetime import UTC, datetime


def agora() -> datetime:
    return datetime.now(UTC)


def como_utc(valor: datetime | None) -> datetime | None:
    """SQLite devolve datetimes sem fuso; tudo é gravado em UTC."""
    if valor is None:
        return None
    if valor.tzinfo is None:
        return valor.replace(tzinfo=UTC)
    return valor.astimezone(UTC)
