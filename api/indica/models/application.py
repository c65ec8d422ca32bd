import enum
from datetime import datetime

from sqlalchemy import JSON, DateTime, Enum, Float, ForeignKey, String, Text, UniqueConstraint, event, func, inspect, select
from sqlalchemy.orm import Mapped, mapped_column, relationship

from indica.core.errors import ModelValidationError
from indica.models.base import Base
from indica.models.notice import Notice


class ApplicationStatusEnum(str, enum.Enum):
    draft = 'draft'
    submitted = 'submitted'
    evaluation = 'evaluation'
    approved = 'approved'
    rejected = 'rejected'


class Application(Base):
    __tablename__ = 'inscricoes'
    __table_args__ = (UniqueConstraint('user_id', 'notice_id', name='uq_inscricao_usuario_edital'),)

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    notice_id: Mapped[int] = mapped_column(ForeignKey('editais.id', ondelete='RESTRICT'), nullable=False, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('usuarios.id', ondelete='RESTRICT'), nullable=False, index=True)
    project_name: Mapped[str] = mapped_column(String(255), nullable=False)
    project_description: Mapped[str] = mapped_column(Text, nullable=False)
    requested_amount: Mapped[float] = mapped_column(Float, nullable=False)
    status: Mapped[ApplicationStatusEnum] = mapped_column(
        Enum(ApplicationStatusEnum, name='application_status_enum', native_enum=False),
        nullable=False,
        default=ApplicationStatusEnum.draft,
        index=True,
    )
    form_data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    documents: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    evaluations: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    submitted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    notice = relationship('Notice', back_populates='applications')
    user = relationship('User', back_populates='applications')


def _formatar_valor(valor: float) -> str:
    return str(int(valor)) if float(valor).is_integer() else str(valor)


def _validar_valor_solicitado(connection, target: Application) -> None:
    limites = connection.execute(
        select(Notice.min_application_value, Notice.max_application_value).where(Notice.id == target.notice_id)
    ).first()
    if limites is None:
        return
    minimo, maximo = limites
    valor = float(target.requested_amount)
    if valor < minimo:
        raise ModelValidationError('requested_amount', f'O valor solicitado deve ser no mínimo R$ {_formatar_valor(minimo)}')
    if valor > maximo:
        raise ModelValidationError('requested_amount', f'O valor solicitado deve ser no máximo R$ {_formatar_valor(maximo)}')


@event.listens_for(Application, 'before_insert')
def _application_before_insert(_mapper, connection, target: Application):
    _validar_valor_solicitado(connection, target)


@event.listens_for(Application, 'before_update')
def _application_before_update(_mapper, connection, target: Application):
    estado = inspect(target)
    if estado.attrs.requested_amount.history.has_changes() or estado.attrs.notice_id.history.has_changes():
        _validar_valor_solicitado(connection, target)
