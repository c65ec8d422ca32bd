import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, String, Text, event, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from indica.core.errors import ModelValidationError
from indica.core.tempo import como_utc
from indica.models.base import Base

TIPOS_EVENTO = (
    'Assistencial',
    'Cívico',
    'Comercial',
    'Cultural',
    'Empresarial',
    'Esportivo',
    'Folclórico',
    'Gastronômico',
    'Religioso',
    'Social',
    'Técnico',
    'Outros',
)

CATEGORIAS_EVENTO = (
    'Artístico/Cultural/Folclórico',
    'Científico ou Técnico',
    'Comercial ou Promocional',
    'Ecoturismo',
    'Esportivo',
    'Gastronômico',
    'Junino',
    'Moda',
    'Religioso',
    'Rural',
    'Social/Cívico/Histórico',
    'Outro',
)


class EventStatusEnum(str, enum.Enum):
    upcoming = 'upcoming'
    ongoing = 'ongoing'
    finished = 'finished'


class CulturalEvent(Base):
    __tablename__ = 'eventos_culturais'

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    city: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    state: Mapped[str] = mapped_column(String(2), nullable=False, index=True)
    event_type: Mapped[str] = mapped_column(String(50), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[EventStatusEnum] = mapped_column(
        Enum(EventStatusEnum, name='event_status_enum', native_enum=False),
        nullable=False,
        default=EventStatusEnum.upcoming,
    )
    created_by: Mapped[int] = mapped_column(ForeignKey('usuarios.id', ondelete='CASCADE'), nullable=False, index=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    contact_info: Mapped[str | None] = mapped_column(String(255), nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    criador = relationship('User')

    def _validate_invariants(self) -> None:
        inicio = como_utc(self.start_date)
        fim = como_utc(self.end_date)
        if inicio and fim and fim < inicio:
            raise ModelValidationError('end_date', 'A data de término não pode ser anterior à data de início')


@event.listens_for(CulturalEvent, 'before_insert')
def _event_before_insert(_mapper, _connection, target: CulturalEvent):
    target._validate_invariants()


@event.listens_for(CulturalEvent, 'before_update')
def _event_before_update(_mapper, _connection, target: CulturalEvent):
    target._validate_invariants()
