import enum
from datetime import date, datetime

from sqlalchemy import JSON, Boolean, DateTime, Enum, ForeignKey, String, Text, event, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from indica.core.errors import ModelValidationError
from indica.models.base import Base


class EntityTypeEnum(str, enum.Enum):
    municipal = 'municipal'
    state = 'state'
    federal = 'federal'


class EntityStatusEnum(str, enum.Enum):
    pending = 'pending'
    approved = 'approved'
    rejected = 'rejected'


def _como_data(valor) -> date | None:
    if valor is None or valor == '':
        return None
    if isinstance(valor, datetime):
        return valor.date()
    if isinstance(valor, date):
        return valor
    return date.fromisoformat(str(valor)[:10])


class Entity(Base):
    __tablename__ = 'entes_federados'

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[EntityTypeEnum] = mapped_column(Enum(EntityTypeEnum, name='entity_type_enum', native_enum=False), nullable=False)
    cnpj: Mapped[str] = mapped_column(String(18), nullable=False, unique=True, index=True)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    contact_email: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_phone: Mapped[str] = mapped_column(String(20), nullable=False)
    city_id: Mapped[int | None] = mapped_column(ForeignKey('cidades.id', ondelete='SET NULL'), nullable=True, index=True)
    legal_representative: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    technical_representative: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    cultural_council: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    cultural_fund: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    cultural_plan: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    bank_info: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    required_documents: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    status: Mapped[EntityStatusEnum] = mapped_column(
        Enum(EntityStatusEnum, name='entity_status_enum', native_enum=False),
        nullable=False,
        default=EntityStatusEnum.pending,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    city = relationship('City')
    notices = relationship('Notice', back_populates='entity')

    def _validate_invariants(self) -> None:
        conselho = self.cultural_council or {}
        ultima_eleicao = _como_data(conselho.get('last_election_date'))
        fim_mandato = _como_data(conselho.get('term_end_date'))
        if ultima_eleicao and ultima_eleicao > date.today():
            raise ModelValidationError(
                'cultural_council.last_election_date',
                'A data da última eleição do conselho não pode estar no futuro.',
            )
        if ultima_eleicao and fim_mandato and fim_mandato <= ultima_eleicao:
            raise ModelValidationError(
                'cultural_council.term_end_date',
                'O fim do mandato do conselho deve ser posterior à última eleição.',
            )

        plano = self.cultural_plan or {}
        inicio = _como_data(plano.get('start_date'))
        fim = _como_data(plano.get('end_date'))
        if inicio and fim and inicio >= fim:
            raise ModelValidationError(
                'cultural_plan.end_date',
                'O início do plano de cultura deve ser anterior ao seu término.',
            )


@event.listens_for(Entity, 'before_insert')
def _entity_before_insert(_mapper, _connection, target: Entity):
    target._validate_invariants()


@event.listens_for(Entity, 'before_update')
def _entity_before_update(_mapper, _connection, target: Entity):
    target._validate_invariants()
