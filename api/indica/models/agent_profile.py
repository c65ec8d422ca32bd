from datetime import date, datetime

from sqlalchemy import JSON, Boolean, Date, DateTime, Float, ForeignKey, Integer, String, Text, event, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from indica.core.errors import ModelValidationError
from indica.models.base import Base

IDADE_MINIMA = 18

# Campos omitidos na visualização pública do perfil.
CAMPOS_SENSIVEIS = (
    'monthly_income',
    'household_income',
    'household_members',
    'has_disability',
    'disability_details',
    'accessibility_needs',
)


class AgentProfile(Base):
    __tablename__ = 'perfis_agente'

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('usuarios.id', ondelete='CASCADE'), nullable=False, unique=True, index=True)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    gender: Mapped[str] = mapped_column(String(50), nullable=False)
    race_ethnicity: Mapped[str] = mapped_column(String(50), nullable=False)
    education: Mapped[str] = mapped_column(String(100), nullable=False)
    address: Mapped[dict] = mapped_column(JSON, nullable=False)
    monthly_income: Mapped[float] = mapped_column(Float, nullable=False)
    household_income: Mapped[float] = mapped_column(Float, nullable=False)
    household_members: Mapped[int] = mapped_column(Integer, nullable=False)
    occupation: Mapped[str] = mapped_column(String(100), nullable=False)
    work_regime: Mapped[str] = mapped_column(String(100), nullable=False)
    cultural_area: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    years_of_experience: Mapped[int] = mapped_column(Integer, nullable=False)
    portfolio_links: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    biography: Mapped[str] = mapped_column(Text, nullable=False)
    has_disability: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    disability_details: Mapped[str | None] = mapped_column(Text, nullable=True)
    accessibility_needs: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    user = relationship('User')

    def _validate_invariants(self) -> None:
        hoje = date.today()
        try:
            limite = hoje.replace(year=hoje.year - IDADE_MINIMA)
        except ValueError:
            # 29 de fevereiro
            limite = hoje.replace(year=hoje.year - IDADE_MINIMA, day=28)
        if self.date_of_birth and self.date_of_birth > limite:
            raise ModelValidationError('date_of_birth', 'O agente cultural deve ter pelo menos 18 anos')


@event.listens_for(AgentProfile, 'before_insert')
def _profile_before_insert(_mapper, _connection, target: AgentProfile):
    target._validate_invariants()


@event.listens_for(AgentProfile, 'before_update')
def _profile_before_update(_mapper, _connection, target: AgentProfile):
    target._validate_invariants()
