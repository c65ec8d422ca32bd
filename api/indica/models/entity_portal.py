from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from indica.models.base import Base

SECOES = (
    'organizational_structure',
    'finances',
    'procurement',
    'staff',
    'programs',
    'reports',
    'legislation',
    'cultural_calendar',
    'ombudsman',
    'faq',
    'open_data',
)

SECOES_OBJETO = ('organizational_structure', 'finances', 'procurement', 'ombudsman')

# Seções (ou sub-listas de seções-objeto) que aceitam inclusão de itens.
SECOES_LISTA = (
    'organizational_structure.departments',
    'finances.revenues',
    'finances.expenses',
    'procurement.bids',
    'procurement.contracts',
    'staff',
    'programs',
    'reports',
    'legislation',
    'cultural_calendar',
    'faq',
    'open_data',
)


class EntityPortal(Base):
    __tablename__ = 'portais_entes'

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    entity_id: Mapped[int] = mapped_column(
        ForeignKey('entes_federados.id', ondelete='CASCADE'),
        nullable=False,
        unique=True,
        index=True,
    )
    organizational_structure: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    finances: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    procurement: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    staff: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    programs: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    reports: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    legislation: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    cultural_calendar: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    ombudsman: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    faq: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    open_data: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    entity = relationship('Entity')
