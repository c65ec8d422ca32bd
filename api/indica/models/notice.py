import enum
from datetime import datetime

from sqlalchemy import JSON, DateTime, Enum, Float, ForeignKey, String, Text, UniqueConstraint, event, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from indica.core.errors import ModelValidationError
from indica.core.tempo import como_utc
from indica.models.base import Base


class NoticeStatusEnum(str, enum.Enum):
    draft = 'draft'
    published = 'published'
    closed = 'closed'
    canceled = 'canceled'


DEFAULT_QUOTAS = {'race': 0, 'indigenous': 0, 'disability': 0}
DEFAULT_ACCESSIBILITY = {'architectural': [], 'communicational': [], 'attitudinal': []}
DEFAULT_APPEAL_PERIODS = {'habilitation_days': 0, 'result_days': 0}


class NoticeCategory(Base):
    __tablename__ = 'categorias_edital'
    __table_args__ = (UniqueConstraint('notice_id', 'name', name='uq_categoria_edital_nome'),)

    id: Mapped[int] = mapped_column(primary_key=True)
    notice_id: Mapped[int] = mapped_column(ForeignKey('editais.id', ondelete='CASCADE'), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)

    notice = relationship('Notice', back_populates='category_rows')


class Notice(Base):
    __tablename__ = 'editais'

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    entity_id: Mapped[int] = mapped_column(ForeignKey('entes_federados.id', ondelete='RESTRICT'), nullable=False, index=True)
    city_id: Mapped[int] = mapped_column(ForeignKey('cidades.id', ondelete='RESTRICT'), nullable=False, index=True)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    total_amount: Mapped[float] = mapped_column(Float, nullable=False)
    min_application_value: Mapped[float] = mapped_column(Float, nullable=False)
    max_application_value: Mapped[float] = mapped_column(Float, nullable=False)
    status: Mapped[NoticeStatusEnum] = mapped_column(
        Enum(NoticeStatusEnum, name='notice_status_enum', native_enum=False),
        nullable=False,
        default=NoticeStatusEnum.draft,
        index=True,
    )
    requirements: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    documents: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    evaluation_criteria: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    quotas: Mapped[dict] = mapped_column(JSON, nullable=False, default=lambda: dict(DEFAULT_QUOTAS))
    accessibility: Mapped[dict] = mapped_column(JSON, nullable=False, default=lambda: dict(DEFAULT_ACCESSIBILITY))
    stages: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    appeal_periods: Mapped[dict] = mapped_column(JSON, nullable=False, default=lambda: dict(DEFAULT_APPEAL_PERIODS))
    habilitation_documents: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    budget: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    entity = relationship('Entity', back_populates='notices')
    city = relationship('City')
    category_rows = relationship(
        'NoticeCategory',
        back_populates='notice',
        cascade='all, delete-orphan',
        order_by='NoticeCategory.id',
    )
    applications = relationship('Application', back_populates='notice')

    @property
    def categories(self) -> list[str]:
        return [categoria.name for categoria in self.category_rows]

    @categories.setter
    def categories(self, nomes: list[str]) -> None:
        unicos = list(dict.fromkeys(nome.strip() for nome in nomes if nome and nome.strip()))
        self.category_rows = [NoticeCategory(name=nome) for nome in unicos]

    def sincronizar_orcamento(self) -> None:
        self.budget = {
            'total_amount': self.total_amount,
            'min_application_value': self.min_application_value,
            'max_application_value': self.max_application_value,
        }

    def _validate_invariants(self) -> None:
        inicio = como_utc(self.start_date)
        fim = como_utc(self.end_date)
        if inicio and fim and fim <= inicio:
            raise ModelValidationError('end_date', 'A data de término deve ser após a data de início')


@event.listens_for(Notice, 'before_insert')
def _notice_before_insert(_mapper, _connection, target: Notice):
    target._validate_invariants()


@event.listens_for(Notice, 'before_update')
def _notice_before_update(_mapper, _connection, target: Notice):
    target._validate_invariants()
