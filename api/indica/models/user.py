import enum
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from indica.models.base import Base


class RoleEnum(str, enum.Enum):
    admin = 'admin'
    agent = 'agent'
    evaluator = 'evaluator'


class User(Base):
    __tablename__ = 'usuarios'

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    cpf_cnpj: Mapped[str] = mapped_column(String(18), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(20), nullable=False)
    role: Mapped[RoleEnum] = mapped_column(
        Enum(RoleEnum, name='role_enum', native_enum=False),
        nullable=False,
        default=RoleEnum.agent,
    )
    entity_id: Mapped[int | None] = mapped_column(ForeignKey('entes_federados.id', ondelete='SET NULL'), nullable=True, index=True)
    city_id: Mapped[int | None] = mapped_column(ForeignKey('cidades.id', ondelete='SET NULL'), nullable=True, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    entity = relationship('Entity')
    city = relationship('City')
    evaluator = relationship('Evaluator', back_populates='user', uselist=False)
    applications = relationship('Application', back_populates='user')
    registros_auditoria = relationship('AuditLog', back_populates='responsavel')
