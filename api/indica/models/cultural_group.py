import enum
from datetime import date, datetime

from sqlalchemy import JSON, Boolean, Date, DateTime, Enum, ForeignKey, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from indica.models.base import Base


class GroupRoleEnum(str, enum.Enum):
    admin = 'admin'
    member = 'member'


class CulturalGroup(Base):
    __tablename__ = 'coletivos_culturais'

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    founding_date: Mapped[date] = mapped_column(Date, nullable=False)
    cultural_area: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    address: Mapped[dict] = mapped_column(JSON, nullable=False)
    contact_email: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_phone: Mapped[str] = mapped_column(String(20), nullable=False)
    social_media: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    portfolio_links: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    achievements: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_by: Mapped[int | None] = mapped_column(ForeignKey('usuarios.id', ondelete='SET NULL'), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    members = relationship(
        'GroupMember',
        back_populates='group',
        cascade='all, delete-orphan',
        order_by='GroupMember.id',
    )
    documents = relationship(
        'GroupDocument',
        back_populates='group',
        cascade='all, delete-orphan',
        order_by='GroupDocument.id',
    )


class GroupMember(Base):
    __tablename__ = 'membros_coletivo'
    __table_args__ = (UniqueConstraint('group_id', 'user_id', name='uq_membro_coletivo'),)

    id: Mapped[int] = mapped_column(primary_key=True)
    group_id: Mapped[int] = mapped_column(ForeignKey('coletivos_culturais.id', ondelete='CASCADE'), nullable=False, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('usuarios.id', ondelete='CASCADE'), nullable=False, index=True)
    role: Mapped[GroupRoleEnum] = mapped_column(
        Enum(GroupRoleEnum, name='group_role_enum', native_enum=False),
        nullable=False,
        default=GroupRoleEnum.member,
    )
    joined_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())

    group = relationship('CulturalGroup', back_populates='members')
    user = relationship('User')


class GroupDocument(Base):
    __tablename__ = 'documentos_coletivo'

    id: Mapped[int] = mapped_column(primary_key=True)
    group_id: Mapped[int] = mapped_column(ForeignKey('coletivos_culturais.id', ondelete='CASCADE'), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    path: Mapped[str] = mapped_column(String(500), nullable=False)
    uploaded_by: Mapped[int | None] = mapped_column(ForeignKey('usuarios.id', ondelete='SET NULL'), nullable=True)
    uploaded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())

    group = relationship('CulturalGroup', back_populates='documents')
