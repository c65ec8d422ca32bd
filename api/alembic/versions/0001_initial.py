"""initial schema

Revision ID: 0001_initial
Revises: 
Create Date: 2026-10-19 00:00:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


role_enum = sa.Enum('admin', 'agent', 'evaluator', name='role_enum', native_enum=False)
entity_type_enum = sa.Enum('municipal', 'state', 'federal', name='entity_type_enum', native_enum=False)
entity_status_enum = sa.Enum('pending', 'approved', 'rejected', name='entity_status_enum', native_enum=False)
notice_status_enum = sa.Enum('draft', 'published', 'closed', 'canceled', name='notice_status_enum', native_enum=False)
application_status_enum = sa.Enum(
    'draft',
    'submitted',
    'evaluation',
    'approved',
    'rejected',
    name='application_status_enum',
    native_enum=False,
)
group_role_enum = sa.Enum('admin', 'member', name='group_role_enum', native_enum=False)
event_status_enum = sa.Enum('upcoming', 'ongoing', 'finished', name='event_status_enum', native_enum=False)
acao_audit_enum = sa.Enum('CREATE', 'UPDATE', 'DELETE', 'STATUS_CHANGE', name='acao_audit_enum', native_enum=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'cidades',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('state', sa.String(length=2), nullable=False),
        sa.Column('ibge_code', sa.String(length=7), nullable=True),
        sa.Column('is_capital', sa.Boolean(), nullable=False),
        sa.Column('region', sa.String(length=20), nullable=True),
        sa.Column('population', sa.Integer(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name', 'state', name='uq_cidade_nome_uf'),
        sa.UniqueConstraint('ibge_code'),
    )
    op.create_index(op.f('ix_cidades_id'), 'cidades', ['id'], unique=False)
    op.create_index(op.f('ix_cidades_name'), 'cidades', ['name'], unique=False)
    op.create_index(op.f('ix_cidades_state'), 'cidades', ['state'], unique=False)

    op.create_table(
        'entes_federados',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('type', entity_type_enum, nullable=False),
        sa.Column('cnpj', sa.String(length=18), nullable=False),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('contact_email', sa.String(length=255), nullable=False),
        sa.Column('contact_phone', sa.String(length=20), nullable=False),
        sa.Column('city_id', sa.Integer(), nullable=True),
        sa.Column('legal_representative', sa.JSON(), nullable=True),
        sa.Column('technical_representative', sa.JSON(), nullable=True),
        sa.Column('cultural_council', sa.JSON(), nullable=True),
        sa.Column('cultural_fund', sa.JSON(), nullable=True),
        sa.Column('cultural_plan', sa.JSON(), nullable=True),
        sa.Column('bank_info', sa.JSON(), nullable=True),
        sa.Column('required_documents', sa.JSON(), nullable=False),
        sa.Column('status', entity_status_enum, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['city_id'], ['cidades.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_entes_federados_id'), 'entes_federados', ['id'], unique=False)
    op.create_index(op.f('ix_entes_federados_cnpj'), 'entes_federados', ['cnpj'], unique=True)
    op.create_index(op.f('ix_entes_federados_city_id'), 'entes_federados', ['city_id'], unique=False)

    op.create_table(
        'usuarios',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('cpf_cnpj', sa.String(length=18), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=False),
        sa.Column('role', role_enum, nullable=False),
        sa.Column('entity_id', sa.Integer(), nullable=True),
        sa.Column('city_id', sa.Integer(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['entity_id'], ['entes_federados.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['city_id'], ['cidades.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_usuarios_id'), 'usuarios', ['id'], unique=False)
    op.create_index(op.f('ix_usuarios_cpf_cnpj'), 'usuarios', ['cpf_cnpj'], unique=True)
    op.create_index(op.f('ix_usuarios_email'), 'usuarios', ['email'], unique=True)
    op.create_index(op.f('ix_usuarios_entity_id'), 'usuarios', ['entity_id'], unique=False)
    op.create_index(op.f('ix_usuarios_city_id'), 'usuarios', ['city_id'], unique=False)

    op.create_table(
        'editais',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('entity_id', sa.Integer(), nullable=False),
        sa.Column('city_id', sa.Integer(), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('total_amount', sa.Float(), nullable=False),
        sa.Column('min_application_value', sa.Float(), nullable=False),
        sa.Column('max_application_value', sa.Float(), nullable=False),
        sa.Column('status', notice_status_enum, nullable=False),
        sa.Column('requirements', sa.JSON(), nullable=False),
        sa.Column('documents', sa.JSON(), nullable=False),
        sa.Column('evaluation_criteria', sa.JSON(), nullable=False),
        sa.Column('quotas', sa.JSON(), nullable=False),
        sa.Column('accessibility', sa.JSON(), nullable=False),
        sa.Column('stages', sa.JSON(), nullable=False),
        sa.Column('appeal_periods', sa.JSON(), nullable=False),
        sa.Column('habilitation_documents', sa.JSON(), nullable=False),
        sa.Column('budget', sa.JSON(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['entity_id'], ['entes_federados.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['city_id'], ['cidades.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_editais_id'), 'editais', ['id'], unique=False)
    op.create_index(op.f('ix_editais_entity_id'), 'editais', ['entity_id'], unique=False)
    op.create_index(op.f('ix_editais_city_id'), 'editais', ['city_id'], unique=False)
    op.create_index(op.f('ix_editais_start_date'), 'editais', ['start_date'], unique=False)
    op.create_index(op.f('ix_editais_status'), 'editais', ['status'], unique=False)

    op.create_table(
        'categorias_edital',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('notice_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.ForeignKeyConstraint(['notice_id'], ['editais.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('notice_id', 'name', name='uq_categoria_edital_nome'),
    )
    op.create_index(op.f('ix_categorias_edital_notice_id'), 'categorias_edital', ['notice_id'], unique=False)
    op.create_index(op.f('ix_categorias_edital_name'), 'categorias_edital', ['name'], unique=False)

    op.create_table(
        'inscricoes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('notice_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('project_name', sa.String(length=255), nullable=False),
        sa.Column('project_description', sa.Text(), nullable=False),
        sa.Column('requested_amount', sa.Float(), nullable=False),
        sa.Column('status', application_status_enum, nullable=False),
        sa.Column('form_data', sa.JSON(), nullable=False),
        sa.Column('documents', sa.JSON(), nullable=False),
        sa.Column('evaluations', sa.JSON(), nullable=False),
        sa.Column('submitted_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['notice_id'], ['editais.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['user_id'], ['usuarios.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'notice_id', name='uq_inscricao_usuario_edital'),
    )
    op.create_index(op.f('ix_inscricoes_id'), 'inscricoes', ['id'], unique=False)
    op.create_index(op.f('ix_inscricoes_notice_id'), 'inscricoes', ['notice_id'], unique=False)
    op.create_index(op.f('ix_inscricoes_user_id'), 'inscricoes', ['user_id'], unique=False)

    op.create_table(
        'pareceristas',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('entity_id', sa.Integer(), nullable=False),
        sa.Column('specialties', sa.JSON(), nullable=False),
        sa.Column('biography', sa.Text(), nullable=True),
        sa.Column('education', sa.Text(), nullable=True),
        sa.Column('experience', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['usuarios.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['entity_id'], ['entes_federados.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_pareceristas_id'), 'pareceristas', ['id'], unique=False)
    op.create_index(op.f('ix_pareceristas_user_id'), 'pareceristas', ['user_id'], unique=True)
    op.create_index(op.f('ix_pareceristas_entity_id'), 'pareceristas', ['entity_id'], unique=False)

    op.create_table(
        'coletivos_culturais',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('founding_date', sa.Date(), nullable=False),
        sa.Column('cultural_area', sa.JSON(), nullable=False),
        sa.Column('address', sa.JSON(), nullable=False),
        sa.Column('contact_email', sa.String(length=255), nullable=False),
        sa.Column('contact_phone', sa.String(length=20), nullable=False),
        sa.Column('social_media', sa.JSON(), nullable=False),
        sa.Column('portfolio_links', sa.JSON(), nullable=False),
        sa.Column('achievements', sa.JSON(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_by', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['created_by'], ['usuarios.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_coletivos_culturais_id'), 'coletivos_culturais', ['id'], unique=False)
    op.create_index(op.f('ix_coletivos_culturais_name'), 'coletivos_culturais', ['name'], unique=False)

    op.create_table(
        'membros_coletivo',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('group_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('role', group_role_enum, nullable=False),
        sa.Column('joined_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['group_id'], ['coletivos_culturais.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['usuarios.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('group_id', 'user_id', name='uq_membro_coletivo'),
    )
    op.create_index(op.f('ix_membros_coletivo_group_id'), 'membros_coletivo', ['group_id'], unique=False)
    op.create_index(op.f('ix_membros_coletivo_user_id'), 'membros_coletivo', ['user_id'], unique=False)

    op.create_table(
        'documentos_coletivo',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('group_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=100), nullable=True),
        sa.Column('path', sa.String(length=500), nullable=False),
        sa.Column('uploaded_by', sa.Integer(), nullable=True),
        sa.Column('uploaded_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['group_id'], ['coletivos_culturais.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['uploaded_by'], ['usuarios.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_documentos_coletivo_group_id'), 'documentos_coletivo', ['group_id'], unique=False)

    op.create_table(
        'perfis_agente',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=False),
        sa.Column('gender', sa.String(length=50), nullable=False),
        sa.Column('race_ethnicity', sa.String(length=50), nullable=False),
        sa.Column('education', sa.String(length=100), nullable=False),
        sa.Column('address', sa.JSON(), nullable=False),
        sa.Column('monthly_income', sa.Float(), nullable=False),
        sa.Column('household_income', sa.Float(), nullable=False),
        sa.Column('household_members', sa.Integer(), nullable=False),
        sa.Column('occupation', sa.String(length=100), nullable=False),
        sa.Column('work_regime', sa.String(length=100), nullable=False),
        sa.Column('cultural_area', sa.JSON(), nullable=False),
        sa.Column('years_of_experience', sa.Integer(), nullable=False),
        sa.Column('portfolio_links', sa.JSON(), nullable=False),
        sa.Column('biography', sa.Text(), nullable=False),
        sa.Column('has_disability', sa.Boolean(), nullable=False),
        sa.Column('disability_details', sa.Text(), nullable=True),
        sa.Column('accessibility_needs', sa.JSON(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['usuarios.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_perfis_agente_id'), 'perfis_agente', ['id'], unique=False)
    op.create_index(op.f('ix_perfis_agente_user_id'), 'perfis_agente', ['user_id'], unique=True)

    op.create_table(
        'portais_entes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('entity_id', sa.Integer(), nullable=False),
        sa.Column('organizational_structure', sa.JSON(), nullable=False),
        sa.Column('finances', sa.JSON(), nullable=False),
        sa.Column('procurement', sa.JSON(), nullable=False),
        sa.Column('staff', sa.JSON(), nullable=False),
        sa.Column('programs', sa.JSON(), nullable=False),
        sa.Column('reports', sa.JSON(), nullable=False),
        sa.Column('legislation', sa.JSON(), nullable=False),
        sa.Column('cultural_calendar', sa.JSON(), nullable=False),
        sa.Column('ombudsman', sa.JSON(), nullable=False),
        sa.Column('faq', sa.JSON(), nullable=False),
        sa.Column('open_data', sa.JSON(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['entity_id'], ['entes_federados.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_portais_entes_id'), 'portais_entes', ['id'], unique=False)
    op.create_index(op.f('ix_portais_entes_entity_id'), 'portais_entes', ['entity_id'], unique=True)

    op.create_table(
        'eventos_culturais',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('city', sa.String(length=120), nullable=False),
        sa.Column('state', sa.String(length=2), nullable=False),
        sa.Column('event_type', sa.String(length=50), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=False),
        sa.Column('status', event_status_enum, nullable=False),
        sa.Column('created_by', sa.Integer(), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('website', sa.String(length=500), nullable=True),
        sa.Column('contact_info', sa.String(length=255), nullable=True),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['created_by'], ['usuarios.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_eventos_culturais_id'), 'eventos_culturais', ['id'], unique=False)
    op.create_index(op.f('ix_eventos_culturais_start_date'), 'eventos_culturais', ['start_date'], unique=False)
    op.create_index(op.f('ix_eventos_culturais_city'), 'eventos_culturais', ['city'], unique=False)
    op.create_index(op.f('ix_eventos_culturais_state'), 'eventos_culturais', ['state'], unique=False)
    op.create_index(op.f('ix_eventos_culturais_created_by'), 'eventos_culturais', ['created_by'], unique=False)

    op.create_table(
        'audit_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('entidade', sa.String(length=100), nullable=False),
        sa.Column('entidade_id', sa.Integer(), nullable=False),
        sa.Column('acao', acao_audit_enum, nullable=False),
        sa.Column('old_value', sa.JSON(), nullable=True),
        sa.Column('new_value', sa.JSON(), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('notice_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['created_by'], ['usuarios.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['notice_id'], ['editais.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_audit_logs_id'), 'audit_logs', ['id'], unique=False)
    op.create_index(op.f('ix_audit_logs_entidade'), 'audit_logs', ['entidade'], unique=False)
    op.create_index(op.f('ix_audit_logs_entidade_id'), 'audit_logs', ['entidade_id'], unique=False)
    op.create_index(op.f('ix_audit_logs_notice_id'), 'audit_logs', ['notice_id'], unique=False)
    op.create_index(op.f('ix_audit_logs_created_at'), 'audit_logs', ['created_at'], unique=False)


def downgrade() -> None:
    op.drop_table('audit_logs')
    op.drop_table('eventos_culturais')
    op.drop_table('portais_entes')
    op.drop_table('perfis_agente')
    op.drop_table('documentos_coletivo')
    op.drop_table('membros_coletivo')
    op.drop_table('coletivos_culturais')
    op.drop_table('pareceristas')
    op.drop_table('inscricoes')
    op.drop_table('categorias_edital')
    op.drop_table('editais')
    op.drop_table('usuarios')
    op.drop_table('entes_federados')
    op.drop_table('cidades')
