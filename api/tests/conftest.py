import os
from datetime import UTC, datetime, timedelta
from itertools import count

os.environ['DATABASE_URL'] = 'sqlite://'
os.environ['JWT_SECRET'] = 'segredo-de-teste'
os.environ['STORAGE_BACKEND'] = 'local'

import pytest
from fastapi.testclient import TestClient

from indica.core.config import get_settings
from indica.core.security import create_access_token, hash_password
from indica.db.session import SessionLocal, engine
from indica.main import app
from indica.models import Base, City, Entity, Notice, NoticeStatusEnum, RoleEnum, User
from indica.models.entity import EntityTypeEnum

SENHA_PADRAO = 'senha123'
_sequencia = count(1)


def _persistir(obj):
    with SessionLocal() as db:
        db.add(obj)
        db.commit()
        db.refresh(obj)
        db.expunge(obj)
    return obj


def auth(user: User) -> dict[str, str]:
    return {'Authorization': f'Bearer {create_access_token(user)}'}


@pytest.fixture(autouse=True)
def banco_limpo():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(autouse=True)
def uploads_temporarios(tmp_path, monkeypatch):
    monkeypatch.setattr(get_settings(), 'UPLOAD_DIR', str(tmp_path / 'uploads'))
    return tmp_path / 'uploads'


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def criar_cidade():
    def _criar(name: str = 'Brasília', state: str = 'DF') -> City:
        return _persistir(City(name=name, state=state, region='Centro-Oeste'))

    return _criar


@pytest.fixture
def cidades(criar_cidade) -> tuple[City, City]:
    return criar_cidade('Brasília', 'DF'), criar_cidade('Goiânia', 'GO')


@pytest.fixture
def ente(cidades) -> Entity:
    return _persistir(
        Entity(
            name='Secretaria de Cultura do DF',
            type=EntityTypeEnum.state,
            cnpj='00.394.700/0001-08',
            address='Via N2, Anexo do Teatro Nacional',
            contact_email='cultura@df.gov.br',
            contact_phone='(61) 3325-6200',
            city_id=cidades[0].id,
        )
    )


@pytest.fixture
def outro_ente(cidades) -> Entity:
    return _persistir(
        Entity(
            name='Secretaria Municipal de Cultura de Goiânia',
            type=EntityTypeEnum.municipal,
            cnpj='01.612.092/0001-23',
            address='Av. do Cerrado, 999',
            contact_email='cultura@goiania.go.gov.br',
            contact_phone='(62) 3524-1000',
            city_id=cidades[1].id,
        )
    )


@pytest.fixture
def criar_usuario():
    def _criar(
        role: RoleEnum = RoleEnum.agent,
        city_id: int | None = None,
        entity_id: int | None = None,
        is_active: bool = True,
    ) -> User:
        numero = next(_sequencia)
        return _persistir(
            User(
                cpf_cnpj=f'{numero:011d}',
                name=f'Usuário {numero}',
                email=f'usuario{numero}@indica.com.br',
                phone='(61) 99999-0000',
                role=role,
                city_id=city_id,
                entity_id=entity_id,
                is_active=is_active,
                password_hash=hash_password(SENHA_PADRAO),
            )
        )

    return _criar


@pytest.fixture
def admin(criar_usuario, ente) -> User:
    return criar_usuario(RoleEnum.admin, entity_id=ente.id)


@pytest.fixture
def agente(criar_usuario) -> User:
    return criar_usuario(RoleEnum.agent)


@pytest.fixture
def criar_edital(ente, cidades):
    def _criar(
        status: NoticeStatusEnum = NoticeStatusEnum.published,
        city_id: int | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        min_application_value: float = 1000,
        max_application_value: float = 5000,
        title: str = 'Edital de Fomento à Cultura',
    ) -> Notice:
        agora = datetime.now(UTC)
        notice = Notice(
            title=title,
            description='Seleção de projetos culturais.',
            entity_id=ente.id,
            city_id=city_id or cidades[0].id,
            start_date=start_date or agora - timedelta(days=1),
            end_date=end_date or agora + timedelta(days=30),
            total_amount=100000,
            min_application_value=min_application_value,
            max_application_value=max_application_value,
            status=status,
        )
        notice.sincronizar_orcamento()
        return _persistir(notice)

    return _criar


@pytest.fixture
def edital(criar_edital) -> Notice:
    return criar_edital()


@pytest.fixture
def headers():
    return auth
