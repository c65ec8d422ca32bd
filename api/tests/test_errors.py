from fastapi.testclient import TestClient

from indica.main import app
from indica.models import RoleEnum


def test_rota_inexistente_retorna_mensagem_padrao(client):
    response = client.get('/api/nao-existe')

    assert response.status_code == 404
    assert response.json() == {'message': 'Rota /api/nao-existe não encontrada'}


def test_health(client):
    assert client.get('/api/health').json() == {'status': 'ok'}


def test_erro_inesperado_retorna_500_generico(monkeypatch):
    def _falhar(*args, **kwargs):
        raise RuntimeError('conexão perdida')

    monkeypatch.setattr('indica.routers.notices.listar_editais', _falhar)
    client = TestClient(app, raise_server_exceptions=False)

    response = client.get('/api/notices')

    assert response.status_code == 500
    assert response.json() == {'message': 'Erro interno do servidor'}


def test_avaliacoes_ainda_nao_implementadas(client, criar_usuario, headers):
    parecerista = criar_usuario(RoleEnum.evaluator)

    response = client.get('/api/evaluations/my-evaluations', headers=headers(parecerista))

    assert response.status_code == 501
    assert response.json()['message'] == 'Funcionalidade em desenvolvimento'


def test_avaliacoes_exigem_parecerista_ou_admin(client, agente, headers):
    response = client.post('/api/evaluations', headers=headers(agente))

    assert response.status_code == 403


def test_atribuicao_de_pareceristas_exige_admin(client, criar_usuario, headers):
    parecerista = criar_usuario(RoleEnum.evaluator)

    response = client.post('/api/evaluations/application/1/assign', headers=headers(parecerista))

    assert response.status_code == 403
