from indica.db.session import SessionLocal
from indica.models import RoleEnum, User

SENHA_PADRAO = 'senha123'


def _payload_registro(**extra) -> dict:
    payload = {
        'cpf_cnpj': '123.456.789-01',
        'name': 'Maria Cultura',
        'email': 'Maria@Indica.com.br',
        'password': 'segura123',
        'phone': '(61) 98888-7777',
    }
    payload.update(extra)
    return payload


def test_registro_cria_sempre_agente_cultural(client):
    response = client.post('/api/auth/register', json=_payload_registro(role='admin'))

    assert response.status_code == 201
    body = response.json()
    assert body['token']
    assert body['user']['role'] == 'agent'
    assert body['user']['cpf_cnpj'] == '12345678901'
    assert body['user']['email'] == 'maria@indica.com.br'


def test_registro_duplicado_retorna_400(client):
    client.post('/api/auth/register', json=_payload_registro())
    response = client.post('/api/auth/register', json=_payload_registro(email='outra@indica.com.br'))

    assert response.status_code == 400
    assert response.json()['message'] == 'Usuário já cadastrado com este CPF/CNPJ ou email.'


def test_registro_com_telefone_invalido_retorna_erros_por_campo(client):
    response = client.post('/api/auth/register', json=_payload_registro(phone='61988887777'))

    assert response.status_code == 400
    body = response.json()
    assert body['message'] == 'Dados inválidos fornecidos.'
    assert any(erro['field'] == 'phone' for erro in body['errors'])


def test_login_aceita_cpf_formatado(client, agente):
    cpf = agente.cpf_cnpj
    formatado = f'{cpf[:3]}.{cpf[3:6]}.{cpf[6:9]}-{cpf[9:]}'
    response = client.post('/api/auth/login', json={'cpf_cnpj': formatado, 'password': SENHA_PADRAO})

    assert response.status_code == 200
    assert response.json()['user']['id'] == agente.id


def test_login_com_senha_errada_retorna_401(client, agente):
    response = client.post('/api/auth/login', json={'cpf_cnpj': agente.cpf_cnpj, 'password': 'errada'})

    assert response.status_code == 401
    assert response.json()['message'] == 'Credenciais inválidas.'


def test_login_de_conta_desativada_retorna_401(client, criar_usuario):
    inativo = criar_usuario(is_active=False)
    response = client.post('/api/auth/login', json={'cpf_cnpj': inativo.cpf_cnpj, 'password': SENHA_PADRAO})

    assert response.status_code == 401
    assert 'Conta desativada' in response.json()['message']


def test_caminho_legado_de_autenticacao(client, agente):
    response = client.post('/auth/login', json={'cpf_cnpj': agente.cpf_cnpj, 'password': SENHA_PADRAO})

    assert response.status_code == 200
    token = response.json()['token']
    me = client.get('/auth/me', headers={'Authorization': f'Bearer {token}'})
    assert me.status_code == 200
    assert me.json()['id'] == agente.id


def test_rota_protegida_sem_token_retorna_401(client):
    response = client.get('/api/auth/me')

    assert response.status_code == 401
    assert response.json()['message'] == 'Token de autenticação não fornecido.'


def test_token_invalido_retorna_401(client):
    response = client.get('/api/auth/me', headers={'Authorization': 'Bearer nao-e-um-jwt'})

    assert response.status_code == 401
    assert response.json()['message'] == 'Token inválido ou expirado.'


def test_troca_de_senha(client, agente, headers):
    errada = client.put(
        '/api/auth/password',
        json={'current_password': 'errada', 'new_password': 'nova-senha'},
        headers=headers(agente),
    )
    assert errada.status_code == 401

    response = client.put(
        '/api/auth/password',
        json={'current_password': SENHA_PADRAO, 'new_password': 'nova-senha'},
        headers=headers(agente),
    )
    assert response.status_code == 200

    login = client.post('/api/auth/login', json={'cpf_cnpj': agente.cpf_cnpj, 'password': 'nova-senha'})
    assert login.status_code == 200


def test_listagem_de_usuarios_exige_admin(client, agente, admin, headers):
    assert client.get('/api/users', headers=headers(agente)).status_code == 403

    response = client.get('/api/users', headers=headers(admin))
    assert response.status_code == 200
    assert {item['id'] for item in response.json()} == {agente.id, admin.id}


def test_admin_desativa_usuario_e_token_deixa_de_valer(client, agente, admin, headers):
    response = client.put(f'/api/users/{agente.id}', json={'is_active': False}, headers=headers(admin))
    assert response.status_code == 200

    with SessionLocal() as db:
        assert db.get(User, agente.id).is_active is False
    assert client.get('/api/auth/me', headers=headers(agente)).status_code == 401


def test_admin_altera_papel_de_usuario(client, agente, admin, headers):
    response = client.put(f'/api/users/{agente.id}', json={'role': 'evaluator'}, headers=headers(admin))

    assert response.status_code == 200
    assert response.json()['role'] == RoleEnum.evaluator.value
