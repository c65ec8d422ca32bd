from indica.db.session import SessionLocal
from indica.models import Evaluator, RoleEnum, User


def _criar_parecerista(client, admin, user_id, headers, **extra):
    payload = {'user_id': user_id, 'specialties': ['Música', 'Audiovisual'], 'biography': 'Produtora musical.'}
    payload.update(extra)
    return client.post('/api/evaluators', json=payload, headers=headers(admin))


def test_criar_parecerista_promove_usuario(client, admin, agente, headers):
    response = _criar_parecerista(client, admin, agente.id, headers)

    assert response.status_code == 201
    body = response.json()
    assert body['entity_id'] == admin.entity_id
    assert body['user']['id'] == agente.id
    with SessionLocal() as db:
        assert db.get(User, agente.id).role == RoleEnum.evaluator


def test_parecerista_duplicado_retorna_400(client, admin, agente, headers):
    _criar_parecerista(client, admin, agente.id, headers)

    response = _criar_parecerista(client, admin, agente.id, headers)

    assert response.status_code == 400
    assert response.json()['message'] == 'Este usuário já é um parecerista'


def test_usuario_inexistente_retorna_400(client, admin, headers):
    response = _criar_parecerista(client, admin, 999, headers)

    assert response.status_code == 400
    assert response.json()['message'] == 'Usuário não encontrado'


def test_admin_sem_ente_precisa_informar_entidade(client, criar_usuario, agente, headers):
    admin_sem_ente = criar_usuario(RoleEnum.admin)

    response = _criar_parecerista(client, admin_sem_ente, agente.id, headers)

    assert response.status_code == 400
    assert response.json()['message'] == 'Entidade não especificada'


def test_remover_parecerista_rebaixa_para_agente(client, admin, agente, headers):
    evaluator_id = _criar_parecerista(client, admin, agente.id, headers).json()['id']

    response = client.delete(f'/api/evaluators/{evaluator_id}', headers=headers(admin))

    assert response.status_code == 200
    assert response.json()['message'] == 'Parecerista removido com sucesso'
    with SessionLocal() as db:
        assert db.get(Evaluator, evaluator_id) is None
        assert db.get(User, agente.id).role == RoleEnum.agent


def test_admin_promovido_vira_parecerista_e_volta_a_agente(client, admin, criar_usuario, ente, headers):
    outro_admin = criar_usuario(RoleEnum.admin, entity_id=ente.id)
    criado = _criar_parecerista(client, admin, outro_admin.id, headers)
    assert criado.status_code == 201
    with SessionLocal() as db:
        assert db.get(User, outro_admin.id).role == RoleEnum.evaluator

    response = client.delete(f"/api/evaluators/{criado.json()['id']}", headers=headers(admin))

    assert response.status_code == 200
    with SessionLocal() as db:
        assert db.get(User, outro_admin.id).role == RoleEnum.agent


def test_remover_parecerista_mantem_usuario_admin(client, admin, agente, headers):
    evaluator_id = _criar_parecerista(client, admin, agente.id, headers).json()['id']
    with SessionLocal() as db:
        db.get(User, agente.id).role = RoleEnum.admin
        db.commit()

    response = client.delete(f'/api/evaluators/{evaluator_id}', headers=headers(admin))

    assert response.status_code == 200
    with SessionLocal() as db:
        assert db.get(User, agente.id).role == RoleEnum.admin


def test_parecerista_atualiza_apenas_campos_proprios(client, admin, agente, ente, headers):
    evaluator_id = _criar_parecerista(client, admin, agente.id, headers).json()['id']

    response = client.put(
        f'/api/evaluators/{evaluator_id}',
        json={'biography': 'Nova biografia', 'is_active': False},
        headers=headers(agente),
    )

    assert response.status_code == 200
    assert response.json()['biography'] == 'Nova biografia'
    assert response.json()['is_active'] is True


def test_terceiro_nao_atualiza_parecerista(client, admin, agente, criar_usuario, headers):
    evaluator_id = _criar_parecerista(client, admin, agente.id, headers).json()['id']

    response = client.put(
        f'/api/evaluators/{evaluator_id}',
        json={'biography': 'Intruso'},
        headers=headers(criar_usuario(RoleEnum.agent)),
    )

    assert response.status_code == 403


def test_alterar_status_exige_admin(client, admin, agente, headers):
    evaluator_id = _criar_parecerista(client, admin, agente.id, headers).json()['id']

    negado = client.patch(f'/api/evaluators/{evaluator_id}/status', json={'is_active': False}, headers=headers(agente))
    assert negado.status_code == 403

    response = client.patch(f'/api/evaluators/{evaluator_id}/status', json={'is_active': False}, headers=headers(admin))
    assert response.status_code == 200
    assert response.json()['is_active'] is False


def test_listagem_publica_com_filtros(client, admin, agente, criar_usuario, headers):
    _criar_parecerista(client, admin, agente.id, headers)
    _criar_parecerista(client, admin, criar_usuario(RoleEnum.agent).id, headers, specialties=['Dança'], biography='Coreógrafo')

    todos = client.get('/api/evaluators')
    assert todos.status_code == 200
    assert len(todos.json()) == 2

    musica = client.get('/api/evaluators', params={'specialty': 'música'})
    assert [item['user_id'] for item in musica.json()] == [agente.id]

    busca = client.get('/api/evaluators', params={'q': 'coreó'})
    assert len(busca.json()) == 1


def test_admin_de_outro_ente_nao_altera_status(client, admin, agente, criar_usuario, outro_ente, headers):
    evaluator_id = _criar_parecerista(client, admin, agente.id, headers).json()['id']
    admin_de_fora = criar_usuario(RoleEnum.admin, entity_id=outro_ente.id)

    response = client.patch(
        f'/api/evaluators/{evaluator_id}/status',
        json={'is_active': False},
        headers=headers(admin_de_fora),
    )

    assert response.status_code == 403
    with SessionLocal() as db:
        assert db.get(Evaluator, evaluator_id).is_active is True
