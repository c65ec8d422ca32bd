from indica.db.session import SessionLocal
from indica.models import CulturalEvent, RoleEnum


def _criar_evento(client, user, headers, **extra):
    payload = {
        'title': 'Festival de Inverno do Cerrado',
        'description': 'Shows e oficinas ao ar livre.',
        'start_date': '2026-07-10T18:00:00Z',
        'end_date': '2026-07-12T23:00:00Z',
        'city': 'Brasília',
        'state': 'df',
        'event_type': 'Cultural',
        'category': 'Artístico/Cultural/Folclórico',
    }
    payload.update(extra)
    return client.post('/api/cultural-events', json=payload, headers=headers(user))


def test_criar_evento_exige_autenticacao(client):
    response = _criar_evento(client, None, lambda _user: {})

    assert response.status_code == 401


def test_criar_evento(client, agente, headers):
    response = _criar_evento(client, agente, headers)

    assert response.status_code == 201
    body = response.json()
    assert body['created_by'] == agente.id
    assert body['state'] == 'DF'
    assert body['status'] == 'upcoming'


def test_tipo_de_evento_fora_da_lista_retorna_400(client, agente, headers):
    response = _criar_evento(client, agente, headers, event_type='Rave')

    assert response.status_code == 400


def test_termino_antes_do_inicio_retorna_400(client, agente, headers):
    response = _criar_evento(client, agente, headers, end_date='2026-07-01T00:00:00Z')

    assert response.status_code == 400
    assert response.json()['errors'][0]['field'] == 'end_date'


def test_listagem_publica_ordenada_por_inicio_com_filtros(client, agente, headers):
    _criar_evento(
        client,
        agente,
        headers,
        title='Festa Junina',
        start_date='2026-06-20T18:00:00Z',
        end_date='2026-06-21T02:00:00Z',
        category='Junino',
        city='Goiânia',
        state='GO',
    )
    _criar_evento(
        client,
        agente,
        headers,
        title='Mostra de Cinema',
        start_date='2026-05-02T19:00:00Z',
        end_date='2026-05-09T22:00:00Z',
    )
    _criar_evento(client, agente, headers)

    todos = client.get('/api/cultural-events')
    assert todos.status_code == 200
    assert [item['title'] for item in todos.json()] == [
        'Mostra de Cinema',
        'Festa Junina',
        'Festival de Inverno do Cerrado',
    ]

    por_estado = client.get('/api/cultural-events', params={'state': 'GO'})
    assert [item['title'] for item in por_estado.json()] == ['Festa Junina']

    por_categoria = client.get('/api/cultural-events', params={'category': 'Junino'})
    assert len(por_categoria.json()) == 1

    por_periodo = client.get(
        '/api/cultural-events',
        params={'start_date': '2026-06-01T00:00:00Z', 'end_date': '2026-07-31T00:00:00Z'},
    )
    assert [item['title'] for item in por_periodo.json()] == ['Festa Junina', 'Festival de Inverno do Cerrado']


def test_evento_inexistente_retorna_404(client):
    response = client.get('/api/cultural-events/999')

    assert response.status_code == 404
    assert response.json()['message'] == 'Evento não encontrado'


def test_apenas_o_criador_edita_o_evento(client, agente, criar_usuario, headers):
    event_id = _criar_evento(client, agente, headers).json()['id']
    outro = criar_usuario(RoleEnum.admin)

    negado = client.put(f'/api/cultural-events/{event_id}', json={'title': 'Invadido'}, headers=headers(outro))
    assert negado.status_code == 403
    assert negado.json()['message'] == 'Sem permissão para editar este evento'

    response = client.put(
        f'/api/cultural-events/{event_id}',
        json={'title': 'Festival de Inverno', 'status': 'ongoing'},
        headers=headers(agente),
    )
    assert response.status_code == 200
    assert response.json()['title'] == 'Festival de Inverno'
    assert response.json()['status'] == 'ongoing'


def test_apenas_o_criador_remove_o_evento(client, agente, criar_usuario, headers):
    event_id = _criar_evento(client, agente, headers).json()['id']

    negado = client.delete(f'/api/cultural-events/{event_id}', headers=headers(criar_usuario(RoleEnum.agent)))
    assert negado.status_code == 403

    response = client.delete(f'/api/cultural-events/{event_id}', headers=headers(agente))
    assert response.status_code == 204
    with SessionLocal() as db:
        assert db.get(CulturalEvent, event_id) is None
