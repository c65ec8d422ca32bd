from datetime import UTC, datetime, timedelta

from indica.db.session import SessionLocal
from indica.models import AuditLog, Notice, NoticeStatusEnum, RoleEnum


def _payload_edital(ente, cidade, **extra) -> dict:
    inicio = datetime.now(UTC) + timedelta(days=1)
    payload = {
        'title': 'Edital Aldir Blanc 2026',
        'description': 'Fomento a projetos de cultura popular.',
        'entity_id': ente.id,
        'city_id': cidade.id,
        'start_date': inicio.isoformat(),
        'end_date': (inicio + timedelta(days=30)).isoformat(),
        'total_amount': 200000,
        'min_application_value': 1000,
        'max_application_value': 5000,
        'categories': ['Música', 'Teatro', 'Música', ' '],
        'evaluation_criteria': [{'name': 'Mérito', 'weight': 5, 'description': 'Qualidade artística'}],
    }
    payload.update(extra)
    return payload


def test_admin_cria_edital_em_rascunho(client, admin, ente, cidades, headers):
    response = client.post('/api/notices', json=_payload_edital(ente, cidades[0]), headers=headers(admin))

    assert response.status_code == 201
    body = response.json()
    assert body['status'] == 'draft'
    assert body['categories'] == ['Música', 'Teatro']
    assert body['budget'] == {'total_amount': 200000, 'min_application_value': 1000, 'max_application_value': 5000}
    assert body['quotas'] == {'race': 0, 'indigenous': 0, 'disability': 0}

    with SessionLocal() as db:
        log = db.query(AuditLog).filter_by(entidade='edital', entidade_id=body['id']).one()
        assert log.acao.value == 'CREATE'


def test_criar_edital_com_termino_antes_do_inicio_retorna_400(client, admin, ente, cidades, headers):
    inicio = datetime.now(UTC) + timedelta(days=10)
    payload = _payload_edital(
        ente,
        cidades[0],
        start_date=inicio.isoformat(),
        end_date=inicio.isoformat(),
    )
    response = client.post('/api/notices', json=payload, headers=headers(admin))

    assert response.status_code == 400
    assert response.json()['message'] == 'A data de término deve ser após a data de início'


def test_atualizar_edital_com_termino_antes_do_inicio_retorna_400(client, admin, edital, headers):
    novo_fim = datetime.now(UTC) - timedelta(days=5)
    response = client.put(
        f'/api/notices/{edital.id}',
        json={'end_date': novo_fim.isoformat()},
        headers=headers(admin),
    )

    assert response.status_code == 400
    assert response.json()['errors'][0]['field'] == 'end_date'


def test_atualizacao_ignora_status(client, admin, criar_edital, headers):
    edital = criar_edital(status=NoticeStatusEnum.draft)
    response = client.put(
        f'/api/notices/{edital.id}',
        json={'title': 'Novo título', 'status': 'published', 'max_application_value': 8000},
        headers=headers(admin),
    )

    assert response.status_code == 200
    body = response.json()
    assert body['title'] == 'Novo título'
    assert body['status'] == 'draft'
    assert body['budget']['max_application_value'] == 8000


def test_criacao_de_edital_exige_admin(client, agente, ente, cidades, headers):
    response = client.post('/api/notices', json=_payload_edital(ente, cidades[0]), headers=headers(agente))

    assert response.status_code == 403


def test_publicar_e_encerrar_edital(client, admin, criar_edital, headers):
    edital = criar_edital(status=NoticeStatusEnum.draft)

    publicado = client.patch(f'/api/notices/{edital.id}/publish', headers=headers(admin))
    assert publicado.status_code == 200
    assert publicado.json()['status'] == 'published'

    de_novo = client.patch(f'/api/notices/{edital.id}/publish', headers=headers(admin))
    assert de_novo.status_code == 400
    assert de_novo.json()['message'] == 'Apenas editais em rascunho podem ser publicados'

    encerrado = client.patch(f'/api/notices/{edital.id}/close', headers=headers(admin))
    assert encerrado.status_code == 200
    assert encerrado.json()['status'] == 'closed'


def test_cancelar_edital(client, admin, edital, headers):
    response = client.delete(f'/api/notices/{edital.id}', headers=headers(admin))

    assert response.status_code == 200
    with SessionLocal() as db:
        assert db.get(Notice, edital.id).status == NoticeStatusEnum.canceled


def test_listagem_publica_mostra_apenas_publicados(client, criar_edital):
    criar_edital(title='Publicado')
    criar_edital(title='Rascunho', status=NoticeStatusEnum.draft)

    response = client.get('/api/notices')

    assert response.status_code == 200
    body = response.json()
    assert [item['title'] for item in body['notices']] == ['Publicado']
    assert body['pagination'] == {'total': 1, 'page': 1, 'limit': 10, 'pages': 1}


def test_listagem_prioriza_editais_da_cidade_do_usuario(client, criar_edital, criar_usuario, cidades, headers):
    cidade_usuario, outra_cidade = cidades
    base = datetime.now(UTC) - timedelta(days=20)
    for dia in range(3):
        criar_edital(title=f'Local {dia}', city_id=cidade_usuario.id, start_date=base + timedelta(days=dia))
    # Os editais das outras cidades são mais recentes que todos os locais.
    for dia in range(3):
        criar_edital(title=f'Outra {dia}', city_id=outra_cidade.id, start_date=base + timedelta(days=10 + dia))
    usuario = criar_usuario(RoleEnum.agent, city_id=cidade_usuario.id)

    response = client.get('/api/notices', params={'page': 1, 'limit': 4}, headers=headers(usuario))

    assert response.status_code == 200
    body = response.json()
    assert [item['title'] for item in body['notices']] == ['Local 2', 'Local 1', 'Local 0', 'Outra 2']
    assert body['pagination']['total'] == 6


def test_segunda_pagina_continua_com_outras_cidades(client, criar_edital, criar_usuario, cidades, headers):
    cidade_usuario, outra_cidade = cidades
    base = datetime.now(UTC) - timedelta(days=20)
    for dia in range(3):
        criar_edital(title=f'Local {dia}', city_id=cidade_usuario.id, start_date=base + timedelta(days=dia))
        criar_edital(title=f'Outra {dia}', city_id=outra_cidade.id, start_date=base + timedelta(days=10 + dia))
    usuario = criar_usuario(RoleEnum.agent, city_id=cidade_usuario.id)

    response = client.get('/api/notices', params={'page': 2, 'limit': 4}, headers=headers(usuario))

    assert [item['title'] for item in response.json()['notices']] == ['Outra 1', 'Outra 0']


def test_listagem_anonima_ordena_por_data(client, criar_edital, cidades):
    base = datetime.now(UTC) - timedelta(days=20)
    criar_edital(title='Antigo', city_id=cidades[0].id, start_date=base)
    criar_edital(title='Recente', city_id=cidades[1].id, start_date=base + timedelta(days=5))

    response = client.get('/api/notices')

    assert [item['title'] for item in response.json()['notices']] == ['Recente', 'Antigo']


def test_filtro_por_categoria(client, admin, ente, cidades, headers):
    client.post('/api/notices', json=_payload_edital(ente, cidades[0], status='published'), headers=headers(admin))
    client.post(
        '/api/notices',
        json=_payload_edital(ente, cidades[0], status='published', title='Edital de Dança', categories=['Dança']),
        headers=headers(admin),
    )

    response = client.get('/api/notices', params={'category': 'Dança'})

    assert [item['title'] for item in response.json()['notices']] == ['Edital de Dança']


def test_token_invalido_nao_bloqueia_listagem_publica(client, edital):
    response = client.get('/api/notices', headers={'Authorization': 'Bearer invalido'})

    assert response.status_code == 200
    assert response.json()['pagination']['total'] == 1
