from datetime import date, timedelta


def _payload_ente(cidade_id: int, **extra) -> dict:
    payload = {
        'name': 'Prefeitura de Goiânia',
        'type': 'municipal',
        'cnpj': '01.612.092/0001-23',
        'address': 'Av. do Cerrado, 999',
        'contact_email': 'cultura@goiania.go.gov.br',
        'contact_phone': '(62) 3524-1000',
        'city_id': cidade_id,
    }
    payload.update(extra)
    return payload


def test_busca_de_cidade_por_nome_e_uf(client, cidades):
    response = client.get('/api/cities/search', params={'name': 'brasília', 'state': 'df'})

    assert response.status_code == 200
    assert response.json()['id'] == cidades[0].id


def test_busca_de_cidade_sem_parametros_retorna_400(client):
    response = client.get('/api/cities/search', params={'name': 'Brasília'})

    assert response.status_code == 400
    assert response.json()['message'] == 'Nome da cidade e estado são obrigatórios'


def test_cidades_por_estado(client, cidades):
    response = client.get('/api/cities/state/go')

    assert [cidade['name'] for cidade in response.json()] == ['Goiânia']


def test_admin_cadastra_cidade_sem_duplicar(client, admin, headers):
    payload = {'name': 'Anápolis', 'state': 'GO', 'ibge_code': '5201108', 'region': 'Centro-Oeste'}

    criada = client.post('/api/cities', json=payload, headers=headers(admin))
    assert criada.status_code == 201

    duplicada = client.post('/api/cities', json=payload, headers=headers(admin))
    assert duplicada.status_code == 400
    assert duplicada.json()['message'] == 'Cidade já cadastrada'


def test_regiao_invalida_retorna_400(client, admin, headers):
    response = client.post('/api/cities', json={'name': 'Anápolis', 'state': 'GO', 'region': 'Pantanal'}, headers=headers(admin))

    assert response.status_code == 400


def test_buscar_ou_criar_cidade(client, agente, cidades, headers):
    existente = client.post('/api/cities/find-or-create', json={'name': 'Goiânia', 'state': 'GO'}, headers=headers(agente))
    assert existente.status_code == 200
    assert existente.json()['id'] == cidades[1].id

    nova = client.post('/api/cities/find-or-create', json={'name': 'Pirenópolis', 'state': 'GO'}, headers=headers(agente))
    assert nova.status_code == 201
    assert nova.json()['state'] == 'GO'


def test_admin_cria_ente_e_cnpj_duplicado_e_recusado(client, admin, cidades, headers):
    criado = client.post('/api/entities', json=_payload_ente(cidades[1].id), headers=headers(admin))
    assert criado.status_code == 201
    assert criado.json()['status'] == 'pending'

    duplicado = client.post('/api/entities', json=_payload_ente(cidades[1].id), headers=headers(admin))
    assert duplicado.status_code == 400


def test_cnpj_fora_do_formato_retorna_400(client, admin, cidades, headers):
    response = client.post('/api/entities', json=_payload_ente(cidades[1].id, cnpj='01612092000123'), headers=headers(admin))

    assert response.status_code == 400


def test_eleicao_do_conselho_no_futuro_retorna_400(client, admin, cidades, headers):
    conselho = {'last_election_date': (date.today() + timedelta(days=30)).isoformat()}

    response = client.post(
        '/api/entities',
        json=_payload_ente(cidades[1].id, cultural_council=conselho),
        headers=headers(admin),
    )

    assert response.status_code == 400
    assert response.json()['errors'][0]['field'] == 'cultural_council.last_election_date'


def test_fim_do_mandato_antes_da_eleicao_retorna_400(client, admin, cidades, headers):
    conselho = {'last_election_date': '2024-01-10', 'term_end_date': '2023-12-31'}

    response = client.post(
        '/api/entities',
        json=_payload_ente(cidades[1].id, cultural_council=conselho),
        headers=headers(admin),
    )

    assert response.status_code == 400
    assert response.json()['message'] == 'O fim do mandato do conselho deve ser posterior à última eleição.'


def test_plano_de_cultura_com_inicio_apos_termino_retorna_400(client, admin, cidades, headers):
    plano = {'start_date': '2030-01-01', 'end_date': '2025-01-01'}

    response = client.post(
        '/api/entities',
        json=_payload_ente(cidades[1].id, cultural_plan=plano),
        headers=headers(admin),
    )

    assert response.status_code == 400


def test_aprovar_e_desativar_ente(client, admin, ente, headers):
    aprovado = client.patch(f'/api/entities/{ente.id}/status', json={'status': 'approved'}, headers=headers(admin))
    assert aprovado.status_code == 200
    assert aprovado.json()['status'] == 'approved'

    desativado = client.delete(f'/api/entities/{ente.id}', headers=headers(admin))
    assert desativado.status_code == 200

    assert client.get('/api/entities').json() == []
    inativos = client.get('/api/entities', params={'include_inactive': True}).json()
    assert [item['id'] for item in inativos] == [ente.id]
