from indica.models import RoleEnum
from indica.services.uploads import remover_arquivo

ENDERECO = {
    'street': 'Rua das Flores',
    'number': '100',
    'neighborhood': 'Centro',
    'city': 'Brasília',
    'state': 'DF',
    'zip_code': '70000-000',
}


def _criar_coletivo(client, user, headers, **extra):
    payload = {
        'name': 'Coletivo Maracatu Candango',
        'description': 'Grupo de percussão e cultura popular.',
        'founding_date': '2015-03-20',
        'cultural_area': ['Música', 'Cultura Popular'],
        'address': ENDERECO,
        'contact_email': 'contato@maracatu.org',
        'contact_phone': '(61) 3333-4444',
    }
    payload.update(extra)
    return client.post('/api/cultural-groups', json=payload, headers=headers(user))


def test_criador_vira_administrador_do_coletivo(client, agente, headers):
    response = _criar_coletivo(client, agente, headers)

    assert response.status_code == 201
    membros = response.json()['members']
    assert [(membro['user_id'], membro['role']) for membro in membros] == [(agente.id, 'admin')]


def test_cep_invalido_retorna_400(client, agente, headers):
    response = _criar_coletivo(client, agente, headers, address={**ENDERECO, 'zip_code': '70000000'})

    assert response.status_code == 400


def test_nao_remove_ultimo_administrador(client, agente, headers):
    group_id = _criar_coletivo(client, agente, headers).json()['id']

    response = client.delete(f'/api/cultural-groups/{group_id}/members/{agente.id}', headers=headers(agente))

    assert response.status_code == 400
    assert response.json()['message'] == 'Não é possível remover o último administrador do coletivo'


def test_nao_rebaixa_ultimo_administrador(client, agente, headers):
    group_id = _criar_coletivo(client, agente, headers).json()['id']

    response = client.put(
        f'/api/cultural-groups/{group_id}/members/{agente.id}',
        json={'role': 'member'},
        headers=headers(agente),
    )

    assert response.status_code == 400
    assert response.json()['message'] == 'Não é possível remover o último administrador do coletivo'


def test_com_segundo_admin_o_primeiro_pode_sair(client, agente, criar_usuario, headers):
    group_id = _criar_coletivo(client, agente, headers).json()['id']
    parceiro = criar_usuario(RoleEnum.agent)

    adicionado = client.post(
        f'/api/cultural-groups/{group_id}/members',
        json={'user_id': parceiro.id, 'role': 'admin'},
        headers=headers(agente),
    )
    assert adicionado.status_code == 200

    response = client.delete(f'/api/cultural-groups/{group_id}/members/{agente.id}', headers=headers(agente))

    assert response.status_code == 200
    assert [membro['user_id'] for membro in response.json()['members']] == [parceiro.id]


def test_membro_duplicado_retorna_400(client, agente, criar_usuario, headers):
    group_id = _criar_coletivo(client, agente, headers).json()['id']
    parceiro = criar_usuario(RoleEnum.agent)
    client.post(f'/api/cultural-groups/{group_id}/members', json={'user_id': parceiro.id}, headers=headers(agente))

    response = client.post(f'/api/cultural-groups/{group_id}/members', json={'user_id': parceiro.id}, headers=headers(agente))

    assert response.status_code == 400
    assert response.json()['message'] == 'Usuário já é membro do coletivo'


def test_membro_comum_nao_gerencia_membros(client, agente, criar_usuario, headers):
    group_id = _criar_coletivo(client, agente, headers).json()['id']
    membro = criar_usuario(RoleEnum.agent)
    client.post(f'/api/cultural-groups/{group_id}/members', json={'user_id': membro.id}, headers=headers(agente))

    response = client.post(
        f'/api/cultural-groups/{group_id}/members',
        json={'user_id': criar_usuario(RoleEnum.agent).id},
        headers=headers(membro),
    )

    assert response.status_code == 403


def test_documentos_do_coletivo(client, agente, criar_usuario, headers, uploads_temporarios):
    group_id = _criar_coletivo(client, agente, headers).json()['id']
    estranho = criar_usuario(RoleEnum.agent)

    negado = client.post(
        f'/api/cultural-groups/{group_id}/documents/upload',
        files={'file': ('estatuto.pdf', b'%PDF estatuto', 'application/pdf')},
        headers=headers(estranho),
    )
    assert negado.status_code == 403

    enviado = client.post(
        f'/api/cultural-groups/{group_id}/documents/upload',
        files={'file': ('estatuto.pdf', b'%PDF estatuto', 'application/pdf')},
        data={'name': 'Estatuto social'},
        headers=headers(agente),
    )
    assert enviado.status_code == 200
    documento = enviado.json()['documents'][0]
    assert documento['name'] == 'Estatuto social'
    arquivo = uploads_temporarios / documento['path'].removeprefix('/uploads/')
    assert arquivo.exists()

    removido = client.delete(f"/api/cultural-groups/{group_id}/documents/{documento['id']}", headers=headers(agente))
    assert removido.status_code == 200
    assert removido.json()['documents'] == []
    assert not arquivo.exists()


def test_listagem_com_busca(client, agente, headers):
    _criar_coletivo(client, agente, headers)
    _criar_coletivo(client, agente, headers, name='Cia. de Teatro Asa Norte', description='Teatro de rua.')

    response = client.get('/api/cultural-groups', params={'search': 'teatro'}, headers=headers(agente))

    assert response.status_code == 200
    body = response.json()
    assert [grupo['name'] for grupo in body['groups']] == ['Cia. de Teatro Asa Norte']
    assert body['pagination']['total'] == 1


def test_documento_com_caminho_fora_de_uploads_e_recusado(client, agente, headers, uploads_temporarios):
    group_id = _criar_coletivo(client, agente, headers).json()['id']

    for caminho in ('/uploads/../fora.txt', 's3://outro-bucket/chave.pdf', '/etc/passwd'):
        response = client.post(
            f'/api/cultural-groups/{group_id}/documents',
            json={'name': 'Estatuto', 'path': caminho},
            headers=headers(agente),
        )
        assert response.status_code == 400

    link = client.post(
        f'/api/cultural-groups/{group_id}/documents',
        json={'name': 'Portfólio', 'path': 'https://maracatu.org/portfolio.pdf'},
        headers=headers(agente),
    )
    assert link.status_code == 200


def test_remover_arquivo_nao_sai_da_pasta_de_uploads(uploads_temporarios, monkeypatch):
    uploads_temporarios.mkdir(parents=True)
    externo = uploads_temporarios.parent / 'fora_de_uploads.txt'
    externo.write_text('preservar')
    removidos = []
    monkeypatch.setattr('indica.services.uploads.remover_objeto', removidos.append)

    remover_arquivo('/uploads/../fora_de_uploads.txt')
    remover_arquivo('s3://outro-bucket/segredo.pdf')

    assert externo.exists()
    assert removidos == []
