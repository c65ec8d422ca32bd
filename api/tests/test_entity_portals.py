from indica.models import RoleEnum


def _base(entity_id: int) -> str:
    return f'/api/entity-portal/entity/{entity_id}'


def test_portal_inexistente_retorna_404(client, ente):
    response = client.get(_base(ente.id))

    assert response.status_code == 404
    assert response.json()['message'] == 'Portal não encontrado'


def test_admin_do_ente_salva_portal(client, admin, ente, headers):
    response = client.put(
        _base(ente.id),
        json={'ombudsman': {'email': 'ouvidoria@df.gov.br'}, 'faq': [{'question': 'Como me inscrevo?'}]},
        headers=headers(admin),
    )

    assert response.status_code == 200
    publico = client.get(_base(ente.id)).json()
    assert publico['ombudsman'] == {'email': 'ouvidoria@df.gov.br'}
    assert publico['faq'] == [{'question': 'Como me inscrevo?'}]
    assert publico['staff'] == []


def test_admin_de_outro_ente_nao_edita_portal(client, criar_usuario, ente, headers):
    outro_admin = criar_usuario(RoleEnum.admin)

    response = client.put(_base(ente.id), json={'faq': []}, headers=headers(outro_admin))

    assert response.status_code == 403


def test_secao_invalida_retorna_400(client, admin, ente, headers):
    invalida = client.put(f'{_base(ente.id)}/section/segredos', json=[], headers=headers(admin))
    assert invalida.status_code == 400
    assert invalida.json()['message'] == 'Seção inválida'

    nao_lista = client.post(f'{_base(ente.id)}/section/ombudsman', json={'email': 'x'}, headers=headers(admin))
    assert nao_lista.status_code == 400
    assert nao_lista.json()['message'] == 'Seção inválida ou não é uma lista'


def test_itens_em_sublista_recebem_id_e_podem_ser_removidos(client, admin, ente, headers):
    adicionado = client.post(
        f'{_base(ente.id)}/section/finances.revenues',
        json={'source': 'Fundo Nacional de Cultura', 'amount': 150000},
        headers=headers(admin),
    )
    assert adicionado.status_code == 201
    receitas = adicionado.json()['finances']['revenues']
    assert receitas[0]['source'] == 'Fundo Nacional de Cultura'
    item_id = receitas[0]['id']

    ausente = client.delete(f'{_base(ente.id)}/section/finances.revenues/item/nao-existe', headers=headers(admin))
    assert ausente.status_code == 404
    assert ausente.json()['message'] == 'Item não encontrado'

    removido = client.delete(f'{_base(ente.id)}/section/finances.revenues/item/{item_id}', headers=headers(admin))
    assert removido.status_code == 200
    assert removido.json()['finances']['revenues'] == []


def test_substituir_secao_e_remover_portal(client, admin, ente, headers):
    response = client.put(
        f'{_base(ente.id)}/section/legislation',
        json=[{'title': 'Lei Orgânica da Cultura'}],
        headers=headers(admin),
    )
    assert response.status_code == 200
    assert response.json()['legislation'] == [{'title': 'Lei Orgânica da Cultura'}]

    assert client.delete(_base(ente.id), headers=headers(admin)).status_code == 200
    assert client.get(_base(ente.id)).status_code == 404
