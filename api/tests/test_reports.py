from indica.models import NoticeStatusEnum, RoleEnum


def test_resumo_de_inscricoes_por_status(client, admin, criar_usuario, edital, headers):
    for valor in (1500, 2500):
        agente = criar_usuario(RoleEnum.agent)
        criada = client.post(
            '/api/applications',
            json={
                'notice_id': edital.id,
                'project_name': 'Mostra de Cinema',
                'project_description': 'Sessões ao ar livre.',
                'requested_amount': valor,
            },
            headers=headers(agente),
        )
        assert criada.status_code == 201
    client.patch(f"/api/applications/{criada.json()['id']}/submit", headers=headers(agente))

    response = client.get(f'/api/reports/notices/{edital.id}/applications-summary', headers=headers(admin))

    assert response.status_code == 200
    body = response.json()
    assert body['total'] == 2
    assert body['valor_total_solicitado'] == 4000
    por_status = {item['status']: item['quantidade'] for item in body['por_status']}
    assert por_status == {'draft': 1, 'submitted': 1, 'evaluation': 0, 'approved': 0, 'rejected': 0}


def test_resumo_exige_admin(client, agente, edital, headers):
    response = client.get(f'/api/reports/notices/{edital.id}/applications-summary', headers=headers(agente))

    assert response.status_code == 403


def test_logs_de_auditoria_filtrados_por_entidade(client, admin, criar_edital, headers):
    edital = criar_edital(status=NoticeStatusEnum.draft)
    client.patch(f'/api/notices/{edital.id}/publish', headers=headers(admin))
    client.put('/api/entities/' + str(admin.entity_id), json={'name': 'Secretaria de Cultura'}, headers=headers(admin))

    response = client.get('/api/logs', params={'entidade': 'edital'}, headers=headers(admin))

    assert response.status_code == 200
    logs = response.json()
    assert len(logs) == 1
    assert logs[0]['acao'] == 'STATUS_CHANGE'
    assert logs[0]['old_value'] == {'status': 'draft'}
    assert logs[0]['new_value'] == {'status': 'published'}
    assert logs[0]['created_by'] == admin.id
