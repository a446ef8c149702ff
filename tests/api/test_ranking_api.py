"""API tests for the ranking, history sync, dashboard and catalogue."""

import datetime

TODAY = datetime.date.today()


def _days_ago(days: int) -> str:
    return (TODAY - datetime.timedelta(days=days)).isoformat()


def _names(response) -> list[str]:
    return [e["military"]["name"] for e in response.json()["entries"]]


class TestRanking:
    def test_rank_order_then_rest(self, client, make_military, make_process):
        busy = make_military("3º Sargento", name="Ocupado")
        make_military("3º Sargento", name="Livre")
        make_military("Major", name="Major")
        make_process([busy["id"]], type="PT", start_date=_days_ago(10))

        response = client.get("/api/v1/ranking")
        assert response.status_code == 200
        assert _names(response) == ["Livre", "Ocupado", "Major"]
        entries = response.json()["entries"]
        assert [e["position"] for e in entries] == [1, 2, 3]
        assert entries[0]["rest_days"] == 365
        assert entries[1]["rest_days"] == 10
        assert entries[1]["rest_class"] == "low"

    def test_rest_order_ignores_rank(self, client, make_military, make_process):
        sergeant = make_military("3º Sargento", name="Sargento")
        make_military("Major", name="Major")
        make_process([sergeant["id"]], type="PT", start_date=_days_ago(10))

        assert _names(client.get("/api/v1/ranking", params={"order": "rest"})) == ["Major", "Sargento"]

    def test_formation_year_tie_break(self, client, make_military):
        make_military("Capitão", name="Antigo", formation_year=2010)
        make_military("Capitão", name="Sem ano")
        make_military("Capitão", name="Novo", formation_year=2018)

        response = client.get("/api/v1/ranking", params={"tie_break": "formation_year"})
        assert _names(response) == ["Novo", "Antigo", "Sem ano"]

    def test_rest_per_process_type(self, client, make_military, make_process):
        a = make_military(name="A")
        b = make_military(name="B")
        make_process([a["id"]], type="PT", start_date=_days_ago(5))
        make_process([b["id"]], type="PT", start_date=_days_ago(50))

        response = client.get("/api/v1/ranking", params={"process_type": "TEAM"})
        entries = response.json()["entries"]
        assert [e["rest_days_for_process_type"] for e in entries] == [365, 365]
        assert [e["rest_days"] for e in entries] == [5, 50]

        response = client.get("/api/v1/ranking", params={"process_type": "PT"})
        assert _names(response) == ["B", "A"]

    def test_filters_and_inactive(self, client, make_military):
        make_military("Major", name="Oficial Ativo")
        make_military("3º Sargento", name="Praça Ativo")
        make_military("3º Sargento", name="Praça Inativo", is_active=False)

        assert _names(client.get("/api/v1/ranking", params={"grade": "Praça"})) == ["Praça Ativo"]
        assert len(_names(client.get("/api/v1/ranking", params={"active_only": "false"}))) == 3
        assert _names(client.get("/api/v1/ranking", params={"q": "oficial"})) == ["Oficial Ativo"]

    def test_default_limit_and_show_all(self, client, make_military):
        for _ in range(12):
            make_military()

        limited = client.get("/api/v1/ranking").json()
        assert limited["total"] == 12
        assert len(limited["entries"]) == 10

        assert len(client.get("/api/v1/ranking", params={"limit": 3}).json()["entries"]) == 3
        assert len(client.get("/api/v1/ranking", params={"show_all": "true"}).json()["entries"]) == 12

    def test_rejects_unknown_order(self, client):
        assert client.get("/api/v1/ranking", params={"order": "name"}).status_code == 422


class TestSyncHistory:
    def test_repairs_manual_dates(self, client, make_military, make_process):
        synced = make_military()
        drifted = make_military(last_process_date=_days_ago(100))
        make_process([synced["id"]], type="PT", start_date=_days_ago(7))

        response = client.post("/api/v1/sync-history")
        assert response.status_code == 200
        assert response.json() == {"success": True, "updated_count": 1}

        assert client.get(f"/api/v1/militaries/{drifted['id']}").json()["last_process_date"] is None
        assert client.post("/api/v1/sync-history").json()["updated_count"] == 0


class TestDashboard:
    def test_counts(self, client, make_military, make_process):
        a = make_military()
        make_military()
        make_military(is_active=False)
        make_process([a["id"]], type="PT", start_date=_days_ago(5))
        make_process([a["id"]], type="PT", start_date=_days_ago(60), end_date=_days_ago(40))

        body = client.get("/api/v1/dashboard").json()
        assert body["total_militaries"] == 3
        assert body["active_militaries"] == 2
        assert body["total_processes"] == 2
        assert body["open_processes"] == 1
        assert body["processes_by_type"] == {"PT": 2}
        assert body["militaries_by_rest_class"] == {"high": 1, "medium": 0, "low": 1}
        assert body["next_eligible"][0]["military"]["id"] != a["id"]


class TestCatalogue:
    def test_lists_enumerations(self, client):
        body = client.get("/api/v1/catalogue").json()
        assert [r["rank"] for r in body["ranks"]][0] == "3º Sargento"
        assert body["ranks"][3] == {"rank": "Aspirante a Oficial", "grade": "Oficial", "order": 3}
        rules = {t["type"]: t for t in body["process_types"]}
        assert rules["Comissão de Conferência de Gêneros QR"]["exact"] is True
        assert rules["PT"]["minimum"] == 1
        assert "Membro - Titular" in body["functions"]
        assert len(body["process_classes"]) == 10
