from biblioteca import crud


def test_list_publishers_empty(client):
    response = client.get("/api/editoras")
    assert response.status_code == 200
    assert response.json() == []


def test_create_and_get_publisher(client):
    payload = {"name": "Editora Rocco", "city": "Rio de Janeiro"}
    response = client.post("/api/editoras", json=payload)
    assert response.status_code == 201
    created = response.json()
    assert created["id"] > 0
    assert response.headers["location"].endswith(f"/api/editoras/{created['id']}")

    fetched = client.get(f"/api/editoras/{created['id']}").json()
    assert fetched == {"id": created["id"], **payload}


def test_create_publisher_ignores_body_id(client):
    response = client.post("/api/editoras", json={"id": 99, "name": "Record", "city": "Rio de Janeiro"})
    assert response.status_code == 201
    assert response.json()["id"] != 99


def test_create_publisher_requires_city(client):
    response = client.post("/api/editoras", json={"name": "Sem Cidade"})
    assert response.status_code == 400
    assert any(error["loc"][-1] == "city" for error in response.json()["errors"])


def test_create_publisher_name_too_long(client):
    response = client.post("/api/editoras", json={"name": "x" * 101, "city": "Recife"})
    assert response.status_code == 400


def test_get_missing_publisher(client):
    response = client.get("/api/editoras/999")
    assert response.status_code == 404
    assert "não foi encontrada" in response.json()["detail"]


def test_update_publisher(client, publisher):
    payload = {"id": publisher["id"], "name": "Companhia das Letras", "city": "Rio de Janeiro"}
    response = client.put(f"/api/editoras/{publisher['id']}", json=payload)
    assert response.status_code == 204
    assert response.content == b""
    assert client.get(f"/api/editoras/{publisher['id']}").json()["city"] == "Rio de Janeiro"


def test_update_publisher_id_mismatch_does_not_touch_store(client, publisher, monkeypatch):
    calls = []

    async def recording_update(*args, **kwargs):
        calls.append(args)

    monkeypatch.setattr(crud, "update_publisher", recording_update)
    payload = {"id": publisher["id"] + 1, "name": "Outra", "city": "Outra"}
    response = client.put(f"/api/editoras/{publisher['id']}", json=payload)
    assert response.status_code == 400
    assert "não corresponde" in response.json()["detail"]
    assert calls == []


def test_update_missing_publisher(client):
    response = client.put("/api/editoras/42", json={"id": 42, "name": "Fantasma", "city": "Lugar Nenhum"})
    assert response.status_code == 404


def test_delete_publisher_with_books_is_blocked_until_books_removed(client, publisher, book):
    response = client.delete(f"/api/editoras/{publisher['id']}")
    assert response.status_code == 400
    assert "associada a um ou mais livros" in response.json()["detail"]

    assert client.delete(f"/api/livros/{book['id']}").status_code == 204

    response = client.delete(f"/api/editoras/{publisher['id']}")
    assert response.status_code == 204
    assert client.get(f"/api/editoras/{publisher['id']}").status_code == 404


def test_delete_missing_publisher(client):
    assert client.delete("/api/editoras/7").status_code == 404


def test_create_publisher_rejects_blank_strings(client):
    response = client.post("/api/editoras", json={"name": "   ", "city": " "})
    assert response.status_code == 400
    assert {error["loc"][-1] for error in response.json()["errors"]} == {"name", "city"}
    assert client.get("/api/editoras").json() == []


def test_publisher_id_out_of_range_is_bad_request(client):
    assert client.get("/api/editoras/99999999999999999999").status_code == 400
    assert client.get("/api/editoras/0").status_code == 400
