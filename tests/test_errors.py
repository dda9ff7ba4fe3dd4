from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from biblioteca import crud, database, models


def test_update_conflict_on_existing_record_is_server_error(client, publisher, monkeypatch):
    async def stale_commit(self):
        raise StaleDataError("UPDATE statement on table 'publishers' expected to update 1 row(s); 0 were matched.")

    monkeypatch.setattr(AsyncSession, "commit", stale_commit)
    payload = {**publisher, "city": "Curitiba"}
    response = client.put(f"/api/editoras/{publisher['id']}", json=payload)
    assert response.status_code == 500
    assert "modificado por outra operação" in response.json()["detail"]


def test_update_conflict_on_deleted_record_is_not_found(client, publisher, monkeypatch):
    original_commit = AsyncSession.commit

    async def commit_after_concurrent_delete(self):
        async with database.async_session() as other:
            await other.execute(delete(models.Publisher).where(models.Publisher.id == publisher["id"]))
            await original_commit(other)
        raise StaleDataError("UPDATE statement on table 'publishers' expected to update 1 row(s); 0 were matched.")

    monkeypatch.setattr(AsyncSession, "commit", commit_after_concurrent_delete)
    payload = {**publisher, "city": "Curitiba"}
    response = client.put(f"/api/editoras/{publisher['id']}", json=payload)
    assert response.status_code == 404


def test_unexpected_failure_reports_internal_error(client, monkeypatch):
    async def unavailable(db):
        raise RuntimeError("banco indisponível")

    monkeypatch.setattr(crud, "list_books", unavailable)
    response = client.get("/api/livros")
    assert response.status_code == 500
    assert response.json()["detail"] == "Listagem de livros falhou: banco indisponível"


def test_invalid_path_id_is_bad_request(client):
    assert client.get("/api/livros/abc").status_code == 400


def test_unknown_api_endpoint(client):
    response = client.get("/api/revistas")
    assert response.status_code == 404
    assert response.json() == {"detail": "Endpoint da API não encontrado"}


def test_openapi_lists_all_resources(client):
    paths = client.get("/openapi.json").json()["paths"]
    for resource in ("livros", "autores", "editoras", "categorias", "usuarios", "emprestimos"):
        assert f"/api/{resource}" in paths
    assert set(paths["/api/livros/{book_id}"]) == {"get", "put", "delete"}
