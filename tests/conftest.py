import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from biblioteca import database
from biblioteca.main import app


@pytest.fixture
def client(tmp_path, monkeypatch):
    # Banco SQLite próprio para cada teste
    db_file = tmp_path / "test_biblioteca.db"
    engine = database.build_engine(f"sqlite+aiosqlite:///{db_file}", poolclass=NullPool)
    monkeypatch.setattr(database, "engine", engine)
    monkeypatch.setattr(
        database,
        "async_session",
        sessionmaker(engine, class_=AsyncSession, expire_on_commit=False),
    )

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def publisher(client):
    response = client.post("/api/editoras", json={"name": "Companhia das Letras", "city": "São Paulo"})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def author(client):
    payload = {"name": "Clarice Lispector", "birthDate": "1920-12-10", "nationality": "Brasileira"}
    response = client.post("/api/autores", json=payload)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def category(client):
    response = client.post("/api/categorias", json={"name": "Romance"})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def user(client):
    payload = {"name": "Ana Souza", "email": "ana.souza@biblioteca.com.br", "phone": "(11)98765-4321"}
    response = client.post("/api/usuarios", json=payload)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def book(client, publisher, author, category):
    payload = {
        "title": "A Hora da Estrela",
        "publicationYear": 1977,
        "isbn": "9788532508126",
        "publisherId": publisher["id"],
        "authors": [{"id": author["id"]}],
        "categories": [{"id": category["id"]}],
    }
    response = client.post("/api/livros", json=payload)
    assert response.status_code == 201
    return response.json()
