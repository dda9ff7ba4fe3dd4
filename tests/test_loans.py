def test_create_and_get_loan(client, book, user):
    payload = {"bookId": book["id"], "userId": user["id"], "loanDate": "2024-06-01", "returnDate": "2024-06-15"}
    response = client.post("/api/emprestimos", json=payload)
    assert response.status_code == 201
    created = response.json()
    assert response.headers["location"].endswith(f"/api/emprestimos/{created['id']}")
    assert client.get(f"/api/emprestimos/{created['id']}").json() == {"id": created["id"], **payload}


def test_return_date_may_equal_loan_date(client, book, user):
    payload = {"bookId": book["id"], "userId": user["id"], "loanDate": "2024-06-01", "returnDate": "2024-06-01"}
    assert client.post("/api/emprestimos", json=payload).status_code == 201


def test_return_date_before_loan_date_is_rejected(client, book, user):
    payload = {"bookId": book["id"], "userId": user["id"], "loanDate": "2024-06-10", "returnDate": "2024-06-09"}
    response = client.post("/api/emprestimos", json=payload)
    assert response.status_code == 400
    assert any("devolução" in error["msg"] for error in response.json()["errors"])
    assert client.get("/api/emprestimos").json() == []


def test_loan_with_missing_book_is_bad_request(client, user):
    payload = {"bookId": 999, "userId": user["id"], "loanDate": "2024-06-01"}
    response = client.post("/api/emprestimos", json=payload)
    assert response.status_code == 400
    assert "livro" in response.json()["detail"]


def test_loan_with_missing_user_is_bad_request(client, book):
    payload = {"bookId": book["id"], "userId": 999, "loanDate": "2024-06-01"}
    response = client.post("/api/emprestimos", json=payload)
    assert response.status_code == 400
    assert "usuário" in response.json()["detail"]


def test_loan_requires_loan_date(client, book, user):
    payload = {"bookId": book["id"], "userId": user["id"]}
    assert client.post("/api/emprestimos", json=payload).status_code == 400


def test_register_return_through_update(client, book, user):
    payload = {"bookId": book["id"], "userId": user["id"], "loanDate": "2024-07-01"}
    loan = client.post("/api/emprestimos", json=payload).json()
    assert loan["returnDate"] is None

    update = {**loan, "returnDate": "2024-07-20"}
    assert client.put(f"/api/emprestimos/{loan['id']}", json=update).status_code == 204
    assert client.get(f"/api/emprestimos/{loan['id']}").json()["returnDate"] == "2024-07-20"


def test_update_loan_rejects_invalid_return_date(client, book, user):
    payload = {"bookId": book["id"], "userId": user["id"], "loanDate": "2024-07-01"}
    loan = client.post("/api/emprestimos", json=payload).json()
    update = {**loan, "returnDate": "2024-06-30"}
    assert client.put(f"/api/emprestimos/{loan['id']}", json=update).status_code == 400


def test_update_loan_id_mismatch(client, book, user):
    payload = {"bookId": book["id"], "userId": user["id"], "loanDate": "2024-07-01"}
    loan = client.post("/api/emprestimos", json=payload).json()
    update = {**loan, "id": loan["id"] + 1}
    assert client.put(f"/api/emprestimos/{loan['id']}", json=update).status_code == 400


def test_delete_missing_loan(client):
    assert client.delete("/api/emprestimos/1").status_code == 404


def test_loan_with_oversized_book_id_is_bad_request(client, user):
    payload = {"bookId": 2**63, "userId": user["id"], "loanDate": "2024-03-01"}
    assert client.post("/api/emprestimos", json=payload).status_code == 400
