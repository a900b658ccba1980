"""API endpoint tests."""

from datetime import UTC, datetime, timedelta


def create_quote(client, ana, hope, **overrides):
    payload = {
        "texto": "Gratitude turns what we have into enough",
        "creado_por": ana.id_user,
        "categoria_id": hope.id_category,
    }
    payload.update(overrides)
    return client.post("/api/v1/quotes", json=payload)


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_create_user(client):
    """Test user registration."""
    response = client.post(
        "/api/v1/users",
        json={"nombre": "Ana", "correo_electronico": "ana@x.com", "password": "secret1"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["nombre"] == "Ana"
    assert data["rol"] == "user"
    assert "password_hash" not in data


def test_create_user_invalid(client):
    """Validation failures list every broken rule."""
    response = client.post(
        "/api/v1/users",
        json={"nombre": "A", "correo_electronico": "ana", "password": "123"},
    )
    assert response.status_code == 422
    assert "Email address is not valid" in response.json()["errors"]


def test_create_user_duplicate_email(client, ana):
    """Test registration with duplicate email fails."""
    response = client.post(
        "/api/v1/users",
        json={"nombre": "Ana Two", "correo_electronico": "ana@x.com", "password": "secret1"},
    )
    assert response.status_code == 409
    assert "already registered" in response.json()["detail"]


def test_get_user(client, ana):
    """Test fetching users by id and email."""
    response = client.get(f"/api/v1/users/{ana.id_user}")
    assert response.status_code == 200
    assert response.json()["correo_electronico"] == "ana@x.com"

    response = client.get("/api/v1/users/by-email", params={"email": "ana@x.com"})
    assert response.json()["id_user"] == ana.id_user

    assert client.get(f"/api/v1/users/{ana.id_user + 100}").status_code == 404


def test_login(client, ana):
    """Test login with the right and the wrong password."""
    response = client.post(
        "/api/v1/auth/login", json={"correo_electronico": "ana@x.com", "password": "secret1"}
    )
    assert response.status_code == 200
    assert response.json()["id_user"] == ana.id_user

    response = client.post(
        "/api/v1/auth/login", json={"correo_electronico": "ana@x.com", "password": "wrong"}
    )
    assert response.status_code == 401


def test_change_password(client, ana):
    """A changed password is the one that logs in."""
    response = client.put(f"/api/v1/users/{ana.id_user}/password", json={"password": "another1"})
    assert response.status_code == 204

    response = client.post(
        "/api/v1/auth/login", json={"correo_electronico": "ana@x.com", "password": "another1"}
    )
    assert response.status_code == 200


def test_update_user(client, ana):
    """Test updating a user."""
    response = client.patch(f"/api/v1/users/{ana.id_user}", json={"nombre": "Ana Maria"})
    assert response.status_code == 200
    assert response.json()["nombre"] == "Ana Maria"


def test_delete_user_with_quotes(client, ana, hope):
    """Users that own quotes cannot be deleted."""
    create_quote(client, ana, hope)
    response = client.delete(f"/api/v1/users/{ana.id_user}")
    assert response.status_code == 409


def test_categories(client, hope):
    """Test creating, listing and searching categories."""
    response = client.post("/api/v1/categories", json={"nombre": "Family", "descripcion": "People we love"})
    assert response.status_code == 201

    response = client.get("/api/v1/categories")
    assert [category["nombre"] for category in response.json()] == ["Family", "Hope"]

    response = client.get("/api/v1/categories", params={"q": "love"})
    assert [category["nombre"] for category in response.json()] == ["Family"]

    response = client.post("/api/v1/categories", json={"nombre": "Hope"})
    assert response.status_code == 409


def test_delete_category(client, ana, hope):
    """Categories with quotes need force to be deleted."""
    create_quote(client, ana, hope)

    response = client.delete(f"/api/v1/categories/{hope.id_category}")
    assert response.status_code == 409
    assert "1" in response.json()["detail"]

    response = client.delete(f"/api/v1/categories/{hope.id_category}", params={"force": True})
    assert response.status_code == 204
    assert client.get(f"/api/v1/categories/{hope.id_category}").status_code == 404
    assert client.get("/api/v1/quotes/count").json() == {"total": 0}


def test_create_quote(client, ana, hope):
    """Test creating a quote returns the joined names."""
    response = create_quote(client, ana, hope, autor="Anonymous")
    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "draft"
    assert data["creado_por_nombre"] == "Ana"
    assert data["categoria_nombre"] == "Hope"


def test_create_quote_unknown_category(client, ana, hope):
    """Unknown references are reported as unprocessable."""
    response = create_quote(client, ana, hope, categoria_id=hope.id_category + 100)
    assert response.status_code == 422
    assert "does not exist" in response.json()["detail"]


def test_quote_lifecycle(client, ana, hope):
    """Schedule, publish and list a quote."""
    quote_id = create_quote(client, ana, hope).json()["id_quote"]

    past = (datetime.now(UTC) - timedelta(days=1)).isoformat()
    response = client.post(f"/api/v1/quotes/{quote_id}/schedule", json={"scheduled_at": past})
    assert response.status_code == 422

    future = (datetime.now(UTC) + timedelta(days=1)).isoformat()
    response = client.post(f"/api/v1/quotes/{quote_id}/schedule", json={"scheduled_at": future})
    assert response.status_code == 200
    assert response.json()["status"] == "scheduled"

    response = client.post(f"/api/v1/quotes/{quote_id}/publish")
    assert response.status_code == 200
    assert response.json()["scheduled_at"] is None

    response = client.get(
        "/api/v1/quotes", params={"status": "published", "categoria_id": hope.id_category}
    )
    assert [quote["id_quote"] for quote in response.json()] == [quote_id]
    assert client.get("/api/v1/quotes/count", params={"status": "published"}).json() == {"total": 1}
    assert len(client.get("/api/v1/quotes/random").json()) == 1


def test_update_quote(client, ana, hope):
    """Test updating a quote."""
    quote_id = create_quote(client, ana, hope).json()["id_quote"]
    response = client.patch(f"/api/v1/quotes/{quote_id}", json={"autor": "Seneca"})
    assert response.status_code == 200
    assert response.json()["autor"] == "Seneca"

    response = client.patch(f"/api/v1/quotes/{quote_id}", json={"texto": "short"})
    assert response.status_code == 422


def test_delete_quote(client, ana, hope):
    """Test deleting a quote."""
    quote_id = create_quote(client, ana, hope).json()["id_quote"]
    assert client.delete(f"/api/v1/quotes/{quote_id}").status_code == 204
    assert client.get(f"/api/v1/quotes/{quote_id}").status_code == 404


def test_stats(client, ana, hope):
    """Test the statistics overview."""
    create_quote(client, ana, hope, status="published")
    create_quote(client, ana, hope)

    response = client.get("/api/v1/stats")
    assert response.status_code == 200
    data = response.json()
    assert data["total_usuarios"] == 1
    assert data["total_categorias"] == 1
    assert data["frases"]["total_frases"] == 2
    assert data["frases"]["frases_publicadas"] == 1
    assert data["por_categoria"][0]["nombre"] == "Hope"
    assert data["por_categoria"][0]["frases_borrador"] == 1

    response = client.get(f"/api/v1/users/{ana.id_user}/stats")
    assert response.json()["total_frases"] == 2
