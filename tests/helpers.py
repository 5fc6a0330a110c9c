from fastapi.testclient import TestClient


def register(client: TestClient, name: str, email: str, password: str = "pw123456") -> dict:
    resp = client.post(
        "/api/users/register",
        json={"name": name, "email": email, "password": password},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
