import pytest

from app.core import security
from app.core.config import Settings
from app.core.tokens import MissingSecretError, TokenService
from app.main import create_app

EMAIL = "user@example.com"
PASSWORD = "s3cret-pass"


async def _register(client, email=EMAIL, password=PASSWORD, name="user"):
    resp = await client.post("/api/auth/sendMail", json={"name": name, "email": email, "password": password})
    assert resp.status_code == 200, resp.text
    token = resp.json()["result"]
    resp = await client.post("/api/auth/register", json={"token": token})
    assert resp.status_code == 200, resp.text
    return resp.json()["id"]


async def _login(client, email=EMAIL, password=PASSWORD):
    resp = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['accessToken']}"}


def test_create_app_without_secret_fails_fast():
    with pytest.raises(MissingSecretError):
        create_app(Settings(jwt_secret=""))


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_send_mail_returns_token_and_reports_delivery(client, sent_mail):
    resp = await client.post("/api/auth/sendMail", json={"name": "user", "email": EMAIL, "password": PASSWORD})

    assert resp.status_code == 200
    body = resp.json()
    assert body["emailSent"] is True
    assert body["result"].count(".") == 2
    assert sent_mail[0]["to"] == EMAIL


@pytest.mark.asyncio
async def test_send_mail_validates_body(client):
    resp = await client.post("/api/auth/sendMail", json={"name": "user", "email": EMAIL, "password": "short"})
    assert resp.status_code == 422

    resp = await client.post("/api/auth/sendMail", json={"name": "user", "email": EMAIL, "password": "a" * 80})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_full_registration_and_login_flow(client):
    user_id = await _register(client)
    headers = await _login(client)

    resp = await client.get("/api/user/profile", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {
        "userId": user_id,
        "name": "user",
        "email": EMAIL,
        "description": None,
        "avatar": None,
    }


@pytest.mark.asyncio
async def test_confirmation_token_cannot_be_reused(client):
    resp = await client.post("/api/auth/sendMail", json={"name": "user", "email": EMAIL, "password": PASSWORD})
    token = resp.json()["result"]

    assert (await client.post("/api/auth/register", json={"token": token})).status_code == 200
    resp = await client.post("/api/auth/register", json={"token": token})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "验证码无效或已过期"


@pytest.mark.asyncio
async def test_send_mail_for_registered_email_is_rejected(client):
    await _register(client)

    resp = await client.post("/api/auth/sendMail", json={"name": "other", "email": EMAIL, "password": PASSWORD})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "用户已存在"


@pytest.mark.asyncio
async def test_login_failures_are_indistinguishable(client):
    await _register(client)

    wrong_password = await client.post("/api/auth/login", json={"email": EMAIL, "password": "wrongpass"})
    unknown_user = await client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "wrongpass"})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json()


@pytest.mark.asyncio
async def test_protected_routes_require_a_valid_token(client):
    forged = TokenService("attacker-secret-key-that-is-at-least-32-chars").issue_session(
        "00000000-0000-0000-0000-000000000001"
    )
    details = set()
    for headers in ({}, {"Authorization": "Bearer garbage"}, {"Authorization": f"Bearer {forged}"}):
        resp = await client.get("/api/user/profile", headers=headers)
        assert resp.status_code == 401
        details.add(resp.json()["detail"])
        resp = await client.post("/api/cards", json={"title": "t"}, headers=headers)
        assert resp.status_code == 401
    assert len(details) == 1


@pytest.mark.asyncio
async def test_valid_token_for_missing_user_is_unauthorized(client, api_app):
    # signed with the app's own secret but no such user
    session = api_app.state.token_service.issue_session("00000000-0000-0000-0000-000000000001")
    resp = await client.get("/api/user/profile", headers={"Authorization": f"Bearer {session}"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_update_profile_changes_only_given_fields(client):
    await _register(client)
    headers = await _login(client)

    resp = await client.put("/api/user/profile", json={"description": "hi", "avatar": "a.png"}, headers=headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "user"
    assert body["description"] == "hi"
    assert body["avatar"] == "a.png"

    resp = await client.put("/api/user/profile", json={"name": "renamed"}, headers=headers)
    assert resp.json()["name"] == "renamed"
    assert resp.json()["description"] == "hi"


@pytest.mark.asyncio
async def test_cards_create_list_delete(client):
    owner_id = await _register(client)
    headers = await _login(client)
    await _register(client, email="other@example.com", name="other")
    other_headers = await _login(client, email="other@example.com")

    resp = await client.post("/api/cards", json={"title": "first", "photo": "p.png"}, headers=headers)
    assert resp.status_code == 200
    card_id = resp.json()["cardId"]

    resp = await client.get("/api/cards")
    assert resp.status_code == 200
    cards = resp.json()
    assert len(cards) == 1
    assert cards[0]["title"] == "first"
    assert cards[0]["owner"]["userId"] == owner_id
    assert cards[0]["owner"]["name"] == "user"

    resp = await client.delete(f"/api/cards/{card_id}", headers=other_headers)
    assert resp.status_code == 404

    resp = await client.delete(f"/api/cards/{card_id}", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {"status": "OK"}
    assert (await client.get("/api/cards")).json() == []


@pytest.mark.asyncio
async def test_storage_failure_is_opaque_503(broken_db_client):
    resp = await broken_db_client.post(
        "/api/auth/sendMail", json={"name": "user", "email": EMAIL, "password": PASSWORD}
    )
    assert resp.status_code == 503
    assert "users" not in resp.text


@pytest.mark.asyncio
async def test_card_routes_reject_token_for_missing_user(client, api_app):
    headers = {
        "Authorization": "Bearer "
        + api_app.state.token_service.issue_session("00000000-0000-0000-0000-000000000002")
    }

    resp = await client.post("/api/cards", json={"title": "orphan"}, headers=headers)
    assert resp.status_code == 401
    resp = await client.delete("/api/cards/anything", headers=headers)
    assert resp.status_code == 401
    assert (await client.get("/api/cards")).json() == []


@pytest.mark.asyncio
async def test_hashing_failure_is_opaque_500(client, monkeypatch):
    resp = await client.post("/api/auth/sendMail", json={"name": "user", "email": EMAIL, "password": PASSWORD})
    token = resp.json()["result"]

    def broken_hash(_password):
        raise ValueError("bcrypt backend exploded")

    monkeypatch.setattr(security.pwd_context, "hash", broken_hash)

    resp = await client.post("/api/auth/register", json={"token": token})
    assert resp.status_code == 500
    assert resp.json() == {"detail": "服务器内部错误"}
    assert "bcrypt" not in resp.text
