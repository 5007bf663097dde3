from conftest import decode_token


class TestRegister:
    async def test_creates_the_account(self, client, seed):
        response = await client.post(
            "/users",
            json={"email": "fred@flintstone.com", "password": "yabba", "firstName": "Fred", "lastName": "Flintstone"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "OK"
        assert body["user"]["email"] == "fred@flintstone.com"
        assert body["user"]["firstName"] == "Fred"
        assert "password" not in body["user"]
        assert "password_hash" not in body["user"]

    async def test_refuses_an_email_already_in_use(self, client, user):
        response = await client.post("/users", json={"email": "test@test.com", "password": "whatever"})

        assert response.status_code == 409
        assert response.json()["message"] == "Email already in use"

    async def test_email_collision_ignores_case(self, client, user):
        response = await client.post("/users", json={"email": "TEST@test.com", "password": "whatever"})

        assert response.status_code == 409

    async def test_rejects_a_missing_password(self, client):
        response = await client.post("/users", json={"email": "fred@flintstone.com"})

        assert response.status_code == 422
        assert response.json()["message"] == "Validation error"


class TestLogin:
    async def test_returns_a_token_for_the_user(self, client, user):
        response = await client.post("/tokens", json={"email": "test@test.com", "password": "12345678"})

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "OK"
        payload = decode_token(body["token"])
        assert payload["user_id"] == str(user.id)
        assert payload["exp"] - payload["iat"] == 10 * 60

    async def test_sets_the_token_cookie(self, client, user):
        response = await client.post("/tokens", json={"email": "test@test.com", "password": "12345678"})

        token = response.json()["token"]
        assert f"token={token}" in response.headers["set-cookie"]
        assert "httponly" in response.headers["set-cookie"].lower()

    async def test_wrong_password_responds_with_auth_error(self, client, user):
        response = await client.post("/tokens", json={"email": "test@test.com", "password": "nope"})

        assert response.status_code == 401
        assert response.json() == {"message": "auth error"}

    async def test_unknown_email_responds_with_auth_error(self, client):
        response = await client.post("/tokens", json={"email": "nobody@test.com", "password": "12345678"})

        assert response.status_code == 401
        assert response.json() == {"message": "auth error"}


class TestAuthenticatedRequests:
    async def test_me_returns_the_current_user(self, client, auth_headers, user):
        response = await client.get("/users/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["user"]["id"] == str(user.id)
        assert response.json()["user"]["lastName"] == "Rubble"

    async def test_cookie_from_login_is_accepted(self, client, user):
        login = await client.post("/tokens", json={"email": "test@test.com", "password": "12345678"})
        client.cookies.set("token", login.json()["token"])

        response = await client.get("/posts")

        assert response.status_code == 200
        assert response.json()["posts"] == []

    async def test_header_wins_over_cookie(self, client, auth_headers, user):
        client.cookies.set("token", "garbage")

        response = await client.get("/posts", headers=auth_headers)

        assert response.status_code == 200

    async def test_full_flow(self, client):
        await client.post(
            "/users",
            json={"email": "fred@flintstone.com", "password": "yabba", "firstName": "Fred", "lastName": "Flintstone"},
        )
        login = await client.post("/tokens", json={"email": "fred@flintstone.com", "password": "yabba"})
        headers = {"Authorization": f"Bearer {login.json()['token']}"}

        created = await client.post("/posts", headers=headers, json={"message": "hello world"})
        post_id = created.json()["post"]["id"]
        liked = await client.post(f"/posts/{post_id}/likes", headers=headers)

        assert liked.status_code == 201
        assert liked.json()["post"]["like"] == 1


class TestServiceEndpoints:
    async def test_root(self, client):
        response = await client.get("/")
        assert response.status_code == 200

    async def test_health(self, client):
        response = await client.get("/health")
        assert response.json() == {"status": "ok"}

    async def test_unknown_route_uses_the_message_envelope(self, client):
        response = await client.get("/nowhere")

        assert response.status_code == 404
        assert response.json() == {"message": "Not Found"}
