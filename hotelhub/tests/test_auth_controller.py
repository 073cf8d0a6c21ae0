from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import cast
from unittest.mock import MagicMock

import pytest
from conftest import TEST_SECRET, DeterministicHasher, InMemoryUserRepository
from flask import Flask

from hotelhub.application.services.tokens import JwtTokenIssuer
from hotelhub.application.use_cases.users.authenticate_user import AuthenticateTokenUseCase
from hotelhub.application.use_cases.users.login_user import LoginUserUseCase
from hotelhub.application.use_cases.users.register_user import RegisterUserUseCase
from hotelhub.domain.users.entities import Credentials, User
from hotelhub.domain.users.exceptions import InvalidCredentialsError, UserCreationError
from hotelhub.interfaces.http.controllers.auth_controller import AuthController, SessionCookie
from hotelhub.shared.middleware.error_handler import configure_error_handling


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


@pytest.fixture()
def wired_app(
    flask_app: Flask, users: InMemoryUserRepository, hasher: DeterministicHasher
) -> Flask:
    issuer = JwtTokenIssuer(secret=TEST_SECRET)
    controller = AuthController(
        register_use_case=RegisterUserUseCase(users=users, password_hasher=hasher),
        login_use_case=LoginUserUseCase(users=users, password_hasher=hasher, tokens=issuer),
        authenticate_use_case=AuthenticateTokenUseCase(users=users, tokens=issuer),
    )
    flask_app.register_blueprint(controller.as_blueprint())
    return flask_app


def _stub_controller(**overrides: object) -> AuthController:
    use_cases: dict[str, object] = {
        "register_use_case": MagicMock(),
        "login_use_case": MagicMock(),
        "authenticate_use_case": MagicMock(),
    }
    use_cases.update(overrides)
    return AuthController(**use_cases)  # type: ignore[arg-type]


def test_register_endpoint_returns_created_user_without_hash(flask_app: Flask) -> None:
    register_called: dict[str, Credentials] = {}

    class StubRegister:
        def execute(self, credentials: Credentials) -> User:
            register_called["credentials"] = credentials
            return User(
                id="user-1",
                email=credentials.email,
                username=credentials.username or "",
                password_hash="hash",
                created_at=datetime(2025, 1, 1, tzinfo=UTC),
            )

    controller = _stub_controller(register_use_case=cast(RegisterUserUseCase, StubRegister()))
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/register",
            json={"username": "alice", "email": "a@x.com", "password": "s3cret"},
        )

    assert response.status_code == 201
    assert register_called["credentials"] == Credentials(
        email="a@x.com", password="s3cret", username="alice"
    )
    payload = response.get_json()
    assert payload == {
        "id": "user-1",
        "username": "alice",
        "email": "a@x.com",
        "createdAt": "2025-01-01T00:00:00Z",
    }
    assert "hash" not in response.get_data(as_text=True)


@pytest.mark.parametrize(
    "body",
    [
        {"email": "a@x.com", "password": "s3cret"},
        {"username": "alice", "email": 42, "password": "s3cret"},
        ["alice", "a@x.com", "s3cret"],
    ],
)
def test_register_invalid_payload_returns_400(flask_app: Flask, body: object) -> None:
    register = MagicMock()
    flask_app.register_blueprint(_stub_controller(register_use_case=register).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/register", json=body)

    assert response.status_code == 400
    assert response.get_json()["error"] == "invalid_input"
    register.execute.assert_not_called()


def test_register_malformed_json_returns_400(flask_app: Flask) -> None:
    register = MagicMock()
    flask_app.register_blueprint(_stub_controller(register_use_case=register).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/register", data='{"username": "alice",', content_type="application/json"
        )

    assert response.status_code == 400
    assert response.get_json()["error"] == "invalid_input"
    register.execute.assert_not_called()


def test_validation_error_does_not_echo_password(flask_app: Flask) -> None:
    flask_app.register_blueprint(_stub_controller().as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/login", json={"email": 7, "password": "hunter22"})

    assert response.status_code == 400
    assert "hunter22" not in response.get_data(as_text=True)
    assert response.get_json()["context"]["fields"] == ["email"]


def test_register_failure_maps_to_500(flask_app: Flask) -> None:
    register = MagicMock()
    register.execute.side_effect = UserCreationError()
    flask_app.register_blueprint(_stub_controller(register_use_case=register).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/register",
            json={"username": "alice", "email": "a@x.com", "password": "s3cret"},
        )

    assert response.status_code == 500
    assert response.get_json() == {"error": "user_create_failed"}


def test_login_sets_token_cookie(wired_app: Flask) -> None:
    with wired_app.test_client() as client:
        client.post(
            "/register",
            json={"username": "alice", "email": "a@x.com", "password": "s3cret"},
        )
        response = client.post("/login", json={"email": "a@x.com", "password": "s3cret"})
        cookie = client.get_cookie("token")

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["userId"] == "user-1"
    assert payload["token"]
    assert cookie is not None
    assert cookie.value == payload["token"]
    assert cookie.http_only is True
    assert cookie.expires is not None
    expires = cookie.expires if cookie.expires.tzinfo else cookie.expires.replace(tzinfo=UTC)
    assert abs(expires - (datetime.now(UTC) + timedelta(hours=24))) < timedelta(minutes=1)


def test_login_cookie_flags_follow_settings(
    flask_app: Flask, users: InMemoryUserRepository, hasher: DeterministicHasher
) -> None:
    issuer = JwtTokenIssuer(secret=TEST_SECRET)
    RegisterUserUseCase(users=users, password_hasher=hasher).execute(
        Credentials(email="a@x.com", password="s3cret", username="alice")
    )
    controller = _stub_controller(
        login_use_case=LoginUserUseCase(users=users, password_hasher=hasher, tokens=issuer),
        cookie=SessionCookie(name="session", secure=True, samesite="Strict"),
    )
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/login", json={"email": "a@x.com", "password": "s3cret"})

    set_cookie = response.headers["Set-Cookie"]
    assert set_cookie.startswith("session=")
    assert "Secure" in set_cookie
    assert "SameSite=Strict" in set_cookie


@pytest.mark.parametrize(
    "body",
    [
        {"email": "a@x.com", "password": "wrong"},
        {"email": "nobody@x.com", "password": "s3cret"},
    ],
)
def test_login_bad_credentials_returns_401_without_cookie(wired_app: Flask, body: dict) -> None:
    with wired_app.test_client() as client:
        client.post(
            "/register",
            json={"username": "alice", "email": "a@x.com", "password": "s3cret"},
        )
        response = client.post("/login", json=body)

    assert response.status_code == 401
    assert response.get_json() == {"error": "invalid_credentials"}
    assert "Set-Cookie" not in response.headers


def test_login_invalid_payload_returns_400(flask_app: Flask) -> None:
    login = MagicMock()
    flask_app.register_blueprint(_stub_controller(login_use_case=login).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/login", json={"email": "a@x.com"})

    assert response.status_code == 400
    login.execute.assert_not_called()


def test_login_stub_invalid_credentials(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.side_effect = InvalidCredentialsError()
    flask_app.register_blueprint(_stub_controller(login_use_case=login).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/login", json={"email": "a@x.com", "password": "x"})

    assert response.status_code == 401


def test_me_accepts_bearer_header_and_cookie(wired_app: Flask) -> None:
    with wired_app.test_client() as client:
        client.post(
            "/register",
            json={"username": "alice", "email": "a@x.com", "password": "s3cret"},
        )
        token = client.post(
            "/login", json={"email": "a@x.com", "password": "s3cret"}
        ).get_json()["token"]

        via_cookie = client.get("/me")
        client.delete_cookie("token")
        via_header = client.get("/me", headers={"Authorization": f"Bearer {token}"})
        anonymous = client.get("/me")

    assert via_cookie.status_code == 200
    assert via_cookie.get_json()["email"] == "a@x.com"
    assert via_header.status_code == 200
    assert via_header.get_json()["id"] == "user-1"
    assert "passwordHash" not in via_header.get_json()
    assert anonymous.status_code == 401
    assert anonymous.get_json() == {"error": "unauthorized"}


def test_me_rejects_bad_token(wired_app: Flask) -> None:
    with wired_app.test_client() as client:
        response = client.get("/me", headers={"Authorization": "Bearer not.a.jwt"})

    assert response.status_code == 401
    assert response.get_json() == {"error": "unauthorized"}
