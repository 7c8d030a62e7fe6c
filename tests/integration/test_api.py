# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the HTTP API.

Services are replaced through dependency overrides, so these tests cover
routing, authentication, role checks, error mapping and the camelCase
wire format without a database.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from school_portal.api.dependencies import (
    get_auth_service,
    get_content_drafter,
    get_introduction_service,
    get_post_service,
    get_public_service,
    get_user_service,
    get_visitor_service,
)
from school_portal.api.middleware import AuthMiddleware, limiter
from school_portal.api.routes import health
from school_portal.api.v1 import router as v1_router
from school_portal.core.config import get_settings
from school_portal.domains.auth.jwt import JWTManager
from school_portal.domains.auth.service import InvalidCredentialsError, WeakPasswordError
from school_portal.domains.posts import ContentDraftError, PostValidationError
from school_portal.domains.public import PublicNotFoundError
from school_portal.models.analytics import TrackVisitResponse
from school_portal.models.content import PostResponse
from school_portal.models.people import UserResponse


@pytest.fixture(autouse=True)
def disable_rate_limits():
    """Keep slowapi out of the way of repeated requests."""
    enabled = limiter.enabled
    limiter.enabled = False
    yield
    limiter.enabled = enabled


@pytest.fixture
def app() -> FastAPI:
    """Create test FastAPI app."""
    app = FastAPI()
    app.state.limiter = limiter
    app.add_middleware(AuthMiddleware)
    app.include_router(health.router)
    app.include_router(v1_router)
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client."""
    return TestClient(app)


def auth_headers(role: str) -> dict[str, str]:
    tokens = JWTManager(get_settings().jwt).create_token_pair(
        user_id=str(uuid4()),
        role=role,
        email=f"{role}@truonghoc.edu.vn",
    )
    return {"Authorization": f"Bearer {tokens.access_token}"}


def make_post_response(**overrides) -> PostResponse:
    values = {
        "id": str(uuid4()),
        "title": "Lễ khai giảng",
        "slug": "le-khai-giang",
        "content": "<p>Nội dung</p>",
        "image_caption": "Toàn trường chào cờ",
        "date": datetime(2025, 9, 5, 1, 0, tzinfo=timezone.utc),
        "category": "tin-tuc",
        "status": "published",
        "is_featured": True,
    }
    values.update(overrides)
    return PostResponse(**values)


class TestRouting:
    """Tests for route registration."""

    def test_routes_registered(self, app: FastAPI) -> None:
        routes = {route.path for route in app.routes}

        assert "/health" in routes
        assert "/health/ready" in routes
        assert "/api/v1/auth/login" in routes
        assert "/api/v1/posts" in routes
        assert "/api/v1/posts/{post_id}" in routes
        assert "/api/v1/menu/{item_id}/move" in routes
        assert "/api/v1/public/news/{id_or_slug}" in routes
        assert "/api/v1/public/visits" in routes
        assert "/api/v1/public/events" in routes


class TestHealth:
    """Tests for health endpoints."""

    def test_liveness(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @patch("school_portal.api.routes.health.check_database_connection", new_callable=AsyncMock)
    def test_ready_when_database_reachable(self, mock_check, client: TestClient) -> None:
        mock_check.return_value = True

        response = client.get("/health/ready")

        body = response.json()
        assert body["ready"] is True
        assert body["components"]["database"]["status"] == "healthy"

    @patch("school_portal.api.routes.health.check_database_connection", new_callable=AsyncMock)
    def test_not_ready_without_database(self, mock_check, client: TestClient) -> None:
        mock_check.return_value = False

        response = client.get("/health/ready")

        body = response.json()
        assert body["ready"] is False
        assert body["status"] == "unhealthy"


class TestRoleChecks:
    """Tests for authentication and role enforcement."""

    @pytest.fixture
    def post_service(self, app: FastAPI) -> MagicMock:
        service = MagicMock()
        service.list_posts = AsyncMock(return_value=[make_post_response()])
        app.dependency_overrides[get_post_service] = lambda: service
        return service

    @pytest.fixture
    def user_service(self, app: FastAPI) -> MagicMock:
        service = MagicMock()
        service.list_users = AsyncMock(
            return_value=[
                UserResponse(
                    id=str(uuid4()),
                    username="bientap",
                    email="bientap@truonghoc.edu.vn",
                    full_name="Biên tập viên",
                    role="editor",
                )
            ]
        )
        app.dependency_overrides[get_user_service] = lambda: service
        return service

    def test_anonymous_rejected(self, client: TestClient, post_service) -> None:
        response = client.get("/api/v1/posts")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        post_service.list_posts.assert_not_called()

    def test_member_cannot_manage_posts(self, client: TestClient, post_service) -> None:
        response = client.get("/api/v1/posts", headers=auth_headers("member"))

        assert response.status_code == 403

    def test_editor_lists_posts_in_camel_case(self, client: TestClient, post_service) -> None:
        response = client.get("/api/v1/posts", headers=auth_headers("editor"))

        assert response.status_code == 200
        post = response.json()[0]
        assert post["imageCaption"] == "Toàn trường chào cờ"
        assert post["isFeatured"] is True
        assert post["showOnHome"] is True
        assert "image_caption" not in post

    def test_editor_cannot_manage_users(self, client: TestClient, user_service) -> None:
        response = client.get("/api/v1/users", headers=auth_headers("editor"))

        assert response.status_code == 403

    def test_admin_manages_users(self, client: TestClient, user_service) -> None:
        response = client.get("/api/v1/users", headers=auth_headers("admin"))

        assert response.status_code == 200
        assert response.json()[0]["fullName"] == "Biên tập viên"


class TestPostEndpoints:
    """Tests for post editor error mapping."""

    def test_validation_error_maps_to_400(self, app: FastAPI, client: TestClient) -> None:
        service = MagicMock()
        service.save_post = AsyncMock(side_effect=PostValidationError("Title is required"))
        app.dependency_overrides[get_post_service] = lambda: service

        response = client.post(
            "/api/v1/posts",
            json={"title": " ", "content": "x"},
            headers=auth_headers("editor"),
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Title is required"

    def test_draft_unavailable_maps_to_503(self, app: FastAPI, client: TestClient) -> None:
        drafter = MagicMock()
        drafter.draft_content = AsyncMock(side_effect=ContentDraftError("Assistant disabled"))
        app.dependency_overrides[get_content_drafter] = lambda: drafter

        response = client.post(
            "/api/v1/posts/draft",
            json={"title": "Hội khỏe Phù Đổng"},
            headers=auth_headers("editor"),
        )

        assert response.status_code == 503

    def test_youtube_embed(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/posts/youtube-embed",
            json={"url": "https://youtu.be/dQw4w9WgXcQ"},
            headers=auth_headers("editor"),
        )

        assert response.status_code == 200
        assert response.json()["videoId"] == "dQw4w9WgXcQ"

    def test_youtube_embed_invalid_link(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/posts/youtube-embed",
            json={"url": "https://example.com"},
            headers=auth_headers("editor"),
        )

        assert response.status_code == 400


class TestAuthEndpoints:
    """Tests for sign-in."""

    def test_invalid_credentials(self, app: FastAPI, client: TestClient) -> None:
        service = MagicMock()
        service.login = AsyncMock(side_effect=InvalidCredentialsError("Invalid email or password"))
        app.dependency_overrides[get_auth_service] = lambda: service

        response = client.post(
            "/api/v1/auth/login",
            json={"email": "admin@truonghoc.edu.vn", "password": "wrong"},
        )

        assert response.status_code == 401
        service.login.assert_awaited_once_with("admin@truonghoc.edu.vn", "wrong")

    def test_invalid_email_rejected(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "not-an-email", "password": "secret"},
        )

        assert response.status_code == 422

    def test_register_refused_password_maps_to_400(self, app: FastAPI, client: TestClient) -> None:
        service = MagicMock()
        service.register = AsyncMock(side_effect=WeakPasswordError("Password must not exceed 72 bytes"))
        app.dependency_overrides[get_auth_service] = lambda: service

        response = client.post(
            "/api/v1/auth/register",
            json={
                "fullName": "Phụ huynh",
                "email": "phuhuynh@truonghoc.edu.vn",
                "password": "secret123",
                "confirmPassword": "secret123",
            },
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Password must not exceed 72 bytes"

    def test_me_requires_token(self, client: TestClient) -> None:
        response = client.get("/api/v1/auth/me")

        assert response.status_code == 401


class TestPublicEndpoints:
    """Tests for the public site endpoints."""

    def test_news_detail_not_found(self, app: FastAPI, client: TestClient) -> None:
        service = MagicMock()
        service.get_news_detail = AsyncMock(side_effect=PublicNotFoundError("Post not found"))
        app.dependency_overrides[get_public_service] = lambda: service

        response = client.get("/api/v1/public/news/khong-ton-tai")

        assert response.status_code == 404

    def test_hidden_introduction_not_found(self, app: FastAPI, client: TestClient) -> None:
        service = MagicMock()
        service.get_by_slug = AsyncMock(return_value=None)
        app.dependency_overrides[get_introduction_service] = lambda: service

        response = client.get("/api/v1/public/introductions/lich-su")

        assert response.status_code == 404
        service.get_by_slug.assert_awaited_once_with("lich-su")

    def test_track_visit(self, app: FastAPI, client: TestClient) -> None:
        service = MagicMock()
        service.track_visit = AsyncMock(return_value=TrackVisitResponse(tracked=True, counted=True))
        app.dependency_overrides[get_visitor_service] = lambda: service

        response = client.post("/api/v1/public/visits", json={"sessionId": "b9a7c0e2"})

        assert response.status_code == 200
        assert response.json() == {"tracked": True, "counted": True}
        service.track_visit.assert_awaited_once_with("b9a7c0e2")

    def test_track_visit_requires_session(self, client: TestClient) -> None:
        response = client.post("/api/v1/public/visits", json={"sessionId": ""})

        assert response.status_code == 422

    def test_news_limit_bounds(self, app: FastAPI, client: TestClient) -> None:
        service = MagicMock()
        app.dependency_overrides[get_public_service] = lambda: service

        response = client.get("/api/v1/public/news", params={"limit": 51})

        assert response.status_code == 422
