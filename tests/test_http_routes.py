# -*- coding: utf-8 -*-
"""
Test http routes.

Drive the mounted admin routes through ``TestClient`` with the bundled
templates and session-backed flashes.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel, Field as PField
from starlette.middleware.sessions import SessionMiddleware

from crudadmin.conf import CrudAdminSettings
from crudadmin.core.admin import BaseAdminHandle
from crudadmin.core.dashboard import CoreDispatcher
from crudadmin.core.dispatcher import CrudDispatcher
from crudadmin.core.pool import AdminPool
from crudadmin.router import CrudRouterBuilder
from tests.stubs import Article, MemoryManager


class ArticleSchema(BaseModel):
    title: str = PField(min_length=3)


class ArticleAdmin(BaseAdminHandle):
    model = Article
    form_schema = ArticleSchema
    code = "article"
    base_url = "/admin/article"
    group = "Content"


class AdminApplication:
    """Assemble a FastAPI application serving two admins."""

    def __init__(self) -> None:
        self.settings = CrudAdminSettings(secret_key="test-secret")
        self.manager = MemoryManager()
        self.pool = AdminPool()
        self.pool.register(ArticleAdmin(self.manager, settings=self.settings))
        self.pool.register(
            ArticleAdmin(
                MemoryManager(),
                code="secret",
                base_url="/admin/secret",
                settings=self.settings,
                permission_checker=lambda admin, permission: False,
            )
        )
        self.pool.freeze()

        router = APIRouter()
        dispatcher = CrudDispatcher(self.pool, settings=self.settings)
        for code in self.pool.get_admin_codes():
            CrudRouterBuilder.mount(router, dispatcher=dispatcher, admin_code=code)
        CrudRouterBuilder.mount_dashboard(
            router,
            dispatcher=CoreDispatcher(self.pool, settings=self.settings),
            path="/admin/",
        )

        self.app = FastAPI()
        self.app.add_middleware(SessionMiddleware, secret_key=self.settings.secret_key)
        self.app.include_router(router)

    def client(self) -> TestClient:
        return TestClient(self.app, follow_redirects=False)


class TestHttpRoutes:
    def setup_method(self) -> None:
        self.application = AdminApplication()
        self.client = self.application.client()

    def test_route_names(self) -> None:
        app = self.application.app

        assert app.url_path_for("article_list") == "/admin/article/list"
        assert app.url_path_for("article_edit", id="3") == "/admin/article/3/edit"
        assert app.url_path_for("admin_dashboard") == "/admin/"

    def test_dashboard_lists_admins(self) -> None:
        response = self.client.get("/admin/")

        assert response.status_code == 200
        assert "Content" in response.text
        assert "/admin/article/list" in response.text

    def test_list_page(self) -> None:
        response = self.client.get("/admin/article/list")

        assert response.status_code == 200
        assert "/admin/article/create" in response.text

    def test_create_then_edit_shows_flash_once(self) -> None:
        response = self.client.post("/admin/article/create", data={"title": "Hello"})

        assert response.status_code == 302
        assert response.headers["location"] == "/admin/article/1/edit"
        assert self.application.manager.store["1"].title == "Hello"

        first = self.client.get("/admin/article/1/edit")
        second = self.client.get("/admin/article/1/edit")

        assert "flash_create_success" in first.text
        assert 'value="Hello"' in first.text
        assert "flash_create_success" not in second.text

    def test_invalid_create_renders_errors(self) -> None:
        response = self.client.post("/admin/article/create", data={"title": "no"})

        assert response.status_code == 200
        assert "flash_create_error" in response.text
        assert 'value="no"' in response.text
        assert self.application.manager.store == {}

    def test_ajax_create_returns_json(self) -> None:
        response = self.client.post(
            "/admin/article/create",
            data={"title": "Hello"},
            headers={"X-Requested-With": "XMLHttpRequest"},
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert response.json() == {"result": "ok", "objectId": "1"}

    def test_show_and_delete(self) -> None:
        self.client.post("/admin/article/create", data={"title": "Hello"})

        show = self.client.get("/admin/article/1/show")
        deleted = self.client.post("/admin/article/1/delete")

        assert show.status_code == 200
        assert "Hello" in show.text
        assert deleted.status_code == 302
        assert deleted.headers["location"] == "/admin/article/list"
        assert self.application.manager.store == {}

    def test_error_statuses(self) -> None:
        assert self.client.get("/admin/article/99/show").status_code == 404
        assert self.client.get("/admin/article/batch").status_code == 405

        denied = self.client.get("/admin/secret/list")
        assert denied.status_code == 403
        assert "LIST" in denied.json()["detail"]

    def test_batch_without_selection_redirects_to_list(self) -> None:
        response = self.client.post(
            "/admin/article/batch",
            data={"action": "delete", "filter_title": "x"},
        )

        assert response.status_code == 302
        assert response.headers["location"] == "/admin/article/list?filter_title=x"


# The End
