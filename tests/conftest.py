"""Shared fixtures: an isolated app per test with in-memory SQLite and a temporary upload folder."""

from __future__ import annotations

import pytest

from app import create_app, db, socketio
from app.config.config import TestingConfig


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "Uploads"


@pytest.fixture
def app(tmp_path, upload_dir):
    pages = tmp_path / "site"
    for folder, body in (("frontend", "employee page"), ("hr_page", "hr page")):
        (pages / folder).mkdir(parents=True)
        (pages / folder / "index.html").write_text(f"<html>{body}</html>")
    (pages / "public").mkdir()
    (pages / "public" / "styles.css").write_text("body {}")

    class Config(TestingConfig):
        UPLOAD_FOLDER = str(upload_dir)
        FRONTEND_FOLDER = str(pages / "frontend")
        HR_FOLDER = str(pages / "hr_page")
        PUBLIC_FOLDER = str(pages / "public")

    app = create_app(Config)
    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def socket_client(app):
    socket_client = socketio.test_client(app)
    yield socket_client
    if socket_client.is_connected():
        socket_client.disconnect()
