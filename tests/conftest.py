import pytest
from fastapi.testclient import TestClient

from pantry_recipes.app.core.config import get_settings
from pantry_recipes.app.main import create_app


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app):
    return TestClient(app)


def recipe_page(ld_json: str) -> str:
    return f"""
    <html>
      <head>
        <script type="application/ld+json">{ld_json}</script>
      </head>
      <body><h1>Recipe</h1></body>
    </html>
    """
