import json

import httpx
import pytest

from pantry_recipes.app.services import url_recipe_parser
from pantry_recipes.app.services.url_parsing import html_fetcher
from pantry_recipes.app.services.url_parsing.errors import BadFormatError, LinkUnavailableError
from pantry_recipes.app.services.url_parsing.extractors.schema_org import (
    LinkedDataKind,
    decode_linked_data,
    extract_recipe_fields,
    extract_recipe_from_schema_org,
    locate_recipe_json,
)
from pantry_recipes.app.services.url_parsing.models import ParsedIngredientLine

from tests.conftest import recipe_page

URL = "https://example.com/recipe"

GRAPH_RECIPE = {
    "@context": "https://schema.org",
    "@graph": [
        {"@type": "WebPage", "name": "Breakfast ideas"},
        {
            "@type": ["Recipe"],
            "name": "Boiled Eggs",
            "prepTime": "PT5M",
            "cookTime": "PT10M",
            "totalTime": "PT15M",
            "recipeYield": ["2", "2 servings"],
            "image": [{"@type": "ImageObject", "url": "https://example.com/eggs.jpg"}],
            "recipeIngredient": ["2 eggs"],
            "recipeInstructions": [
                {"@type": "HowToStep", "text": "Boil water."},
                {"@type": "HowToStep", "text": "Cook eggs &amp; cool."},
            ],
        },
    ],
}


def test_locate_recipe_in_graph():
    recipe = locate_recipe_json(recipe_page(json.dumps(GRAPH_RECIPE)), URL)
    assert recipe["name"] == "Boiled Eggs"


def test_locate_recipe_in_top_level_array():
    data = [
        {"@type": "Organization", "name": "Example"},
        {"@type": "Recipe", "name": "Toast", "recipeIngredient": ["1 slice bread"]},
    ]
    recipe = locate_recipe_json(recipe_page(json.dumps(data)), URL)
    assert recipe["name"] == "Toast"


def test_locate_skips_unrelated_json_ld_blocks():
    html = """
    <html><head>
      <script type="application/ld+json">{"@type": "Organization", "name": "Example"}</script>
      <script type="text/javascript">var recipeIngredient = [];</script>
      <script type="application/ld+json">[{"@type": "Recipe", "name": "Soup", "recipeIngredient": []}]</script>
    </head></html>
    """
    assert locate_recipe_json(html, URL)["name"] == "Soup"


def test_standalone_object_without_graph_is_bad_format():
    data = {"@type": "Recipe", "name": "Toast", "recipeIngredient": ["1 slice bread"]}
    with pytest.raises(BadFormatError) as exc_info:
        locate_recipe_json(recipe_page(json.dumps(data)), URL)
    assert exc_info.value.link == URL


@pytest.mark.parametrize(
    "html",
    [
        "<html><body><p>No structured data</p></body></html>",
        recipe_page('{"@type": "Organization", "name": "No ingredients here"}'),
        recipe_page('{"@graph": [{"@type": "Recipe", "recipeIngredient": ["1 egg"],}'),
        recipe_page('{"@graph": [{"@type": "HowTo", "recipeIngredient": ["1 egg"]}]}'),
        recipe_page('{"@graph": {"@type": "Recipe", "recipeIngredient": ["1 egg"]}}'),
        recipe_page('"recipeIngredient"'),
    ],
)
def test_locate_recipe_bad_format(html):
    with pytest.raises(BadFormatError):
        locate_recipe_json(html, URL)


def test_deeply_nested_json_ld_is_bad_format():
    html = recipe_page("[" * 100000 + '"recipeIngredient"' + "]" * 100000)
    with pytest.raises(BadFormatError):
        locate_recipe_json(html, URL)


def test_decode_linked_data():
    assert decode_linked_data({"@graph": []}).kind is LinkedDataKind.GRAPH
    assert decode_linked_data({"@type": "Recipe"}).kind is LinkedDataKind.OBJECT
    assert decode_linked_data([]).kind is LinkedDataKind.LIST
    assert decode_linked_data("text").kind is LinkedDataKind.SCALAR


def test_extract_recipe_from_schema_org():
    result = extract_recipe_from_schema_org(recipe_page(json.dumps(GRAPH_RECIPE)), URL)
    assert result.name == "Boiled Eggs"
    assert result.prep_time_minutes == 5
    assert result.cook_time_minutes == 10
    assert result.total_time_minutes == 15
    assert result.servings == 2
    assert result.image == "https://example.com/eggs.jpg"
    assert result.instructions == "1. Boil water.\n2. Cook eggs & cool.\n"
    assert result.ingredients == [ParsedIngredientLine(amount=2.0, unit=None, name="eggs")]


def test_extract_recipe_fields_degrade_independently():
    result = extract_recipe_fields(
        {
            "@type": "Recipe",
            "name": 12,
            "prepTime": 15,
            "totalTime": "P1W",
            "image": {"width": 100},
            "recipeInstructions": "Just cook it.",
            "recipeIngredient": ["1/2 cup rice", None, "salt to taste"],
        }
    )
    assert result.name is None
    assert result.prep_time_minutes is None
    assert result.total_time_minutes is None
    assert result.image is None
    assert result.instructions is None
    assert result.ingredients == [
        ParsedIngredientLine(amount=0.5, unit="cup", name="rice"),
        ParsedIngredientLine(amount=None, unit=None, name="salt to taste"),
    ]


def test_out_of_range_numbers_only_blank_their_own_field():
    recipe = json.loads(
        '{"@type": "Recipe", "name": "Soup", "recipeYield": 1e400, "cookTime": "PT30M",'
        ' "recipeIngredient": ["1 cup stock"]}'
    )
    recipe["prepTime"] = "P" + "9" * 5000 + "D"

    result = extract_recipe_fields(recipe)
    assert result.name == "Soup"
    assert result.servings is None
    assert result.prep_time_minutes is None
    assert result.cook_time_minutes == 30
    assert result.ingredients == [ParsedIngredientLine(amount=1.0, unit="cup", name="stock")]


def test_extract_recipe_fields_without_ingredients():
    result = extract_recipe_fields({"@type": "Recipe", "name": "Water"})
    assert result.name == "Water"
    assert result.ingredients == []


@pytest.mark.asyncio
async def test_parse_recipe_from_url(monkeypatch):
    html = recipe_page(json.dumps(GRAPH_RECIPE))

    async def fake_fetch(url: str):
        return html

    monkeypatch.setattr(url_recipe_parser, "fetch_html", fake_fetch)

    result = await url_recipe_parser.parse_recipe_from_url(URL)
    assert result.name == "Boiled Eggs"
    assert result.ingredients == [ParsedIngredientLine(amount=2.0, unit=None, name="eggs")]


@pytest.mark.asyncio
async def test_parse_recipe_from_url_bad_format(monkeypatch):
    async def fake_fetch(url: str):
        return "<html><body>Nothing to see</body></html>"

    monkeypatch.setattr(url_recipe_parser, "fetch_html", fake_fetch)

    with pytest.raises(BadFormatError):
        await url_recipe_parser.parse_recipe_from_url(URL)


@pytest.mark.asyncio
async def test_parse_recipe_from_url_link_unavailable(monkeypatch):
    async def fake_fetch(url: str):
        raise LinkUnavailableError(url, "connection refused")

    monkeypatch.setattr(url_recipe_parser, "fetch_html", fake_fetch)

    with pytest.raises(LinkUnavailableError) as exc_info:
        await url_recipe_parser.parse_recipe_from_url(URL)
    assert str(exc_info.value) == f"Could not GET {URL}: connection refused"


@pytest.mark.asyncio
async def test_parse_recipe_from_url_logs_empty_body(monkeypatch, caplog):
    async def fake_fetch(url: str):
        raise BadFormatError(url, "No body")

    monkeypatch.setattr(url_recipe_parser, "fetch_html", fake_fetch)

    with pytest.raises(BadFormatError):
        await url_recipe_parser.parse_recipe_from_url(URL)
    assert "Unusable response from" in caplog.text
    assert "Could not fetch recipe page" not in caplog.text


def _fake_client(response=None, error=None):
    class FakeAsyncClient:
        def __init__(self, *args, **kwargs):
            pass

        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc, tb):
            return False

        async def get(self, url, *args, **kwargs):
            if error is not None:
                raise error
            return response

    return FakeAsyncClient


def _response(status_code: int, text: str) -> httpx.Response:
    return httpx.Response(status_code, text=text, request=httpx.Request("GET", URL))


@pytest.mark.asyncio
async def test_fetch_html_returns_body(monkeypatch):
    monkeypatch.setattr(html_fetcher.httpx, "AsyncClient", _fake_client(_response(200, "<html>ok</html>")))
    assert await html_fetcher.fetch_html(URL) == "<html>ok</html>"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        httpx.ReadTimeout("timed out"),
        httpx.ConnectTimeout("timed out"),
        httpx.ConnectError("connection refused"),
    ],
)
async def test_fetch_html_transport_errors(monkeypatch, error):
    monkeypatch.setattr(html_fetcher.httpx, "AsyncClient", _fake_client(error=error))
    with pytest.raises(LinkUnavailableError):
        await html_fetcher.fetch_html(URL)


@pytest.mark.asyncio
async def test_fetch_html_bad_status(monkeypatch):
    monkeypatch.setattr(html_fetcher.httpx, "AsyncClient", _fake_client(_response(404, "missing")))
    with pytest.raises(LinkUnavailableError) as exc_info:
        await html_fetcher.fetch_html(URL)
    assert "404" in exc_info.value.reason


@pytest.mark.asyncio
async def test_fetch_html_empty_body(monkeypatch):
    monkeypatch.setattr(html_fetcher.httpx, "AsyncClient", _fake_client(_response(200, "  ")))
    with pytest.raises(BadFormatError):
        await html_fetcher.fetch_html(URL)


@pytest.mark.asyncio
async def test_fetch_html_blocks_private_hosts_when_configured(monkeypatch):
    monkeypatch.setenv("BLOCK_PRIVATE_HOSTS", "true")
    monkeypatch.setattr(html_fetcher.httpx, "AsyncClient", _fake_client(_response(200, "<html>ok</html>")))
    with pytest.raises(LinkUnavailableError):
        await html_fetcher.fetch_html("http://127.0.0.1:8000/recipe")
    assert await html_fetcher.fetch_html(URL) == "<html>ok</html>"


def test_is_private_host():
    assert html_fetcher.is_private_host("localhost")
    assert html_fetcher.is_private_host("10.0.0.5:8080")
    assert not html_fetcher.is_private_host("example.com")
