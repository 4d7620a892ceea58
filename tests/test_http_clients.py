"""Tests for the HTTP-based FDC adapter."""

import asyncio
import json

import httpx

from nutrition_resolver.adapters.fdc_client import HttpxFdcClient


def _client(handler) -> HttpxFdcClient:  # type: ignore[no-untyped-def]
    transport = httpx.MockTransport(handler)
    return HttpxFdcClient(
        api_key="key",
        base_url="https://api.test",
        http_client=httpx.AsyncClient(transport=transport),
    )


def test_fdc_client_search_decodes_candidates() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "foods": [
                    {
                        "fdcId": 1105314,
                        "description": "Banana, raw",
                        "dataType": "Foundation",
                    },
                    {
                        "fdcId": 173944,
                        "description": "Bananas, raw",
                        "dataType": "SR Legacy",
                        "brandOwner": None,
                        "ingredients": "BANANAS",
                    },
                ]
            },
        )

    client = _client(handler)

    results = asyncio.run(client.search("banana"))

    assert [r.fdc_id for r in results] == [1105314, 173944]
    assert results[0].brand_owner is None
    assert results[1].ingredients == "BANANAS"
    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/foods/search"
    assert request.headers["X-Api-Key"] == "key"
    body = json.loads(request.content.decode())
    assert body["query"] == "banana"
    assert body["dataType"] == ["Foundation", "SR Legacy", "Survey (FNDDS)"]
    assert body["pageSize"] == 10
    assert body["pageNumber"] == 1


def test_fdc_client_blank_query_skips_network() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"foods": []})

    client = _client(handler)

    assert asyncio.run(client.search("")) == []
    assert asyncio.run(client.search("   ")) == []
    assert calls == []


def test_fdc_client_search_fails_soft() -> None:
    def server_error(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="upstream down")

    def timeout(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    def broken_json(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"not json")

    for handler in (server_error, timeout, broken_json):
        assert asyncio.run(_client(handler).search("rice")) == []


def test_fdc_client_search_outcome_carries_reason() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="maintenance")

    outcome = asyncio.run(_client(handler).search_outcome("rice"))

    assert not outcome.ok
    assert outcome.reason is not None
    assert "503" in outcome.reason


def test_fdc_client_fetch_detail_abridged_format() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "fdcId": 1105314,
                "description": "Banana, raw",
                "dataType": "Foundation",
                "foodNutrients": [
                    {
                        "number": "208",
                        "name": "Energy",
                        "amount": 89,
                        "unitName": "KCAL",
                    },
                    {"number": "203", "name": "Protein", "unitName": "G"},
                    {
                        "nutrientNumber": "401",
                        "nutrientName": "Vitamin C",
                        "value": 8.7,
                    },
                    {
                        "nutrient": {"number": "306", "name": "Potassium, K"},
                        "amount": 358,
                    },
                    {"name": "No number", "amount": 5},
                ],
            },
        )

    client = _client(handler)

    record = asyncio.run(client.fetch_detail(1105314))

    assert record is not None
    assert record.description == "Banana, raw"
    assert [(n.code, n.amount) for n in record.nutrients] == [
        (208, 89.0),
        (203, 0.0),
        (401, 8.7),
        (306, 358.0),
    ]
    request = seen[0]
    assert request.url.path == "/food/1105314"
    assert request.url.params["api_key"] == "key"
    assert request.url.params["format"] == "abridged"
    assert "208" in request.url.params["nutrients"].split(",")


def test_fdc_client_fetch_detail_zeroes_non_finite_amounts() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            content=(
                b'{"fdcId": 1, "foodNutrients": ['
                b'{"number": "208", "amount": NaN},'
                b'{"number": "203", "amount": Infinity},'
                b'{"number": "204", "value": -Infinity}]}'
            ),
            headers={"content-type": "application/json"},
        )

    record = asyncio.run(_client(handler).fetch_detail(1))

    assert record is not None
    assert [(n.code, n.amount) for n in record.nutrients] == [
        (208, 0.0),
        (203, 0.0),
        (204, 0.0),
    ]


def test_fdc_client_fetch_detail_fails_soft() -> None:
    def not_found(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": "not found"})

    def connect_error(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    def wrong_id(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"fdcId": 2, "foodNutrients": []})

    def missing_id(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"description": "?"})

    for handler in (not_found, connect_error, wrong_id, missing_id):
        assert asyncio.run(_client(handler).fetch_detail(1)) is None


def test_fdc_client_close() -> None:
    client = _client(lambda request: httpx.Response(200, json={}))

    asyncio.run(client.close())

    assert client.http_client.is_closed
