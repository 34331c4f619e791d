"""
Tests for GET /products catalog relay and its failure mapping.
"""

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from service_gateway.app.main import GatewayService
from shared.test_helpers import UPSTREAM_BASE_URL, test_data_factory, test_environment


class TestProductsRoute:
    """Test cases for the catalog translator behind /products."""

    @pytest.fixture
    def upstream(self):
        with respx.mock(base_url=UPSTREAM_BASE_URL, assert_all_called=False) as upstream:
            yield upstream

    @pytest.fixture
    def gateway_service(self):
        return GatewayService(test_environment.get_mock_config())

    @pytest.fixture
    def client(self, gateway_service, upstream):
        with TestClient(gateway_service.app) as client:
            yield client

    @pytest.fixture
    def products(self):
        return test_data_factory.create_test_products()

    def test_products_success(self, client, upstream, products):
        route = upstream.get("/all-products").mock(return_value=httpx.Response(200, json=products))

        response = client.get("/products")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json"
        assert response.json() == products
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        assert response.headers["Access-Control-Allow-Methods"] == "GET, OPTIONS"
        assert response.headers["Access-Control-Allow-Headers"] == "Content-Type"
        assert route.call_count == 1

    def test_products_repeat_fetch_is_byte_identical(self, client, upstream, products):
        upstream.get("/all-products").mock(return_value=httpx.Response(200, json=products))

        first = client.get("/products")
        second = client.get("/products")

        assert first.content == second.content
        assert [item["id"] for item in first.json()] == ["prod1", "prod2", "prod3"]

    def test_products_empty_catalog(self, client, upstream):
        upstream.get("/all-products").mock(return_value=httpx.Response(200, json=[]))

        response = client.get("/products")

        assert response.status_code == 200
        assert response.json() == []

    def test_products_missing_fields_take_zero_values(self, client, upstream):
        upstream.get("/all-products").mock(return_value=httpx.Response(200, json=[{"id": "prod9"}]))

        response = client.get("/products")

        assert response.status_code == 200
        assert response.json() == [{
            "id": "prod9",
            "name": "",
            "price": 0.0,
            "imageUrl": "",
            "description": "",
            "stock": 0,
        }]

    @pytest.mark.parametrize("status_code", [500, 503, 404, 201])
    def test_products_upstream_non_ok_is_bad_gateway(self, client, upstream, status_code):
        upstream.get("/all-products").mock(
            return_value=httpx.Response(status_code, text="internal stack trace: secret detail")
        )

        response = client.get("/products")

        assert response.status_code == 502
        assert response.text == f"Backend service error: {status_code}"
        assert "secret detail" not in response.text
        assert response.headers["Access-Control-Allow-Origin"] == "*"

    @pytest.mark.parametrize("failure", [
        httpx.ConnectError("Connection refused"),
        httpx.ReadTimeout("timed out"),
    ])
    def test_products_transport_failure_is_bad_gateway(self, client, upstream, failure):
        upstream.get("/all-products").mock(side_effect=failure)

        response = client.get("/products")

        assert response.status_code == 502
        assert response.text == "Failed to fetch products from backend service"
        assert "refused" not in response.text

    @pytest.mark.parametrize("body", [
        b'{"products": []}',
        b"<html>oops</html>",
        b'[{"id": 5}]',
        b'[1, 2, 3]',
        b'[{"id": "prod1", "stock": "many"}]',
    ])
    def test_products_undecodable_body_is_internal_error(self, client, upstream, body):
        upstream.get("/all-products").mock(return_value=httpx.Response(200, content=body))

        response = client.get("/products")

        assert response.status_code == 500
        assert response.text == "Failed to parse products data from backend"

    def test_products_errors_are_counted(self, client, upstream, gateway_service):
        upstream.get("/all-products").mock(return_value=httpx.Response(500))

        client.get("/products")

        assert gateway_service.metrics.registry.get_sample_value(
            "errors_total", {"error_type": "UPSTREAM_UNAVAILABLE", "service": "gateway"}
        ) == 1.0

    def test_products_transform_hook_reshapes_catalog(self, client, upstream, products, gateway_service, monkeypatch):
        upstream.get("/all-products").mock(return_value=httpx.Response(200, json=products))
        monkeypatch.setattr(
            gateway_service.catalog_translator,
            "transform_products",
            lambda items: [item for item in items if item.stock > 0],
        )

        response = client.get("/products")

        assert response.status_code == 200
        assert [item["id"] for item in response.json()] == ["prod1", "prod2"]

    def test_products_wrong_method_never_reaches_upstream(self, client, upstream):
        route = upstream.get("/all-products").mock(return_value=httpx.Response(200, json=[]))

        response = client.post("/products", json={})

        assert response.status_code == 405
        assert response.text == "Method not allowed"
        assert route.call_count == 0

    def test_products_unexpected_failure_keeps_cors_headers(self, upstream, products, gateway_service, monkeypatch):
        upstream.get("/all-products").mock(return_value=httpx.Response(200, json=products))

        def broken(catalog):
            raise RuntimeError("catalog reshaping bug")

        monkeypatch.setattr(gateway_service.catalog_translator, "transform_products", broken)

        with TestClient(gateway_service.app, raise_server_exceptions=False) as client:
            response = client.get("/products")

        assert response.status_code == 500
        assert response.text == "Internal server error"
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        assert response.headers["Access-Control-Allow-Methods"] == "GET, OPTIONS"
