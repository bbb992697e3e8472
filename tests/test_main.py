from conftest import API


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["docs"] == "/docs"


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_openapi_lists_product_routes(client):
    paths = client.get(f"{API}/openapi.json").json()["paths"]

    assert f"{API}/products/" in paths
    assert f"{API}/products/{{id}}" in paths
    assert f"{API}/categories/" in paths
