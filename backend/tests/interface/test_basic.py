"""
基础接口集成测试
测试应用的基础功能，包括健康检查、根路径等
"""

import pytest


@pytest.mark.integration
@pytest.mark.basic
class TestBasicEndpoints:
    """基础端点集成测试类"""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "API is running..."
        assert "version" in data
        assert data["docs"] == "/api/docs"

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_openapi_lists_routes(self, client):
        response = client.get("/api/openapi.json")

        assert response.status_code == 200
        paths = response.json()["paths"]
        assert "/api/generate" in paths
        assert "/api/users" in paths
        assert "/api/nft/mint" in paths
