"""End-to-end tests: woven controllers served by FastAPI.

Requests go through RequestContextMiddleware and FastAPI routing into woven
controller methods; assertions are made on the captured call lines.
Uses AAA pattern (Arrange-Act-Assert) for clarity.
"""

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from pydantic import BaseModel

from logaspect import LogLevel, controller, install_request_context, logged


class Order(BaseModel):
    item: str
    quantity: int = 1


@controller
@logged(level=LogLevel.INFO)
class GreetingController:
    def greet(self, name: str) -> str:
        return f"Hello, {name}"

    async def order(self, order: Order) -> Order:
        return Order(item=order.item, quantity=order.quantity * 2)

    def fail(self) -> str:
        raise HTTPException(status_code=418, detail="teapot")


@logged(level=LogLevel.WARN)
class GreetingService:
    def compose(self, name: str) -> str:
        return f"Hi {name}"


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def app(interceptor) -> FastAPI:
    """Create a test FastAPI app with a woven controller and request context."""
    app = FastAPI()
    greetings = GreetingController()
    service = GreetingService()

    app.add_api_route("/greet", greetings.greet, methods=["GET"])
    app.add_api_route("/orders", greetings.order, methods=["POST"])
    app.add_api_route("/fail", greetings.fail, methods=["GET"])

    @app.get("/compose")
    def compose(name: str) -> str:
        return service.compose(name)

    install_request_context(app)
    return app


@pytest.fixture
def client(app):
    """Create a test client."""
    return TestClient(app)


# =============================================================================
# Tests
# =============================================================================


class TestControllerRequests:
    """Tests for call lines produced while serving HTTP requests."""

    def test_greet_end_to_end(self, client, call_records):
        """GET /greet on a controller logs request, args and result, nothing else."""
        # Act
        response = client.get("/greet", params={"name": "Ada"})

        # Assert
        assert response.status_code == 200
        assert response.json() == "Hello, Ada"

        records = call_records()
        assert [name for name, _ in records] == ["INFO", "INFO", "INFO"]
        request_line, executing_line, finished_line = (msg for _, msg in records)
        assert request_line == "Received request HTTP/1.1 GET /greet"
        assert executing_line == 'GreetingController.greet: Executing with args ["Ada"]'
        assert finished_line.startswith("GreetingController.greet: Finished. Execution time ")
        assert finished_line.endswith('ms with result "Hello, Ada"')
        elapsed = finished_line.split("Execution time ")[1].split("ms")[0]
        assert int(elapsed) >= 0
        assert not any("Arguments have changed" in msg for _, msg in records)

    def test_async_endpoint_with_body(self, client, call_records):
        """POST with a JSON body to an async controller method logs the model."""
        # Act
        response = client.post("/orders", json={"item": "tea", "quantity": 2})

        # Assert
        assert response.status_code == 200
        assert response.json() == {"item": "tea", "quantity": 4}
        messages = [msg for _, msg in call_records()]
        assert messages == [
            "Received request HTTP/1.1 POST /orders",
            'GreetingController.order: Executing with args [{"item":"tea","quantity":2}]',
            'GreetingController.order: Finished. Execution time 7ms with result {"item":"tea","quantity":4}',
        ]

    def test_endpoint_exception_not_finished(self, client, call_records):
        """An exception from the endpoint reaches FastAPI and no Finished line is logged."""
        # Act
        response = client.get("/fail")

        # Assert
        assert response.status_code == 418
        assert response.json() == {"detail": "teapot"}
        messages = [msg for _, msg in call_records()]
        assert messages == [
            "Received request HTTP/1.1 GET /fail",
            "GreetingController.fail: Executing with args []",
        ]

    def test_service_during_request_has_no_request_line(self, client, call_records):
        """A non-controller class called while handling a request logs no request line."""
        # Act
        response = client.get("/compose", params={"name": "Ada"})

        # Assert
        assert response.status_code == 200
        records = call_records()
        assert [name for name, _ in records] == ["WARNING", "WARNING"]
        assert records[0][1] == 'GreetingService.compose: Executing with args ["Ada"]'

    def test_query_string_not_in_uri(self, client, call_records):
        """The request line carries the path only."""
        # Act
        client.get("/greet?name=Grace&extra=1")

        # Assert
        assert call_records()[0][1] == "Received request HTTP/1.1 GET /greet"

    def test_request_context_cleared_after_request(self, client):
        """No request stays bound once the response is sent."""
        from logaspect import get_current_request

        # Act
        client.get("/greet", params={"name": "Ada"})

        # Assert
        assert get_current_request() is None
