"""Tests for service_errors.logging."""

import json
import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient


def _events(captured_err):
    lines = [line for line in captured_err.split("\n") if line.startswith("{")]
    return [json.loads(line) for line in lines]


def _settings(**overrides):
    from service_errors.config import ServiceSettings

    values = {"service_name": "orders-api", "log_level": "INFO", "log_format": "json"}
    values.update(overrides)
    return ServiceSettings(**values)


def _failing_app():
    from service_errors.errors import ServiceError
    from service_errors.errors.handlers import register_error_handlers

    app = FastAPI()
    register_error_handlers(app)

    @app.post("/orders")
    async def create_order():
        raise (
            ServiceError(1001, "VALIDATION_ERROR", 400, "Invalid {0}")
            .bind("quantity")
            .parameter("field", "quantity")
        )

    @app.get("/orders/{order_id}")
    async def get_order(order_id: str):
        raise ServiceError(5000, "STORE_UNAVAILABLE", 503, "Order store unavailable")

    return app


class TestServiceErrorEvents:
    def test_client_error_logged_as_warning(self, capsys):
        from service_errors.logging import setup_logging

        setup_logging(_settings())
        TestClient(_failing_app(), raise_server_exceptions=False).post("/orders")
        logged = [e for e in _events(capsys.readouterr().err) if e["event"] == "service_error"]
        assert len(logged) == 1
        event = logged[0]
        assert event["level"] == "warning"
        assert event["error_code"] == 1001
        assert event["error_name"] == "VALIDATION_ERROR"
        assert event["status_code"] == 400
        assert event["message"] == "Invalid quantity"
        assert event["parameters"] == {"field": "quantity"}
        assert event["method"] == "POST"
        assert event["path"] == "/orders"
        assert event["service"] == "orders-api"
        assert event["logger"] == "service_errors.errors.handlers"
        assert "error" not in event
        assert "arguments" not in event

    def test_server_error_logged_as_error(self, capsys):
        from service_errors.logging import setup_logging

        setup_logging(_settings())
        TestClient(_failing_app(), raise_server_exceptions=False).get("/orders/7")
        logged = [e for e in _events(capsys.readouterr().err) if e["event"] == "service_error"]
        assert len(logged) == 1
        assert logged[0]["level"] == "error"
        assert logged[0]["status_code"] == 503
        assert "parameters" not in logged[0]

    def test_default_builder_change_logged_at_debug(self, capsys):
        from service_errors import configure

        configure(_settings(log_level="DEBUG", response_format="json"))
        logged = [
            e for e in _events(capsys.readouterr().err) if e["event"] == "default_response_builder_set"
        ]
        assert len(logged) == 1
        assert logged[0]["builder"] == "JsonResponseBuilder"
        assert logged[0]["level"] == "debug"

    def test_default_builder_change_hidden_at_info(self, capsys):
        from service_errors import configure

        configure(_settings(log_level="INFO", response_format="text"))
        events = _events(capsys.readouterr().err)
        assert not [e for e in events if e["event"] == "default_response_builder_set"]

    def test_stdlib_record_carrying_service_error(self, capsys):
        from service_errors.errors import ServiceError
        from service_errors.logging import setup_logging

        setup_logging(_settings())
        err = ServiceError(2001, "NOT_FOUND", 404, "Order {0} not found").bind("7")
        logging.getLogger("orders.worker").warning("lookup_failed", extra={"error": err})
        event = _events(capsys.readouterr().err)[-1]
        assert event["event"] == "lookup_failed"
        assert event["logger"] == "orders.worker"
        assert event["error_code"] == 2001
        assert event["message"] == "Order 7 not found"


class TestSetupLogging:
    def test_dev_format_is_not_json(self, capsys):
        from service_errors.logging import get_logger, setup_logging

        setup_logging(_settings(log_format="dev"))
        get_logger().warning("service_error", path="/orders")
        output = capsys.readouterr().err.strip()
        with pytest.raises(json.JSONDecodeError):
            json.loads(output.split("\n")[-1])
        assert "service_error" in output

    def test_reconfigure_applies_to_module_loggers(self, capsys):
        from service_errors.errors.handlers import logger
        from service_errors.logging import setup_logging

        setup_logging(_settings(service_name="first"))
        logger.warning("service_error")
        setup_logging(_settings(service_name="second"))
        logger.warning("service_error")
        events = _events(capsys.readouterr().err)
        assert [e["service"] for e in events[-2:]] == ["first", "second"]


class TestExpandServiceError:
    def test_leaves_other_events_alone(self):
        from service_errors.logging.processors import expand_service_error

        event_dict = {"event": "other", "error": "plain string"}
        assert expand_service_error(None, "info", event_dict) == {"event": "other", "error": "plain string"}

    def test_expands_fields(self):
        from service_errors.errors import ServiceError
        from service_errors.logging.processors import expand_service_error

        err = ServiceError(1001, "VALIDATION_ERROR", 400, "Invalid {0}").bind("email")
        result = expand_service_error(None, "warning", {"event": "service_error", "error": err})
        assert result == {
            "event": "service_error",
            "error_code": 1001,
            "error_name": "VALIDATION_ERROR",
            "status_code": 400,
            "message": "Invalid email",
        }

    def test_add_service_name_keeps_existing(self):
        from service_errors.logging.processors import add_service_name

        processor = add_service_name("svc")
        assert processor(None, "info", {"event": "e"})["service"] == "svc"
        assert processor(None, "info", {"event": "e", "service": "other"})["service"] == "other"
