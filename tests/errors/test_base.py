# tests/errors/test_base.py
"""Tests for blogapi/errors/base.py module."""

from unittest.mock import MagicMock

import orjson
import pytest
from starlette.exceptions import HTTPException

from blogapi.errors import BaseAppError, create_exception_handler, create_http_exception_handler


def _request(path: str = "/api/test") -> MagicMock:
    request = MagicMock()
    request.client.host = "192.168.1.1"
    request.url.path = path
    return request


class TestBaseAppError:
    """Tests for BaseAppError exception."""

    def test_default_values(self) -> None:
        """Test default initialization values."""
        error = BaseAppError()
        assert error.detail == "Internal Server Error"
        assert error.status_code == 500

    def test_str_representation(self) -> None:
        """Test string representation returns message."""
        assert str(BaseAppError(detail="Test error")) == "Test error"


class TestCreateExceptionHandler:
    """Tests for create_exception_handler factory function."""

    @pytest.mark.asyncio
    async def test_handler_with_base_app_error(self) -> None:
        """Test handler with BaseAppError exception."""
        logger = MagicMock()
        handler = create_exception_handler(logger)

        response = await handler(_request(), BaseAppError(detail="Test error", status_code=400))

        assert response.status_code == 400
        assert orjson.loads(response.body) == {"error": "Test error"}
        logger.warning.assert_called_once_with(
            "Test error for ip: 192.168.1.1 for endpoint /api/test",
        )

    @pytest.mark.asyncio
    async def test_handler_with_generic_exception(self) -> None:
        """Test handler with generic Python exception."""
        handler = create_exception_handler(MagicMock())

        response = await handler(_request(), ValueError("Something went wrong"))

        assert response.status_code == 500
        assert orjson.loads(response.body) == {"error": "Internal Server Error"}

    @pytest.mark.asyncio
    async def test_extra_attributes_are_included(self) -> None:
        """Test that attributes set on the error are merged into the body."""
        error = BaseAppError(detail="Busy", status_code=503)
        error.retry_after = 4.5

        response = await create_exception_handler(MagicMock())(_request(), error)

        assert orjson.loads(response.body) == {"error": "Busy", "retry_after": 4.5}


class TestCreateHttpExceptionHandler:
    """Tests for create_http_exception_handler."""

    @pytest.mark.asyncio
    async def test_renders_error_body(self) -> None:
        handler = create_http_exception_handler(MagicMock())
        exc = HTTPException(status_code=404, detail="Provider google not configured")

        response = await handler(_request(), exc)

        assert response.status_code == 404
        assert orjson.loads(response.body) == {"error": "Provider google not configured"}

    @pytest.mark.asyncio
    async def test_keeps_headers(self) -> None:
        handler = create_http_exception_handler(MagicMock())
        exc = HTTPException(status_code=405, headers={"Allow": "GET"})

        response = await handler(_request(), exc)

        assert response.headers["Allow"] == "GET"
