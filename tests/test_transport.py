import asyncio
from unittest.mock import MagicMock, AsyncMock, patch

import aiohttp
import pytest
import requests

from cloudbucket_sdk.config import ClientConfig
from cloudbucket_sdk.models import APIResponse
from cloudbucket_sdk.transport import Transport, RequestsTransport, AiohttpTransport, USER_AGENT


def make_response(status=200, reason="OK", text="", content_type="application/json"):
    response = MagicMock()
    response.status_code = status
    response.reason = reason
    response.text = text
    response.headers = {"Content-Type": content_type}
    return response




class TestTransportBase:
    def test_cannot_instantiate_base(self, config):
        with pytest.raises(TypeError):
            Transport(config)

    def test_subclass_without_post(self, config):
        class Incomplete(Transport):
            pass

        with pytest.raises(TypeError):
            Incomplete(config)


# --- Synchronous transport ---


class TestRequestsTransport:
    def test_headers(self, config):
        transport = RequestsTransport(
            ClientConfig(endpoint="https://storage.example.com", api_key="k", session_token="s")
        )
        headers = transport.session.headers
        assert headers["Authorization"] == "Bearer k"
        assert headers["Session"] == "s"
        assert headers["User-Agent"] == USER_AGENT
        transport.close()

    def test_no_credentials(self):
        transport = RequestsTransport(ClientConfig(endpoint="https://storage.example.com"))
        assert "Authorization" not in transport.session.headers
        assert "Session" not in transport.session.headers

    def test_success(self, config):
        with patch.object(requests.Session, "request") as mock_request:
            mock_request.return_value = make_response(text='{"name": "logs"}')
            with RequestsTransport(config) as transport:
                response = transport.post("/_api/rest/v1/storage/create-bucket", {"name": "logs"})

        mock_request.assert_called_once_with(
            method="POST",
            url="https://storage.example.com/_api/rest/v1/storage/create-bucket",
            json={"name": "logs"},
            timeout=5.0,
        )
        assert response == APIResponse(data={"name": "logs"}, errors=None)
        assert response.ok

    def test_empty_body(self, config):
        with patch.object(requests.Session, "request", return_value=make_response(text="")):
            response = RequestsTransport(config).post("/_api/rest/v1/storage/stats")
        assert response.data is None
        assert response.errors is None

    def test_service_error(self, config):
        body = '{"errors": [{"origin": "client_error", "code": "bucket_exists", "message": "exists"}]}'
        with patch.object(requests.Session, "request", return_value=make_response(409, "Conflict", body)):
            response = RequestsTransport(config).post("/_api/rest/v1/storage/create-bucket", {"name": "logs"})

        assert response.data is None
        assert not response.ok
        assert response.errors.status == 409
        assert response.errors.status_text == "Conflict"
        assert response.errors.items[0].code == "bucket_exists"
        assert str(response.errors) == "409 Conflict: exists"

    def test_plain_text_error(self, config):
        with patch.object(
            requests.Session, "request",
            return_value=make_response(502, "Bad Gateway", "upstream down", "text/plain"),
        ):
            response = RequestsTransport(config).post("/_api/rest/v1/storage/stats")

        assert response.errors.status == 502
        assert response.errors.items[0].message == "upstream down"

    def test_list_error_body(self, config):
        body = '[{"code": "invalid_expression", "message": "bad"}, "second"]'
        with patch.object(requests.Session, "request", return_value=make_response(400, "Bad Request", body)):
            response = RequestsTransport(config).post("/_api/rest/v1/storage/search-files", {})

        codes = [item.code for item in response.errors.items]
        assert codes == ["invalid_expression", "unknown_error"]
        assert response.errors.items[1].message == "second"

    def test_network_error_not_raised(self, config):
        with patch.object(requests.Session, "request", side_effect=requests.exceptions.ConnectionError("refused")):
            response = RequestsTransport(config).post("/_api/rest/v1/storage/stats")

        assert response.data is None
        assert response.errors.status == 0
        assert response.errors.items[0].code == "network_error"

    def test_timeout_not_raised(self, config):
        with patch.object(requests.Session, "request", side_effect=requests.exceptions.Timeout("slow")):
            response = RequestsTransport(config).post("/_api/rest/v1/storage/stats")

        assert response.errors.status_text == "Network Error"


# --- Asynchronous transport ---


def make_session(status=200, reason="OK", text="", content_type="application/json"):
    response = MagicMock()
    response.status = status
    response.reason = reason
    response.headers = {"Content-Type": content_type}
    response.text = AsyncMock(return_value=text)

    session = MagicMock()
    session.closed = False
    session.close = AsyncMock()
    session.request.return_value.__aenter__.return_value = response
    return session


class TestAiohttpTransport:
    @pytest.mark.asyncio
    async def test_success(self, config):
        session = make_session(text='[{"name": "logs"}]')
        transport = AiohttpTransport(config, session=session)

        response = await transport.post("/_api/rest/v1/storage/list-buckets", {"expression": None, "options": None})

        session.request.assert_called_once_with(
            "POST",
            "https://storage.example.com/_api/rest/v1/storage/list-buckets",
            json={"expression": None, "options": None},
        )
        assert response.data == [{"name": "logs"}]
        assert response.errors is None

    @pytest.mark.asyncio
    async def test_service_error(self, config):
        session = make_session(404, "Not Found", '{"errors": [{"code": "not_found", "message": "missing"}]}')
        response = await AiohttpTransport(config, session=session).post("/_api/rest/v1/storage/stats")

        assert response.data is None
        assert response.errors.status == 404
        assert response.errors.items[0].code == "not_found"

    @pytest.mark.asyncio
    async def test_connection_error_not_raised(self, config):
        session = make_session()
        session.request.side_effect = aiohttp.ClientConnectionError("refused")
        response = await AiohttpTransport(config, session=session).post("/_api/rest/v1/storage/stats")

        assert response.errors.status == 0
        assert response.errors.items[0].origin == "client_error"

    @pytest.mark.asyncio
    async def test_timeout_not_raised(self, config):
        session = make_session()
        session.request.side_effect = asyncio.TimeoutError()
        response = await AiohttpTransport(config, session=session).post("/_api/rest/v1/storage/stats")

        assert response.errors.items[0].code == "network_error"

    @pytest.mark.asyncio
    async def test_context_manager_closes_session(self, config):
        session = make_session()
        async with AiohttpTransport(config, session=session):
            pass
        session.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_creates_session_with_headers(self, config):
        transport = AiohttpTransport(config)
        session = await transport._get_session()
        try:
            assert session.headers["Authorization"] == "Bearer test-key"
            assert session.headers["User-Agent"] == USER_AGENT
            assert await transport._get_session() is session
        finally:
            await transport.close()
        assert session.closed
