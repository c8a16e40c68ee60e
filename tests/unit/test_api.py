"""Unit tests for the HTTP transport (requests mocked)."""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from gemimg.core import api
from gemimg.core.config import DEFAULT_API_BASE_URL, AuthConfig
from gemimg.utils.exceptions import APIError, NetworkError, RequestTimeoutError

AUTH = AuthConfig(api_key="secret-key", model="default-model")


def _mock_response(status_code=200, json_data=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    if json_data is None:
        response.json.side_effect = ValueError("not json")
    else:
        response.json.return_value = json_data
    response.text = text or (json.dumps(json_data) if json_data is not None else "")
    return response


@pytest.mark.unit
class TestGenerateContent:
    def test_posts_to_generate_content_with_key(self):
        body = {"contents": []}
        with patch(
            "gemimg.core.api.requests.post", return_value=_mock_response(json_data={"ok": 1})
        ) as m:
            result = api.generate_content(AUTH, "gemini-3-pro-image-preview", body)
        assert result == {"ok": 1}
        url = m.call_args[0][0]
        assert url == f"{DEFAULT_API_BASE_URL}/models/gemini-3-pro-image-preview:generateContent"
        kw = m.call_args[1]
        assert kw["params"] == {"key": "secret-key"}
        assert kw["headers"]["x-goog-api-key"] == "secret-key"
        assert kw["headers"]["Content-Type"] == "application/json"
        assert kw["json"] is body
        assert kw["timeout"] is None

    def test_model_is_url_quoted(self):
        with patch(
            "gemimg.core.api.requests.post", return_value=_mock_response(json_data={})
        ) as m:
            api.generate_content(AUTH, "a/b c", {})
        assert "/models/a%2Fb%20c:generateContent" in m.call_args[0][0]

    def test_custom_base_url_and_timeout(self):
        with patch(
            "gemimg.core.api.requests.post", return_value=_mock_response(json_data={})
        ) as m:
            api.generate_content(AUTH, "m", {}, base_url="https://example.test/v1/", timeout=5)
        assert m.call_args[0][0] == "https://example.test/v1/models/m:generateContent"
        assert m.call_args[1]["timeout"] == 5

    @pytest.mark.parametrize("status", [400, 401, 403, 404, 429, 500, 503])
    def test_error_status_raises_api_error_with_body(self, status):
        error_body = {"error": {"code": status, "message": "nope"}}
        with patch(
            "gemimg.core.api.requests.post",
            return_value=_mock_response(status, json_data=error_body),
        ):
            with pytest.raises(APIError) as exc_info:
                api.generate_content(AUTH, "m", {})
        assert exc_info.value.status_code == status
        assert json.loads(exc_info.value.response) == error_body

    def test_error_with_non_json_body_keeps_text(self):
        with patch(
            "gemimg.core.api.requests.post",
            return_value=_mock_response(502, json_data=None, text="Bad gateway"),
        ):
            with pytest.raises(APIError) as exc_info:
                api.generate_content(AUTH, "m", {})
        assert exc_info.value.response == "Bad gateway"

    def test_success_with_invalid_json_raises_api_error(self):
        with patch(
            "gemimg.core.api.requests.post",
            return_value=_mock_response(200, json_data=None, text="{invalid"),
        ):
            with pytest.raises(APIError) as exc_info:
                api.generate_content(AUTH, "m", {})
        assert exc_info.value.response == "{invalid"

    def test_success_with_non_object_json_raises_api_error(self):
        with patch(
            "gemimg.core.api.requests.post", return_value=_mock_response(200, json_data=[1, 2])
        ):
            with pytest.raises(APIError):
                api.generate_content(AUTH, "m", {})

    def test_timeout_raises_request_timeout_error(self):
        with patch("gemimg.core.api.requests.post") as m:
            m.side_effect = requests.exceptions.Timeout()
            with pytest.raises(RequestTimeoutError):
                api.generate_content(AUTH, "m", {}, timeout=1)

    def test_connection_error_raises_network_error(self):
        with patch("gemimg.core.api.requests.post") as m:
            m.side_effect = requests.exceptions.ConnectionError("refused")
            with pytest.raises(NetworkError) as exc_info:
                api.generate_content(AUTH, "m", {})
        assert isinstance(exc_info.value.original_error, requests.exceptions.ConnectionError)

    def test_request_exception_raises_network_error(self):
        with patch("gemimg.core.api.requests.post") as m:
            m.side_effect = requests.exceptions.RequestException("other")
            with pytest.raises(NetworkError):
                api.generate_content(AUTH, "m", {})

    def test_not_retried(self):
        with patch("gemimg.core.api.requests.post") as m:
            m.return_value = _mock_response(500, json_data={"error": {}})
            with pytest.raises(APIError):
                api.generate_content(AUTH, "m", {})
        assert m.call_count == 1


@pytest.mark.unit
class TestFetchModels:
    def test_get_with_page_size(self):
        with patch(
            "gemimg.core.api.requests.get", return_value=_mock_response(json_data={"models": []})
        ) as m:
            api.fetch_models(AUTH, page_size=25)
        assert m.call_args[0][0] == f"{DEFAULT_API_BASE_URL}/models"
        assert m.call_args[1]["params"] == {"pageSize": "25", "key": "secret-key"}

    def test_page_size_omitted(self):
        with patch(
            "gemimg.core.api.requests.get", return_value=_mock_response(json_data={})
        ) as m:
            api.fetch_models(AUTH)
        assert m.call_args[1]["params"] == {"key": "secret-key"}

    def test_error_status_raises(self):
        with patch(
            "gemimg.core.api.requests.get",
            return_value=_mock_response(403, json_data={"error": {"status": "PERMISSION_DENIED"}}),
        ):
            with pytest.raises(APIError) as exc_info:
                api.fetch_models(AUTH)
        assert exc_info.value.status_code == 403


@pytest.mark.unit
class TestTruncateForLog:
    def test_long_data_replaced_text_kept(self):
        long = "A" * 500
        out = api._truncate_image_data_for_log(
            {"parts": [{"text": long}, {"inlineData": {"data": long, "mimeType": "image/png"}}]}
        )
        assert out["parts"][0]["text"] == long
        assert out["parts"][1]["inlineData"]["data"] == "<string, 500 chars>"
        assert out["parts"][1]["inlineData"]["mimeType"] == "image/png"

    def test_debug_logs_payload_without_image_data(self, caplog):
        import logging

        long = "B" * 1000
        with patch(
            "gemimg.core.api.requests.post", return_value=_mock_response(json_data={"x": 1})
        ):
            with caplog.at_level(logging.INFO, logger="gemimg"):
                api.generate_content(AUTH, "m", {"data": long}, debug=True)
        assert long not in caplog.text
        assert "secret-key" not in caplog.text
