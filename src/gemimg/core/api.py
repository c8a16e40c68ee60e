"""
HTTP transport for the Gemini REST API.

Sends single request/response calls to the models and generateContent
endpoints and maps failures to gemimg exceptions. Nothing is retried.
"""

import json
import time
from typing import Any
from urllib.parse import quote

import requests

from gemimg.core.config import DEFAULT_API_BASE_URL, AuthConfig
from gemimg.logging_config import get_logger
from gemimg.utils.exceptions import APIError, NetworkError, RequestTimeoutError

logger = get_logger(__name__)

_DEBUG_TRUNCATE_THRESHOLD = 200
_DEBUG_NEVER_TRUNCATE_KEYS = frozenset({"text", "message", "description"})


def _truncate_image_data_for_log(obj: Any, parent_key: str | None = None) -> Any:
    """Recursively replace long base64 strings with placeholders for safe logging."""
    if isinstance(obj, dict):
        return {k: _truncate_image_data_for_log(v, k) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_truncate_image_data_for_log(v, None) for v in obj]
    if isinstance(obj, str) and len(obj) >= _DEBUG_TRUNCATE_THRESHOLD:
        if parent_key in _DEBUG_NEVER_TRUNCATE_KEYS:
            return obj
        return f"<string, {len(obj)} chars>"
    return obj


def _serialize_body(response: requests.Response) -> str:
    """Return the response body as JSON text, or the raw text if it is not JSON."""
    try:
        return json.dumps(response.json())
    except ValueError:
        return response.text


def _raise_for_status(response: requests.Response, what: str, model: str | None = None) -> None:
    status = response.status_code
    if 200 <= status < 300:
        return
    body = _serialize_body(response)
    if status in (401, 403):
        message = "Authentication failed. Please check your GEMINI_API_KEY."
    elif status == 404 and model:
        message = f"Model not found or endpoint unavailable: {model}"
    elif status == 429:
        message = "Rate limit exceeded. Please wait before making more requests."
    elif status >= 500:
        message = f"Gemini service error: {status}"
    else:
        message = f"Gemini {what} API error {status}: {body}"
    raise APIError(message, status_code=status, response=body)


def _parse_json(response: requests.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError as e:
        raise APIError(
            f"Failed to parse API response as JSON: {str(e)}",
            status_code=response.status_code,
            response=response.text,
        ) from e
    if not isinstance(data, dict):
        raise APIError(
            "Unexpected API response: expected a JSON object",
            status_code=response.status_code,
            response=json.dumps(data),
        )
    return data


def _send(
    method: str,
    url: str,
    auth: AuthConfig,
    *,
    params: dict[str, Any] | None = None,
    payload: dict[str, Any] | None = None,
    timeout: float | None = None,
    debug: bool = False,
) -> requests.Response:
    """Perform one HTTP call. Transport failures become NetworkError/RequestTimeoutError."""
    query = dict(params or {})
    query["key"] = auth.api_key
    headers = {"x-goog-api-key": auth.api_key}

    logger.debug("API request method=%s url=%s timeout=%s", method, url, timeout)
    if debug and payload is not None:
        logger.info(
            "API request payload (image data truncated): %s",
            json.dumps(_truncate_image_data_for_log(payload), indent=2, default=str),
        )

    start_time = time.time()
    try:
        if method == "POST":
            headers["Content-Type"] = "application/json"
            response = requests.post(
                url, params=query, headers=headers, json=payload, timeout=timeout
            )
        else:
            response = requests.get(url, params=query, headers=headers, timeout=timeout)
    except requests.exceptions.Timeout as e:
        raise RequestTimeoutError(f"Request timed out after {timeout} seconds.") from e
    except requests.exceptions.ConnectionError as e:
        raise NetworkError(
            "Failed to connect to the Gemini API. Please check your internet connection.",
            original_error=e,
        ) from e
    except requests.exceptions.RequestException as e:
        raise NetworkError(f"Network error during API request: {str(e)}", original_error=e) from e

    logger.debug(
        "API response status=%s time=%.2fs", response.status_code, time.time() - start_time
    )
    if debug:
        try:
            logger.info(
                "API response (image data truncated): %s",
                json.dumps(_truncate_image_data_for_log(response.json()), indent=2, default=str),
            )
        except ValueError:
            logger.info("API response (raw text): %s", response.text[:2000])
    return response


def generate_content(
    auth: AuthConfig,
    model: str,
    body: dict[str, Any],
    *,
    base_url: str = DEFAULT_API_BASE_URL,
    timeout: float | None = None,
    debug: bool = False,
) -> dict[str, Any]:
    """
    POST a request body to {base_url}/models/{model}:generateContent.

    Returns:
        The parsed JSON response

    Raises:
        APIError: On a non-success status or an unparseable body
        NetworkError: If the connection fails
        RequestTimeoutError: If the caller-supplied timeout elapses
    """
    url = f"{base_url.rstrip('/')}/models/{quote(model, safe='')}:generateContent"
    response = _send("POST", url, auth, payload=body, timeout=timeout, debug=debug)
    _raise_for_status(response, "generateContent", model=model)
    return _parse_json(response)


def fetch_models(
    auth: AuthConfig,
    page_size: int | None = None,
    *,
    base_url: str = DEFAULT_API_BASE_URL,
    timeout: float | None = None,
    debug: bool = False,
) -> dict[str, Any]:
    """
    GET one page of {base_url}/models.

    Returns:
        The parsed JSON response (``models`` and possibly ``nextPageToken``)

    Raises:
        APIError: On a non-success status or an unparseable body
        NetworkError: If the connection fails
        RequestTimeoutError: If the caller-supplied timeout elapses
    """
    params: dict[str, Any] = {}
    if page_size:
        params["pageSize"] = str(page_size)
    url = f"{base_url.rstrip('/')}/models"
    response = _send("GET", url, auth, params=params, timeout=timeout, debug=debug)
    _raise_for_status(response, "models")
    return _parse_json(response)
