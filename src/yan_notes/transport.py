"""Authenticated HTTP transport shared by every resource client."""

import json
import re
import urllib.parse
from dataclasses import dataclass
from typing import Any

import requests
from loguru import logger
from requests.structures import CaseInsensitiveDict

from yan_notes.config import (
    API_ROOT,
    DOWNLOADABLE_TYPES,
    FALLBACK_DOWNLOAD_NAME,
    JSON_CONTENT_TYPE,
    LOGIN_PATH,
    REQUEST_TIMEOUT,
    TENANT_HEADER,
    resolve_base_url,
)
from yan_notes.context import SessionContext
from yan_notes.errors import AuthExpired, DecodeFailure, HttpError, NetworkFailure
from yan_notes.protocols import FileSaverProtocol, HttpSessionProtocol, NavigatorProtocol

_FILENAME_EXT_RE = re.compile(r"filename\*\s*=\s*([^']*)'[^']*'([^;\n]+)", re.IGNORECASE)
_FILENAME_RE = re.compile(r"filename[^;=\n]*=((['\"]).*?\2|[^;\n]*)", re.IGNORECASE)


@dataclass(frozen=True)
class FormPayload:
    """Multipart/form body. The HTTP library writes its own Content-Type."""

    data: dict[str, Any] | None = None
    files: dict[str, Any] | None = None


def is_downloadable(content_type: str) -> bool:
    """Check if a response with this content type should be saved as a file."""
    lowered = content_type.lower()
    return any(t in lowered for t in DOWNLOADABLE_TYPES)


def filename_from_disposition(disposition: str | None) -> str | None:
    """Extract the suggested filename from a Content-Disposition header."""
    if not disposition:
        return None

    ext = _FILENAME_EXT_RE.search(disposition)
    if ext:
        charset = ext.group(1) or "utf-8"
        try:
            return urllib.parse.unquote(ext.group(2).strip().strip("\"'"), encoding=charset) or None
        except LookupError:
            return urllib.parse.unquote(ext.group(2).strip().strip("\"'")) or None

    match = _FILENAME_RE.search(disposition)
    if not match or not match.group(1):
        return None
    filename = match.group(1).replace('"', "").replace("'", "").strip()
    return urllib.parse.unquote(filename) or None


def filename_from_path(path: str) -> str | None:
    """Last segment of the request path, ignoring any query string."""
    segment = urllib.parse.urlsplit(path).path.rstrip("/").split("/")[-1]
    return segment or None


def _is_structured(body: Any) -> bool:
    return hasattr(body, "to_json") or isinstance(body, (dict, list))


def _structured_value(body: Any) -> Any:
    return body.to_json() if hasattr(body, "to_json") else body


class Transport:
    """Send requests to the API, classify responses, recover from auth failure.

    Args:
        context: Credential store read for the auth and tenant headers.
        base_url: Scheme and host of the server. Defaults to YAN_BASE_URL.
        navigator: Used to send the user to the login entry point on 401.
        file_saver: Receives downloadable payloads. Without one they are only returned.
        session: HTTP session; a fresh requests.Session when omitted.
        timeout: Seconds before a request is abandoned.
    """

    def __init__(
        self,
        context: SessionContext,
        *,
        base_url: str | None = None,
        navigator: NavigatorProtocol | None = None,
        file_saver: FileSaverProtocol | None = None,
        session: HttpSessionProtocol | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.context = context
        self.base_url = (base_url if base_url is not None else resolve_base_url()).rstrip("/")
        self.navigator = navigator
        self.file_saver = file_saver
        self.session: HttpSessionProtocol = session if session is not None else requests.Session()
        self.timeout = timeout
        self.last_response_headers: CaseInsensitiveDict = CaseInsensitiveDict()

        self.session.cookies.update(context.cookies)
        self._known_cookies = dict(context.cookies)
        context.on_clear(self.session.cookies.clear)

        logger.debug("Transport ready: {}{}", self.base_url, API_ROOT)

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{API_ROOT}{path}"

    def request(
        self,
        path: str,
        *,
        method: str = "GET",
        headers: dict[str, str] | None = None,
        body: Any = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        """Perform one API call and return its decoded result.

        Args:
            path: Path below the API root, e.g. "/v1/notes/1".
            method: HTTP verb.
            headers: Extra headers. They override the defaults.
            body: A request dataclass, dict or list (serialized as JSON when the
                content type is JSON), raw bytes/str, or a FormPayload.
            params: Query parameters.

        Returns:
            None for 204, parsed JSON, raw text when no content type is sent,
            or bytes for downloadable content.

        Raises:
            NetworkFailure: The request did not complete.
            AuthExpired: HTTP 401. Local session state is cleared first.
            HttpError: Any other non-2xx status.
            DecodeFailure: The body cannot be decoded.
        """
        final_headers = self._build_headers(headers)
        kwargs: dict[str, Any] = {}

        if isinstance(body, FormPayload):
            final_headers.pop("Content-Type", None)
            kwargs["data"] = body.data
            kwargs["files"] = body.files
        elif body is not None:
            kwargs["data"] = self._encode_body(body, final_headers.get("Content-Type"))

        logger.debug("Making request: {} {!r}", method, path)
        try:
            response = self.session.request(
                method,
                self.url_for(path),
                headers=final_headers,
                params=params,
                timeout=self.timeout,
                **kwargs,
            )
        except requests.RequestException as e:
            logger.debug("Request {} {!r} did not complete: {}", method, path, e)
            raise NetworkFailure(method, path, e) from e

        self.last_response_headers = CaseInsensitiveDict(response.headers)
        self._remember_cookies()
        return self._classify(response, path)

    def _build_headers(self, headers: dict[str, str] | None) -> CaseInsensitiveDict:
        final: CaseInsensitiveDict = CaseInsensitiveDict()
        final["Content-Type"] = JSON_CONTENT_TYPE
        tenant = self.context.tenant_code
        if tenant:
            final[TENANT_HEADER] = tenant
        token = self.context.token
        if token:
            final["Authorization"] = token
        final.update(headers or {})
        return final

    def _encode_body(self, body: Any, content_type: str | None) -> Any:
        if _is_structured(body):
            value = _structured_value(body)
            if content_type == JSON_CONTENT_TYPE:
                return json.dumps(value)
            return value
        return body

    def _remember_cookies(self) -> None:
        current = requests.utils.dict_from_cookiejar(self.session.cookies)
        if current != self._known_cookies:
            self.context.cookies = current
            self._known_cookies = current

    def _classify(self, response: Any, path: str) -> Any:
        status = response.status_code
        if not 200 <= status < 300:
            body = response.text
            if status == 401:
                self.handle_auth_failure()
                raise AuthExpired.from_response(status, body)
            raise HttpError.from_response(status, body)

        if status == 204:
            return None

        content_type = response.headers.get("Content-Type")
        if not content_type:
            return response.text

        mime = content_type.split(";", 1)[0].strip().lower()
        if mime == JSON_CONTENT_TYPE:
            try:
                return response.json()
            except ValueError as e:
                raise DecodeFailure(content_type, f"invalid JSON: {e}") from e

        if is_downloadable(content_type):
            payload: bytes = response.content
            filename = (
                filename_from_disposition(response.headers.get("Content-Disposition"))
                or filename_from_path(path)
                or FALLBACK_DOWNLOAD_NAME
            )
            if self.file_saver is not None:
                self.file_saver.save(filename, payload)
                logger.info("Downloaded {} ({} bytes)", filename, len(payload))
            return payload

        raise DecodeFailure(content_type, "unsupported content type")

    def handle_auth_failure(self) -> None:
        """Clear all local session state and send the user to the login page."""
        logger.warning("Authentication expired, clearing local session")
        self.context.clear()
        if self.navigator is not None and self.navigator.current_path != LOGIN_PATH:
            self.navigator.redirect(LOGIN_PATH)
