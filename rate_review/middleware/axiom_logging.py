"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Sends one structured event per request to Axiom: method, path, masked
query/body data, status code, redirect target and error reason.

가입 확인 링크(/auth/callback?token=...)의 토큰, 비밀번호, JWT 등 민감
값은 전송 전에 마스킹된다. (Confirmation tokens, passwords and JWTs are
masked before anything leaves the process.)

Axiom 전송 실패는 요청을 깨뜨리지 않고 표준 logging 경고로만 남긴다.
(A failed ingest never fails the request; it is reported as a warning on
this module's stdlib logger instead of being dropped silently.)
"""

import json
import logging
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from rate_review.config import settings

logger = logging.getLogger(__name__)

# 마스킹 대상 키 — Keys whose values are masked in logged data
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|api_key|apikey|credential)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

_MAX_BODY_LENGTH: int = 2000
_MAX_ERROR_LENGTH: int = 500


def mask_sensitive(data: Any, depth: int = 0) -> Any:
    """민감 필드 재귀 마스킹 — Recursively mask sensitive keys in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(str(k)) else mask_sensitive(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [mask_sensitive(item, depth + 1) for item in data[:20]]
    if isinstance(data, str) and len(data) > _MAX_BODY_LENGTH:
        return data[:_MAX_BODY_LENGTH] + "...(truncated)"
    return data


def extract_error_detail(body: bytes) -> Any:
    """에러 응답 본문에서 사유 추출.

    Pull ``detail`` out of a FastAPI error body. Field validation errors keep
    their ``{field: message}`` mapping.
    """
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return body.decode("utf-8", errors="replace")[:_MAX_ERROR_LENGTH]

    detail = data.get("detail", data) if isinstance(data, dict) else data
    if isinstance(detail, str) and len(detail) > _MAX_ERROR_LENGTH:
        return detail[:_MAX_ERROR_LENGTH] + "..."
    return detail


async def read_request_body(request: Request) -> Any:
    """JSON 요청 본문을 마스킹해서 반환 — None when there is no body."""
    if request.method not in ("POST", "PUT", "PATCH"):
        return None
    body_bytes: bytes = await request.body()
    if not body_bytes:
        return None
    try:
        return mask_sensitive(json.loads(body_bytes))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return "(non-json body)"


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Axiom 토큰/데이터셋이 설정되지 않으면 아무 것도 하지 않는다.
    (Pass-through when Axiom is not configured.)
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _SKIP_PATHS or self._client is None:
            return await call_next(request)

        start_time: float = time.time()
        log_event: dict[str, Any] = {
            "method": request.method,
            "path": request.url.path,
            "status_code": 500,
        }
        if request.query_params:
            log_event["query_params"] = mask_sensitive(dict(request.query_params))

        request_body: Any = await read_request_body(request)
        if request_body is not None:
            log_event["request_body"] = request_body

        try:
            response: Response = await call_next(request)
            log_event["status_code"] = response.status_code

            # 리다이렉트 대상 경로 — Where the confirmation callback sent the browser
            location: str | None = response.headers.get("location")
            if location:
                log_event["redirect_to"] = location

            if response.status_code >= 400:
                resp_body: bytes = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                log_event["error"] = extract_error_detail(resp_body)

                # 소비한 body로 응답 재구성, Set-Cookie 포함 원본 헤더 유지
                # Rebuild the consumed response, keeping raw headers (incl. Set-Cookie)
                rebuilt: Response = Response(
                    content=resp_body,
                    status_code=response.status_code,
                    media_type=response.media_type,
                    background=response.background,
                )
                rebuilt.raw_headers = response.raw_headers
                response = rebuilt
        except Exception as exc:
            log_event["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            log_event["duration_ms"] = round((time.time() - start_time) * 1000, 2)
            self._ingest(log_event)

        return response

    def _ingest(self, log_event: dict[str, Any]) -> None:
        # 로깅 실패는 요청 처리에 영향 없음 — A failed ingest never fails the request
        try:
            self._client.ingest_events(self._dataset, [log_event])
        except Exception as exc:
            logger.warning("Axiom ingest failed: %s", exc)
