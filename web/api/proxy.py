# web/api/proxy.py
# /api/proxy/{path}: tarayıcı isteklerini backend API'ye yönlendirir.
# Path temizleme, timeout ve hata sınıflandırma web/services/gateway.py içinde.

import asyncio
import json
import logging
from datetime import datetime, timezone
from functools import partial
from typing import Any

from fastapi import APIRouter, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from web.schemas.proxy import ProxyError, ProxyStatus
from web.services import gateway

logger = logging.getLogger(__name__)

router = APIRouter()

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def _now() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


def _with_headers(response: Response) -> Response:
    """CORS ve cache başlıkları her yanıta, hata yanıtları dahil, eklenir."""
    response.headers.update(CORS_HEADERS)
    response.headers.update(NO_CACHE_HEADERS)
    return response


def _parse_body(raw: bytes) -> Any:
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError as e:
        raise gateway.GatewayError(f"İstek gövdesi geçerli JSON değil: {e!s}") from e


@router.api_route(
    "/proxy/{path:path}",
    methods=PROXY_METHODS,
    summary="İsteği backend API'ye yönlendir",
    response_model=None,
    responses={
        200: {"description": "Backend yanıtı olduğu gibi (veya test/health durumu)"},
        500: {"model": ProxyError, "description": "Sınıflandırılamayan proxy hatası"},
        503: {"model": ProxyError, "description": "Backend'e bağlanılamıyor"},
        504: {"model": ProxyError, "description": "Backend zaman aşımı"},
    },
)
async def proxy(request: Request, path: str = "") -> Response:
    """
    OPTIONS hemen 200 döner. test/health backend'e gitmeden durum döner.
    Diğer istekler {backend}/api/{path} adresine tek seferde iletilir; backend
    status kodu ve gövdesi değiştirilmeden geri gönderilir.
    """
    if request.method == "OPTIONS":
        return _with_headers(Response(status_code=200))

    raw_path = request.url.path
    try:
        clean_path = gateway.normalize_path(raw_path)
        if gateway.is_diagnostic(clean_path):
            status = ProxyStatus(backendUrl=gateway.backend_url("health"), timestamp=_now())
            return _with_headers(JSONResponse(status_code=200, content=jsonable_encoder(status)))

        url = gateway.backend_url(clean_path, request.url.query)
        body = None if request.method == "GET" else _parse_body(await request.body())

        # requests bloklayan bir çağrı; event loop'u tutmasın diye executor'da çalışır.
        loop = asyncio.get_event_loop()
        result = await loop.run_in_executor(
            None,
            partial(
                gateway.forward,
                request.method,
                url,
                authorization=request.headers.get("authorization"),
                body=body,
            ),
        )
        response = Response(
            content=result.content,
            status_code=result.status_code,
            media_type=result.content_type,
        )
        return _with_headers(response)
    except gateway.GatewayError as e:
        logger.error("Proxy error status=%s path=%s method=%s: %s", e.status_code, raw_path, request.method, e.details)
        return _error_response(e, raw_path)
    except Exception as e:
        logger.exception("Unexpected proxy error path=%s method=%s", raw_path, request.method)
        return _error_response(gateway.GatewayError(str(e)), raw_path)


def _error_response(error: gateway.GatewayError, raw_path: str) -> Response:
    payload = ProxyError(**gateway.error_payload(error, raw_path, _now()))
    return _with_headers(JSONResponse(status_code=error.status_code, content=jsonable_encoder(payload)))


router.add_api_route(
    "/proxy",
    proxy,
    methods=PROXY_METHODS,
    include_in_schema=False,
    response_model=None,
)
