# web/services/gateway.py
# Backend'e istek yönlendirme: path temizleme, timeout, hata sınıflandırma.
# HTTP/route detayları burada değil (web/api/proxy.py).

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import requests

from web import config

logger = logging.getLogger(__name__)

PATH_ARTIFACT = ":1"
DIAGNOSTIC_PATHS = ("test", "health")
UPDATE_METHODS = ("PUT", "PATCH")

# Backend çağrıları burada çalışır; çağıran taraf toplam süre dolunca beklemeyi bırakır.
_executor = ThreadPoolExecutor(thread_name_prefix="gateway-forward")


class GatewayError(Exception):
    """Backend çağrısı sırasında sınıflandırılamayan hata (500)."""

    status_code = 500
    message = "Proxy error"

    def __init__(self, details: str):
        super().__init__(details)
        self.details = details


class UpstreamTimeoutError(GatewayError):
    """Backend süresinde yanıt vermedi, istek iptal edildi (504)."""

    status_code = 504
    message = "Backend timeout - server çok yavaş yanıt veriyor"


class UpstreamUnavailableError(GatewayError):
    """Backend'e bağlanılamadı (503)."""

    status_code = 503
    message = "Backend sunucuya bağlanılamıyor"


@dataclass(frozen=True)
class BackendResponse:
    status_code: int
    content: bytes
    content_type: Optional[str] = None


def strip_mount(raw_path: str, mount: str = config.PROXY_MOUNT) -> str:
    """Proxy önekini path'in başından siler ('/api/proxy/x' -> '/x')."""
    if mount and raw_path.startswith(mount):
        return raw_path[len(mount):]
    return raw_path


def strip_artifacts(path: str) -> str:
    """
    ':1' artığını her konumda siler: sonda, '/' öncesinde ve '/' sonrasında.
    Sonuçta kalan sondaki '/' da silinir. Tekrar uygulamak sonucu değiştirmez.
    """
    while True:
        cleaned = path.replace(PATH_ARTIFACT + "/", "/").replace("/" + PATH_ARTIFACT, "")
        if cleaned.endswith(PATH_ARTIFACT):
            cleaned = cleaned[: -len(PATH_ARTIFACT)]
        cleaned = cleaned.rstrip("/")
        if cleaned == path:
            return cleaned
        path = cleaned


def normalize_path(raw_path: str, strip_path_artifacts: bool = config.STRIP_PATH_ARTIFACTS) -> str:
    """
    Gelen path'i backend path'ine çevirir.

    '/api/proxy/personnel:1/5:1/' -> 'personnel/5'
    """
    path = strip_mount(raw_path)
    if path.startswith("/"):
        path = path[1:]
    if strip_path_artifacts:
        original = path
        path = strip_artifacts(path)
        if path != original:
            logger.info(":1 artığı temizlendi original_path=%s cleaned_path=%s", original, path)
    return path


def is_diagnostic(path: str) -> bool:
    return path in DIAGNOSTIC_PATHS


def backend_url(path: str, query: str = "") -> str:
    url = f"{config.BACKEND_ORIGIN}/api/{path}"
    if query:
        url = f"{url}?{query}"
    return url


def timeout_for(method: str) -> float:
    """PUT/PATCH için uzun, diğer tüm metodlar için kısa timeout (saniye)."""
    if method.upper() in UPDATE_METHODS:
        return config.UPDATE_TIMEOUT
    return config.DEFAULT_TIMEOUT


def outbound_headers(authorization: Optional[str]) -> dict:
    headers = {
        "Content-Type": "application/json",
        "User-Agent": config.USER_AGENT,
    }
    if authorization:
        headers["Authorization"] = authorization
    return headers


def forward(
    method: str,
    url: str,
    authorization: Optional[str] = None,
    body: Any = None,
) -> BackendResponse:
    """
    İsteği backend'e tek seferde iletir; tekrar denemez.

    GET dışındaki her metodda body JSON olarak gönderilir (boşsa 'null').
    Yanıt gövdesi olduğu gibi (byte byte) döner.

    Timeout toplam süredir: bağlantı, başlıklar ve gövdenin tamamı bu sürede
    gelmezse yanıt kapatılır ve istek iptal edilir.

    Raises:
        UpstreamTimeoutError: Süre aşıldı.
        UpstreamUnavailableError: Bağlantı kurulamadı.
        GatewayError: Diğer tüm hatalar.
    """
    method = method.upper()
    timeout = timeout_for(method)
    data = None if method == "GET" else json.dumps(body)
    logger.info("Proxy request method=%s url=%s timeout=%ss", method, url, timeout)

    opened = []

    def send() -> BackendResponse:
        response = requests.request(
            method,
            url,
            headers=outbound_headers(authorization),
            data=data,
            timeout=timeout,
            stream=True,
        )
        opened.append(response)
        return BackendResponse(
            status_code=response.status_code,
            content=response.content,
            content_type=response.headers.get("Content-Type"),
        )

    future = _executor.submit(send)
    try:
        result = future.result(timeout=timeout)
    except FutureTimeoutError as e:
        for response in opened:
            response.close()
        raise UpstreamTimeoutError(f"Backend {timeout}s içinde yanıtı tamamlamadı") from e
    except requests.Timeout as e:
        raise UpstreamTimeoutError(str(e)) from e
    except requests.ConnectionError as e:
        raise UpstreamUnavailableError(str(e)) from e
    except requests.RequestException as e:
        raise GatewayError(str(e)) from e

    logger.info(
        "Backend response status=%s length=%s url=%s",
        result.status_code,
        len(result.content),
        url,
    )
    return result


def error_backend_url(raw_path: str) -> str:
    """Hata gövdesi için backend adresi: sadece proxy öneki silinir, temizlik yapılmaz."""
    return f"{config.BACKEND_ORIGIN}/api/{strip_mount(raw_path).lstrip('/')}"


def error_payload(error: GatewayError, raw_path: str, timestamp: str) -> Mapping[str, str]:
    return {
        "error": error.message,
        "details": error.details,
        "originalUrl": raw_path,
        "backendUrl": error_backend_url(raw_path),
        "timestamp": timestamp,
    }
