# web/config.py
# Gateway ayarları. Hepsi ortam değişkeninden okunur, yoksa varsayılan kullanılır.

import os


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name)
    if not value:
        return default
    return float(value)


# Backend API kökü; istekler {BACKEND_ORIGIN}/api/{path} adresine gider.
BACKEND_ORIGIN = os.environ.get(
    "IS_TAKIP_BACKEND_URL", "https://is-takip-backend-dxud.onrender.com"
).rstrip("/")

# Proxy'nin bağlandığı yol; gelen path'ten bu önek silinir.
PROXY_MOUNT = os.environ.get("IS_TAKIP_PROXY_MOUNT", "/api/proxy").rstrip("/")

# Barındırma platformunun path sonlarına eklediği ":1" artığını temizle.
STRIP_PATH_ARTIFACTS = _env_bool("IS_TAKIP_STRIP_PATH_ARTIFACTS", True)

# PUT/PATCH backend'de daha yavaş; onlara daha uzun süre tanınır (saniye).
UPDATE_TIMEOUT = _env_float("IS_TAKIP_UPDATE_TIMEOUT", 60.0)
DEFAULT_TIMEOUT = _env_float("IS_TAKIP_DEFAULT_TIMEOUT", 45.0)

USER_AGENT = "IsTakip-Frontend/1.0"

LOG_LEVEL = os.environ.get("IS_TAKIP_LOG_LEVEL", "INFO").upper()
