# web/schemas/proxy.py
# Proxy'nin kendi ürettiği JSON gövdeleri. Backend yanıtları bu şemalardan geçmez.

from pydantic import BaseModel, Field


class ProxyStatus(BaseModel):
    """GET /api/proxy/test veya /api/proxy/health yanıtı."""

    message: str = "Proxy çalışıyor"
    backendUrl: str = Field(..., description="Backend sağlık kontrolü adresi")
    timestamp: str


class ProxyError(BaseModel):
    """Backend çağrısı başarısız olduğunda dönen gövde (503/504/500)."""

    error: str
    details: str
    originalUrl: str
    backendUrl: str
    timestamp: str


class ServiceHealth(BaseModel):
    status: str = "ok"
    service: str = "gateway"
