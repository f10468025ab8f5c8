# web/main.py
# ---------------------------------------------------------------------------
# Gateway servisinin giriş noktası.
#
# İçermeli:
#   - FastAPI uygulama örneği ve logging ayarı
#   - Proxy router'ının /api altına mount edilmesi
#
# İçermemeli:
#   - Finansal hesaplama (is_takip/ tarafında kalmalı)
#   - Backend'e doğrudan istek (services/gateway üzerinden)
# ---------------------------------------------------------------------------

import logging

from fastapi import FastAPI

from web import config
from web.api.proxy import router as proxy_router
from web.schemas.proxy import ServiceHealth

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(title="İş Takip Gateway")

# /api/proxy/{path}: backend API'ye yönlendirme
app.include_router(proxy_router, prefix="/api", tags=["proxy"])


@app.get("/health", response_model=ServiceHealth)
def health():
    """Gateway ayakta mı kontrolü. Backend'e istek atılmaz."""
    return ServiceHealth()
