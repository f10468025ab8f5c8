# web/schemas/
# ---------------------------------------------------------------------------
# Veri şemaları: gateway yanıt modelleri.
#
# İçermeli:
#   - Pydantic response modelleri (teşhis ve hata gövdeleri)
#
# İçermemeli:
#   - Backend'e iletilen gövdeler (olduğu gibi geçer, doğrulanmaz)
#   - İş mantığı veya API route'ları
# ---------------------------------------------------------------------------

from web.schemas.proxy import ProxyError, ProxyStatus, ServiceHealth

__all__ = ["ProxyStatus", "ProxyError", "ServiceHealth"]
