# web/api/
# ---------------------------------------------------------------------------
# HTTP API katmanı: proxy route'u, request/response işleme.
#
# İçermeli:
#   - Route tanımları
#   - CORS/cache başlıkları, hata gövdeleri (schemas ile)
#   - Services çağrıları (yönlendirme mantığı burada değil)
#
# İçermemeli:
#   - Path temizleme, timeout, hata sınıflandırma (services'e taşı)
#   - Finansal hesaplama (is_takip/)
# ---------------------------------------------------------------------------
