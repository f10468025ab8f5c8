# web/services/
# ---------------------------------------------------------------------------
# Servis katmanı: backend'e istek yönlendirme.
#
# İçermeli:
#   - Path normalizasyonu, backend URL'i, method'a göre timeout
#   - Dış HTTP çağrısı ve hata sınıflandırma (timeout / bağlantı / diğer)
#
# İçermemeli:
#   - HTTP/route detayları (api/ tarafında)
#   - Finansal hesaplama (is_takip/ tarafında)
# ---------------------------------------------------------------------------
