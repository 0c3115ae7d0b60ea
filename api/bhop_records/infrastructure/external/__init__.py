"""
Clientes de los feeds externos (solo lectura).

- sourcejump: API JSON de records.
- fastdl: tabla HTML de hashes de descarga.
- tas_sheet: hoja de Google publicada como CSV.

Ninguno toca la base de datos; los errores se reportan como FeedError.
"""
