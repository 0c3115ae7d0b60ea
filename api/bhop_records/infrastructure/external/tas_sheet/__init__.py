"""
Cliente de la hoja de tiempos TAS (CSV exportado de Google Sheets).
"""
