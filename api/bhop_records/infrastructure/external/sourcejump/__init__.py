"""
Cliente de la API JSON de SourceJump.
"""
