"""
Errores de integracion con los feeds externos.
"""


class FeedError(RuntimeError):
    """Error de integracion con un feed externo."""


class FeedTransportError(FeedError):
    """El feed no respondio o respondio con un status no 2xx."""


class FeedParseError(FeedError):
    """El feed respondio, pero el contenido no tiene la forma esperada."""
