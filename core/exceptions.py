"""
ContentEngine - Excepciones del motor.

Solo las degradaciones previstas (proveedor SEO caído, historial vacío,
divisiones entre cero) se absorben dentro del motor. Todo lo demás se
propaga como una de estas excepciones o como el error original.
"""
from typing import Optional


class ContentEngineError(Exception):
    """Excepción base de ContentEngine."""


class SEOProviderError(ContentEngineError):
    """
    Fallo del proveedor SEO externo: timeout, error de transporte,
    respuesta no-2xx o JSON malformado. Siempre es recuperable.
    """

    def __init__(self, message: str, provider: str = "", cause: Optional[Exception] = None):
        super().__init__(message)
        self.provider = provider
        if cause is not None:
            self.__cause__ = cause


class InvalidStatusTransition(ContentEngineError):
    """Intento de mover un ContentItem hacia atrás o saltándose un estado."""

    def __init__(self, current: str, target: str):
        super().__init__(f"Transición inválida: {current} → {target}")
        self.current = current
        self.target = target
