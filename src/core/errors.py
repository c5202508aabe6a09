"""Excepciones del cliente.

Solo los fallos de transporte (DNS, conexión, TLS, timeouts) se lanzan;
el resto de resultados viaja dentro del `Envelope`.
"""

from __future__ import annotations


class TransportFault(Exception):
    """La petición no llegó a producir una respuesta HTTP."""

    def __init__(self, method: str, url: str, reason: str) -> None:
        super().__init__(f"{method} {url} failed: {reason}")
        self.method = method
        self.url = url
        self.reason = reason
