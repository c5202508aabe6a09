"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2),
  la credencial y el envoltorio de resultados.
- El dominio no conoce HTTP ni CLI: solo conceptos de la API de viajes.
"""
