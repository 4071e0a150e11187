"""Modelos y errores del dominio.

Por qué:
- Aquí viven las estructuras de datos puras (Pydantic v2) y la jerarquía de
  errores tipados.
- El dominio no conoce HTTP, CLI ni SDKs: solo conceptos del problema.
"""
