"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan el buffer y los stubs de test.
- Permite invertir dependencias: el adaptador HTTP depende de abstracciones.
"""
