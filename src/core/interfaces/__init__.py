"""Interfaces/abstracciones del Core.

Por qué:
- Define capacidades (Protocol) que cumplen objetos externos: streams de
  bytes del caller y el dispatcher HTTP.
- Permite invertir dependencias: el Core depende de abstracciones.
"""
