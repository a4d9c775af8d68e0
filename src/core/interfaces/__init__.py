"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: las operaciones de recursos dependen de un
  transporte abstracto, no de httpx.
"""

from core.interfaces.transport import Transport

__all__ = ["Transport"]
