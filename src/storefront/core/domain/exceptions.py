from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class DomainError(Exception):
    """Classe base para todas as exceções do domínio storefront."""
    pass

class InvalidEventNameError(DomainError, ValueError):
    """
    Chave de evento vazia, não-string ou com espaços nas pontas.
    Erro de programação do chamador: nunca é silenciado.
    """
    pass

class InvalidHandlerError(DomainError, TypeError):
    """Handler sem a operação `handle(event)`; rejeitado já no `register`."""
    pass

class EntityValidationError(DomainError, ValueError):
    """Entidade construída ou alterada com dados inválidos."""
    pass


@dataclass(slots=True, frozen=True)
class HandlerFailure:
    """Falha de um handler coletada por `EventDispatcher.notify_isolated`."""
    handler: Any
    error: Exception

    @property
    def handler_name(self) -> str:
        return getattr(self.handler, "__name__", self.handler.__class__.__name__)
