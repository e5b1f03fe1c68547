from __future__ import annotations

import copy
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from types import MappingProxyType
from typing import Any, ClassVar, Protocol, runtime_checkable

from storefront.core.domain.exceptions import InvalidEventNameError


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _freeze(value: Any) -> Any:
    """Congela recursivamente: dict → MappingProxyType, list/tuple → tuple, set → frozenset."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, list | tuple):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, set | frozenset):
        return frozenset(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


# ───────────────────────────────────────────────
# Contratos (duck typing)
# ───────────────────────────────────────────────
@runtime_checkable
class EventLike(Protocol):
    """Qualquer objeto com chave estável (`event_name`) e `payload` serve como evento."""
    event_name: ClassVar[str]

    @property
    def payload(self) -> Mapping[str, Any]: ...


@runtime_checkable
class HandlerLike(Protocol):
    """Qualquer objeto com `handle(event)` serve como handler."""
    def handle(self, event: EventLike) -> None: ...


def event_name_of(event: object) -> str:
    """
    Retorna a chave de registro do evento.

    A chave é sempre declarada pela própria classe do evento (`event_name`);
    o nome da classe nunca é usado como fallback.
    """
    name = getattr(event, "event_name", None)
    if not isinstance(name, str) or not name or name != name.strip():
        raise InvalidEventNameError(
            f"{type(event).__name__} não declara um event_name válido: {name!r}"
        )
    return name


# ───────────────────────────────────────────────
# Event Base
# ───────────────────────────────────────────────
@dataclass(frozen=True, eq=False)
class DomainEvent:
    """
    Fato imutável do domínio.

    • `payload` é copiado (deepcopy) e congelado em todos os níveis.
    • Igualdade e hash por identidade: cada evento é um fato único.
    • `occurred_at` é carimbado uma única vez, na criação; não aceita valor do chamador.
    """
    event_name: ClassVar[str] = ""

    payload: Mapping[str, Any] = field(default_factory=dict)
    event_id: uuid.UUID = field(default_factory=uuid.uuid4, init=False)
    occurred_at: datetime = field(default_factory=_utcnow, init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "payload", _freeze(copy.deepcopy(dict(self.payload))))

    def to_dict(self) -> dict[str, Any]:
        return {
            "event_name": self.event_name,
            "event_id": str(self.event_id),
            "occurred_at": self.occurred_at.isoformat(),
            "payload": _thaw(self.payload),
        }


# ╭──────────────────────────────────────────────╮
# │ 1. Clientes                                 │
# ╰──────────────────────────────────────────────╯
@dataclass(frozen=True, eq=False)
class CustomerCreatedEvent(DomainEvent):
    event_name: ClassVar[str] = "CustomerCreatedEvent"


@dataclass(frozen=True, eq=False)
class CustomerAddressChangedEvent(DomainEvent):
    event_name: ClassVar[str] = "CustomerAddressChangedEvent"

# ╭──────────────────────────────────────────────╮
# │ 2. Produtos                                 │
# ╰──────────────────────────────────────────────╯
@dataclass(frozen=True, eq=False)
class ProductCreatedEvent(DomainEvent):
    event_name: ClassVar[str] = "ProductCreatedEvent"


@dataclass(frozen=True, eq=False)
class ProductPriceChangedEvent(DomainEvent):
    event_name: ClassVar[str] = "ProductPriceChangedEvent"

# ╭──────────────────────────────────────────────╮
# │ 3. Pedidos                                  │
# ╰──────────────────────────────────────────────╯
@dataclass(frozen=True, eq=False)
class OrderPlacedEvent(DomainEvent):
    event_name: ClassVar[str] = "OrderPlacedEvent"
