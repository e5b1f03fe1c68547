from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar

import structlog

from storefront.core.domain.events.events import DomainEvent
from storefront.core.domain.exceptions import HandlerFailure
from storefront.core.domain.services.event_dispatcher import EventDispatcher

# ───────────────────────────────────────────────
# CQRS (lado de escrita) com publicação de eventos
# ───────────────────────────────────────────────

C = TypeVar('C')  # Command type

logger = structlog.get_logger(__name__)

# ───────────────────────────────────────────────
# DTOs
# ───────────────────────────────────────────────
@dataclass(frozen=True)
class CommandDTO:
    """Base para todos comandos de escrita (Create/Update)."""
    pass

# ───────────────────────────────────────────────
# Handlers Protocols
# ───────────────────────────────────────────────
class CommandHandler(Protocol, Generic[C]):
    def handle(self, command: C) -> Any:
        """Processa um comando e aplica mudanças de estado."""
        ...

# ───────────────────────────────────────────────
# Bus com Logging
# ───────────────────────────────────────────────
class CommandBus:
    """Dispatcher de comandos com medição de performance."""
    def __init__(self) -> None:
        self._handlers: dict[type, CommandHandler] = {}

    def register(self, command_type: type[C], handler: CommandHandler[C]) -> None:
        self._handlers[command_type] = handler
        logger.debug("command.handler_registered", command=command_type.__name__)

    def dispatch(self, command: C) -> Any:
        handler = self._handlers.get(type(command))
        if not handler:
            raise ValueError(f"Nenhum handler para comando: {type(command).__name__}")
        start = time.time()
        logger.info("command.executing", command=type(command).__name__)
        result = handler.handle(command)
        elapsed = time.time() - start
        logger.info("command.executed", command=type(command).__name__, duration=f"{elapsed:.3f}s")
        return result


def collect_events(result: Any) -> list[DomainEvent]:
    """
    Extrai os eventos carregados pelo resultado de um comando:
    • um `DomainEvent`;
    • uma entidade com `pull_events()` (a fila da entidade é esvaziada);
    • um iterável de qualquer um dos anteriores.
    """
    if result is None:
        return []
    if isinstance(result, DomainEvent):
        return [result]
    if hasattr(result, "pull_events"):
        return list(result.pull_events())
    if hasattr(result, "__iter__") and not isinstance(result, str | bytes | dict):
        events: list[DomainEvent] = []
        for item in result:
            events.extend(collect_events(item))
        return events
    return []


class CommandBusImpl(CommandBus):
    """
    Após cada comando, publica no `EventDispatcher` os eventos do resultado.

    Com `isolate_failures=True` usa `notify_isolated` (falhas de handlers são
    logadas e acumuladas em `last_failures`); caso contrário a primeira falha
    sobe para quem despachou o comando.

    A fila da entidade é esvaziada antes da publicação. Se um handler falhar
    no modo não-isolado, os eventos ainda não publicados desse comando ficam
    em `undelivered_events` (o evento que falhou não entra: parte dos seus
    handlers já rodou).
    """
    def __init__(self, dispatcher: EventDispatcher, isolate_failures: bool = False):
        super().__init__()
        self.dispatcher = dispatcher
        self.isolate_failures = isolate_failures
        self.last_failures: list[HandlerFailure] = []
        self.undelivered_events: list[DomainEvent] = []

    def dispatch(self, command: Any) -> Any:
        result = super().dispatch(command)

        self.last_failures = []
        self.undelivered_events = []
        events = collect_events(result)
        for idx, evt in enumerate(events):
            if self.isolate_failures:
                self.last_failures.extend(self.dispatcher.notify_isolated(evt))
                continue
            try:
                self.dispatcher.notify(evt)
            except Exception:
                self.undelivered_events = events[idx + 1:]
                raise

        return result
