from collections.abc import Mapping
from types import MappingProxyType

import structlog

from storefront.core.domain.events.events import EventLike, HandlerLike, event_name_of
from storefront.core.domain.exceptions import (
    HandlerFailure,
    InvalidEventNameError,
    InvalidHandlerError,
)

logger = structlog.get_logger(__name__)


def _handler_name(handler: HandlerLike) -> str:
    return getattr(handler, "__name__", handler.__class__.__name__)


def _validate_event_name(event_name: object) -> str:
    if not isinstance(event_name, str) or not event_name or event_name != event_name.strip():
        raise InvalidEventNameError(f"event_name inválido: {event_name!r}")
    return event_name


class EventDispatcher:
    """
    Dispatcher de eventos de domínio (síncrono, em processo).

    • O registro é uma chave `event_name` → lista ordenada de handlers.
    • Uma chave ausente só passa a existir no primeiro `register`;
      `unregister` nunca remove a chave, apenas `unregister_all`.
    • Cada instância tem o seu próprio registro (nada é global).
    • `notify` executa os handlers em ordem de registro e NÃO isola falhas:
      a primeira exceção interrompe o restante e sobe para o chamador.
      Para catch-and-continue use `notify_isolated`.

    Não é thread-safe; acesso concorrente exige sincronização externa.
    """

    def __init__(self, *, deduplicate: bool = False) -> None:
        self._handlers: dict[str, list[HandlerLike]] = {}
        self._deduplicate = deduplicate

    # ─────────────────────────  registro  ────────────────────────── #

    @property
    def event_handlers(self) -> Mapping[str, list[HandlerLike]]:
        return self.get_event_handlers()

    def get_event_handlers(self) -> Mapping[str, list[HandlerLike]]:
        """Visão somente-leitura e *viva* do registro (reflete mutações futuras)."""
        return MappingProxyType(self._handlers)

    def has_handlers(self, event_name: str) -> bool:
        return bool(self._handlers.get(event_name))

    def register(self, event_name: str, handler: HandlerLike) -> None:
        _validate_event_name(event_name)
        if not isinstance(handler, HandlerLike):
            raise InvalidHandlerError(
                f"{type(handler).__name__} não implementa handle(event)"
            )
        handlers = self._handlers.setdefault(event_name, [])
        if self._deduplicate and any(h is handler for h in handlers):
            logger.debug(
                "event.register_skipped_duplicate",
                event_name=event_name,
                handler_name=_handler_name(handler),
            )
            return
        handlers.append(handler)
        logger.debug(
            "event.registered",
            event_name=event_name,
            handler_name=_handler_name(handler),
            listeners=len(handlers),
        )

    def unregister(self, event_name: str, handler: HandlerLike) -> None:
        """
        Remove UMA ocorrência (a mais antiga) de `handler`, comparando por identidade.
        Handler ou chave inexistente: no-op silencioso.
        """
        _validate_event_name(event_name)
        handlers = self._handlers.get(event_name)
        if handlers is None:
            return
        for idx, registered in enumerate(handlers):
            if registered is handler:
                del handlers[idx]
                logger.debug(
                    "event.unregistered",
                    event_name=event_name,
                    handler_name=_handler_name(handler),
                    listeners=len(handlers),
                )
                return

    def unregister_all(self) -> None:
        self._handlers.clear()
        logger.debug("event.unregistered_all")

    # ─────────────────────────  notificação  ────────────────────────── #

    def notify(self, event: EventLike) -> None:
        event_name = event_name_of(event)
        # cópia: handlers que (des)registram durante o fan-out não alteram esta chamada
        handlers = list(self._handlers.get(event_name, ()))
        logger.info("event.dispatch", event_name=event_name, listeners=len(handlers))
        for h in handlers:
            h.handle(event)

    def notify_isolated(self, event: EventLike) -> list[HandlerFailure]:
        """
        Variante catch-and-continue: todos os handlers rodam; falhas são
        logadas e devolvidas, nunca propagadas.
        """
        event_name = event_name_of(event)
        handlers = list(self._handlers.get(event_name, ()))
        logger.info(
            "event.dispatch_isolated",
            event_name=event_name,
            listeners=len(handlers),
        )
        failures: list[HandlerFailure] = []
        for h in handlers:
            try:
                h.handle(event)
            except Exception as e:
                logger.error(
                    "event.handler_error",
                    event_name=event_name,
                    handler_name=_handler_name(h),
                    error=str(e),
                    exc_info=True,
                )
                failures.append(HandlerFailure(handler=h, error=e))
        return failures
