from storefront.core.domain.services.event_dispatcher import EventDispatcher

__all__ = ["EventDispatcher"]
