from dataclasses import fields, is_dataclass
from typing import Any, TypeVar

T = TypeVar("T")

class EntityMixin:
    """
    Comportamento comum às entidades.

    Entidades apenas *registram* eventos (`record_event`); quem os publica é a
    camada de aplicação, via `pull_events()` + `EventDispatcher.notify`.
    Campos cujo nome começa com `_` são estado interno e não entram em `to_dict`.
    """

    @classmethod
    def from_dict(cls: type[T], data: dict[str, Any]) -> T:
        """
        Cria uma instância da entidade a partir de um dict.
        """
        return cls(**data)

    def to_dict(self) -> dict[str, Any]:
        """
        Converte a entidade em dict, recursivamente para entidades aninhadas.
        """
        if not is_dataclass(self):
            raise TypeError(f"{type(self).__name__} deve ser um dataclass")
        data: dict[str, Any] = {}
        for f in fields(self):
            if f.name.startswith("_"):
                continue
            value = getattr(self, f.name)
            if isinstance(value, EntityMixin):
                value = value.to_dict()
            elif isinstance(value, list):
                value = [v.to_dict() if isinstance(v, EntityMixin) else v for v in value]
            data[f.name] = value
        return data

    def record_event(self, event) -> None:
        self._events.append(event)

    def pull_events(self) -> list:
        """Devolve os eventos pendentes e limpa a fila."""
        pending = list(self._events)
        self._events.clear()
        return pending
