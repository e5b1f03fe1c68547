import logging
import sys

import structlog

from storefront.adapters.config import settings


def configure_logging(level: str | None = None, json_logs: bool | None = None) -> None:
    """
    Liga structlog ao logging da stdlib para os eventos de domínio.

    Sem argumentos, `level` e `json_logs` são lidos de `settings` no momento da
    chamada (LOG_LEVEL / JSON_LOGS), não no import.
    """
    level = (level or settings.LOG_LEVEL).upper()
    json_logs = settings.JSON_LOGS if json_logs is None else json_logs

    # comuns a structlog e aos loggers stdlib
    shared = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    structlog.configure(
        processors=[
            *shared,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=shared)
    )

    # só o logger do pacote: a aplicação hospedeira mantém o root
    pkg_logger = logging.getLogger("storefront")
    pkg_logger.handlers.clear()
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(level)
    pkg_logger.propagate = False
