from decouple import config

# -------------------------------
# Logging
# -------------------------------
LOG_LEVEL = config("LOG_LEVEL", default="INFO").upper()
JSON_LOGS = config("JSON_LOGS", default=False, cast=bool)

# -------------------------------
# Eventos de domínio
# -------------------------------
EVENTS_DEDUPLICATE_HANDLERS     = config("EVENTS_DEDUPLICATE_HANDLERS", default=False, cast=bool)
EVENTS_ISOLATE_HANDLER_FAILURES = config("EVENTS_ISOLATE_HANDLER_FAILURES", default=False, cast=bool)
