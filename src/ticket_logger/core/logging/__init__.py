# ticket_logger/core/logging/
# ├─ builder.py      make_dict_config(settings), setup_logging(settings), stop_queue_logging()
# ├─ formatters.py   JsonFormatter, ColorFormatter
# ├─ filters.py      RequestIdFilter, RedactFilter (+ contextvar helpers)
# ├─ handlers.py     handler config factories
# └─ middleware.py   RequestIDMiddleware

from .builder import make_dict_config, setup_logging, stop_queue_logging
from .filters import RequestIdFilter, RedactFilter, get_request_id, set_request_id
from .middleware import RequestIDMiddleware

__all__ = [
    "setup_logging",
    "make_dict_config",
    "stop_queue_logging",
    "set_request_id",
    "get_request_id",
    "RequestIdFilter",
    "RedactFilter",
    "RequestIDMiddleware",
]
