"""
Трассировка запросов к /todos и /labels.

На каждый запрос пишется одна строка "Request completed" (method, path,
status, duration_ms) или "Request failed" с traceback. Тот же request_id
стоит на логах репозиториев ("Todo created", "Label deleted", "Transaction
rolled back"), так что по нему видно, что сделал с базой конкретный запрос.
"""

import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.logging import generate_request_id, get_logger, request_id_var

logger = get_logger("api.requests")

REQUEST_ID_HEADER = "X-Request-ID"

# Документация API - без логов
_QUIET_PATHS = frozenset({"/docs", "/redoc", "/openapi.json"})


def _request_fields(request: Request, started: float) -> dict:
    return {
        "method": request.method,
        "path": request.url.path,
        "duration_ms": int((time.perf_counter() - started) * 1000),
    }


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Выдаёт запросу request_id и логирует его результат.

    Если клиент (SPA) прислал X-Request-ID, используется он, иначе
    генерируется новый. В ответ id возвращается в том же заголовке,
    в том числе для 404/400/500 от repository_error_handler.

    4xx и 5xx пишутся с уровнем WARNING, остальное - INFO.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
        token = request_id_var.set(request_id)
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed", extra={**_request_fields(request, started), "error": str(e)}, exc_info=True
            )
            request_id_var.reset(token)
            raise

        response.headers[REQUEST_ID_HEADER] = request_id

        if request.url.path not in _QUIET_PATHS:
            level = logger.info if response.status_code < 400 else logger.warning
            level(
                "Request completed",
                extra={**_request_fields(request, started), "status": response.status_code},
            )

        request_id_var.reset(token)
        return response
