"""
Middleware di logging delle richieste sulle risorse fiscali.

Ogni riga di log porta il contesto della risorsa indirizzata (fattura o
cliente) e l'operazione richiesta, così le emissioni, le rettifiche e gli
export XML sono ricostruibili per singola fattura.
"""
import logging
import re
import time
import traceback
from typing import Callable, Dict
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
INVOICE_ID_HEADER = "X-Invoice-ID"

_RESOURCE_PATH = re.compile(
    r"^/api/v1/(?P<resource>invoices|clients)/(?P<id>[0-9a-fA-F-]{36})(?:/(?P<action>[a-z-]+))?/?$"
)

# operazioni che producono o modificano documenti fiscali
FISCAL_ACTIONS = frozenset({"issue", "transition", "credit-notes", "debit-notes", "xml"})


def resource_context(path: str) -> Dict[str, str]:
    """Estrae dal path l'id della fattura o del cliente e l'eventuale azione"""
    match = _RESOURCE_PATH.match(path)
    if match is None:
        return {}
    key = "invoice_id" if match.group("resource") == "invoices" else "client_id"
    context = {key: match.group("id").lower()}
    if match.group("action"):
        context["action"] = match.group("action")
    return context


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    """Logging di richieste, errori e richieste lente con il contesto della fattura"""

    def __init__(self, app, log_requests: bool = True, slow_request_threshold: float = 1.0):
        super().__init__(app)
        self.log_requests = log_requests
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        path = request.url.path
        extra = {"request_id": request_id, "method": request.method, "path": path, **resource_context(path)}

        if self.log_requests:
            logger.info(f"Request started: {request.method} {path}", extra=extra)

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"Request failed: {request.method} {path} - {type(exc).__name__}: {exc}",
                extra={
                    **extra,
                    "error_type": type(exc).__name__,
                    "process_time": time.perf_counter() - start_time,
                    "traceback": traceback.format_exc(),
                }
            )
            raise

        process_time = time.perf_counter() - start_time
        extra = {**extra, "status_code": response.status_code, "process_time": process_time}

        if "invoice_id" in extra and extra.get("action") in FISCAL_ACTIONS:
            # traccia delle operazioni fiscali, anche quando rifiutate
            level = logging.INFO if response.status_code < 400 else logging.WARNING
            logger.log(
                level,
                f"Fattura {extra['invoice_id']}: {extra['action']} -> {response.status_code}",
                extra=extra
            )
        elif response.status_code >= 500:
            logger.error(f"Request error: {request.method} {path} - {response.status_code}", extra=extra)

        if process_time > self.slow_request_threshold:
            logger.warning(f"Slow request detected: {request.method} {path}", extra=extra)

        response.headers["X-Process-Time"] = str(process_time)
        response.headers[REQUEST_ID_HEADER] = request_id
        if "invoice_id" in extra:
            response.headers[INVOICE_ID_HEADER] = extra["invoice_id"]
        return response
