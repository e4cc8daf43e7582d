"""
The outermost request boundary.

Every command and query is sent through ``RequestPipeline.send``. Business
failures arrive already wrapped in an outcome envelope and pass through
untouched. Anything a handler raises is logged here, link by link along the
exception chain, and converted into the handler's own response type carrying
a generic message and an ``UnexpectedFaultException``.
"""
import logging
import time
import uuid
from typing import Iterator, Optional

from opentelemetry.trace import Status, StatusCode

from case_servicing_service.app.config import AppSettings, settings
from case_servicing_service.app.observability import request_failures_counter, request_latency_histogram, tracer
from case_servicing_service.app.service.exceptions import UnexpectedFaultException
from case_servicing_service.app.service.responses import OutcomeEnvelope

logger = logging.getLogger(__name__)


def iter_exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yields ``exc`` followed by each exception it was raised from or during, without revisiting any."""
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


class RequestPipeline:
    def __init__(self, app_settings: Optional[AppSettings] = None, logger: Optional[logging.Logger] = None):
        self.settings = app_settings or settings
        self.logger = logger or logging.getLogger(__name__)

    async def send(self, handler, request) -> OutcomeEnvelope:
        request_name = type(request).__name__
        request_id = uuid.uuid4()

        self.logger.info(f"Handle {request_name} [{request_id}]")
        if self.settings.is_non_production:
            self.logger.info(f"Handle {request_name} [{request_id}] payload: {request.model_dump_json()}")

        started = time.perf_counter()
        try:
            with tracer.start_as_current_span(f"{request_name}Pipeline", record_exception=False) as span:
                span.set_attribute("request.name", request_name)
                span.set_attribute("request.id", str(request_id))
                try:
                    response = await handler.handle(request)
                except Exception as e:
                    span.record_exception(e)
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    self._log_fault(e, request_name, request_id)
                    response = handler.response_model()
                    message = f"An unexpected error occurred while handling {request_name}."
                    response.add_error_message(message)
                    response.add_custom_exception(UnexpectedFaultException(message))

            if not response.success:
                request_failures_counter.add(1, {"request.name": request_name})
            return response
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            request_latency_histogram.record(elapsed_ms, {"request.name": request_name})
            self.logger.info(f"Handled {request_name} [{request_id}]; Execution time: {int(elapsed_ms)}ms")

    def _log_fault(self, exc: Exception, request_name: str, request_id) -> None:
        for depth, link in enumerate(iter_exception_chain(exc)):
            prefix = "Unhandled" if depth == 0 else "Caused by"
            self.logger.error(
                f"{prefix} {type(link).__name__} while handling {request_name} [{request_id}]: {link}",
                exc_info=link,
            )
