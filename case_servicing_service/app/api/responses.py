# Translates an outcome envelope into an HTTP response
from fastapi import Response
from fastapi.responses import JSONResponse

from case_servicing_service.app.service.exceptions import (
    ConflictException,
    NotFoundException,
    TooManyRequestsException,
    UnexpectedFaultException,
)
from case_servicing_service.app.service.responses import OutcomeEnvelope

# Checked in order; the first kind present in the envelope decides the status.
STATUS_BY_EXCEPTION = (
    (ConflictException, 409),
    (NotFoundException, 204),
    (TooManyRequestsException, 429),
    (UnexpectedFaultException, 500),
)

def status_code_for(envelope: OutcomeEnvelope) -> int:
    if envelope.success:
        return 200
    for exception_type, status_code in STATUS_BY_EXCEPTION:
        if envelope.has_custom_exception(exception_type):
            return status_code
    return 400

def to_http_response(envelope: OutcomeEnvelope) -> Response:
    status_code = status_code_for(envelope)
    if status_code == 204:
        return Response(status_code=204)
    return JSONResponse(status_code=status_code, content=envelope.model_dump(mode="json"))
