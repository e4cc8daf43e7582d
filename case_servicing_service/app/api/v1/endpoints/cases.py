# API Router for Cases
from fastapi import APIRouter, Depends, Header
import logging

from case_servicing_service.app.api.dependencies import DomainServices, get_pipeline, get_services
from case_servicing_service.app.api.responses import to_http_response
from case_servicing_service.app.service.commands.handlers import CreateCaseCommandHandler, CreateShellCaseCommandHandler
from case_servicing_service.app.service.commands.models import CreateCaseCommand, CreateShellCaseCommand
from case_servicing_service.app.service.enums import CaseChannel, parse_enum
from case_servicing_service.app.service.pipeline import RequestPipeline
from case_servicing_service.app.service.queries import handlers as query_handlers
from case_servicing_service.app.service.queries import models as queries

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/case", tags=["Cases"])

def _channel(source_system: str) -> CaseChannel:
    # Unparseable sources fall back to Unknown, which command validation rejects.
    return parse_enum(CaseChannel, source_system, CaseChannel.UNKNOWN)

@router.get("/by/identification/{identification_number}")
async def get_cases_by_identification_number(
    identification_number: str,
    services: DomainServices = Depends(get_services),
    pipeline: RequestPipeline = Depends(get_pipeline),
):
    handler = query_handlers.GetCasesByIdentificationNumberQueryHandler(services.cases)
    query = queries.GetCasesByIdentificationNumberQuery(identification_number=identification_number)
    return to_http_response(await pipeline.send(handler, query))

@router.get("/by/identification/{identification_number}/status/{status}")
async def get_cases_by_identification_number_and_status(
    identification_number: str,
    status: str,
    services: DomainServices = Depends(get_services),
    pipeline: RequestPipeline = Depends(get_pipeline),
):
    handler = query_handlers.GetCasesByIdentificationNumberAndStatusQueryHandler(services.cases)
    query = queries.GetCasesByIdentificationNumberAndStatusQuery(identification_number=identification_number, status=status)
    return to_http_response(await pipeline.send(handler, query))

@router.get("/by/reference/{reference_number}")
async def get_cases_by_reference_number(
    reference_number: str,
    services: DomainServices = Depends(get_services),
    pipeline: RequestPipeline = Depends(get_pipeline),
):
    handler = query_handlers.GetCasesByReferenceNumberQueryHandler(services.cases)
    query = queries.GetCasesByReferenceNumberQuery(reference_number=reference_number)
    return to_http_response(await pipeline.send(handler, query))

@router.get("/by/reference/{reference_number}/status/{status}")
async def get_cases_by_reference_number_and_status(
    reference_number: str,
    status: str,
    services: DomainServices = Depends(get_services),
    pipeline: RequestPipeline = Depends(get_pipeline),
):
    handler = query_handlers.GetCasesByReferenceNumberAndStatusQueryHandler(services.cases)
    query = queries.GetCasesByReferenceNumberAndStatusQuery(reference_number=reference_number, status=status)
    return to_http_response(await pipeline.send(handler, query))

@router.post("/create", summary="Create a case for an identified customer")
async def create_case(
    source_system: str = Header("", alias="X-Source-System"),
    customer_id: str = Header("", alias="X-Customer-Id"),
    services: DomainServices = Depends(get_services),
    pipeline: RequestPipeline = Depends(get_pipeline),
):
    command = CreateCaseCommand(source_channel=_channel(source_system), identification_number=customer_id)
    logger.info(f"Create case requested from source system '{source_system}'")
    return to_http_response(await pipeline.send(CreateCaseCommandHandler(services.cases), command))

@router.post("/create/shell", summary="Create a case before the customer is identified")
async def create_shell_case(
    source_system: str = Header("", alias="X-Source-System"),
    services: DomainServices = Depends(get_services),
    pipeline: RequestPipeline = Depends(get_pipeline),
):
    command = CreateShellCaseCommand(source_channel=_channel(source_system))
    logger.info(f"Create shell case requested from source system '{source_system}'")
    return to_http_response(await pipeline.send(CreateShellCaseCommandHandler(services.cases), command))
