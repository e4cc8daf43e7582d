# API Router for Interactions
from fastapi import APIRouter, Body, Depends
import logging

from case_servicing_service.app.api.dependencies import DomainServices, get_pipeline, get_services
from case_servicing_service.app.api.responses import to_http_response
from case_servicing_service.app.service.commands.handlers import CreateInteractionCommandHandler
from case_servicing_service.app.service.commands.models import CreateInteractionCommand
from case_servicing_service.app.service.pipeline import RequestPipeline
from case_servicing_service.app.service.queries import handlers as query_handlers
from case_servicing_service.app.service.queries import models as queries

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/interaction", tags=["Interactions"])

@router.post("/create", summary="Create an interaction on an existing case")
async def create_interaction(
    command: CreateInteractionCommand = Body(...),
    services: DomainServices = Depends(get_services),
    pipeline: RequestPipeline = Depends(get_pipeline),
):
    handler = CreateInteractionCommandHandler(services.cases, services.interactions)
    return to_http_response(await pipeline.send(handler, command))

@router.get("/by/case/{case_id}")
async def get_interactions_by_case_id(
    case_id: str,
    services: DomainServices = Depends(get_services),
    pipeline: RequestPipeline = Depends(get_pipeline),
):
    handler = query_handlers.GetInteractionsByCaseIdQueryHandler(services.interactions)
    return to_http_response(await pipeline.send(handler, queries.GetInteractionsByCaseIdQuery(case_id=case_id)))

@router.get("/by/identification/{identification_number}")
async def get_interactions_by_customer_identification(
    identification_number: str,
    services: DomainServices = Depends(get_services),
    pipeline: RequestPipeline = Depends(get_pipeline),
):
    handler = query_handlers.GetInteractionsByCustomerIdentificationQueryHandler(services.interactions)
    query = queries.GetInteractionsByCustomerIdentificationQuery(identification_number=identification_number)
    return to_http_response(await pipeline.send(handler, query))

@router.get("/by/reference/{case_reference_number}")
async def get_interactions_by_case_reference_number(
    case_reference_number: str,
    services: DomainServices = Depends(get_services),
    pipeline: RequestPipeline = Depends(get_pipeline),
):
    handler = query_handlers.GetInteractionsByCaseReferenceNumberQueryHandler(services.interactions)
    query = queries.GetInteractionsByCaseReferenceNumberQuery(case_reference_number=case_reference_number)
    return to_http_response(await pipeline.send(handler, query))
