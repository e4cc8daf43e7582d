# API Router for Transactions
from fastapi import APIRouter, Body, Depends
import logging

from case_servicing_service.app.api.dependencies import DomainServices, get_pipeline, get_services
from case_servicing_service.app.api.responses import to_http_response
from case_servicing_service.app.service.commands.handlers import CreateTransactionCommandHandler
from case_servicing_service.app.service.commands.models import CreateTransactionCommand
from case_servicing_service.app.service.pipeline import RequestPipeline
from case_servicing_service.app.service.queries import handlers as query_handlers
from case_servicing_service.app.service.queries import models as queries

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/transaction", tags=["Transactions"])

@router.post("/create", summary="Create a transaction on an existing case")
async def create_transaction(
    command: CreateTransactionCommand = Body(...),
    services: DomainServices = Depends(get_services),
    pipeline: RequestPipeline = Depends(get_pipeline),
):
    handler = CreateTransactionCommandHandler(
        services.cases, services.interactions, services.transactions, services.transaction_types
    )
    return to_http_response(await pipeline.send(handler, command))

@router.get("/by/case/{case_id}")
async def get_transactions_by_case_id(
    case_id: str,
    services: DomainServices = Depends(get_services),
    pipeline: RequestPipeline = Depends(get_pipeline),
):
    handler = query_handlers.GetTransactionsByCaseIdQueryHandler(services.transactions)
    return to_http_response(await pipeline.send(handler, queries.GetTransactionsByCaseIdQuery(case_id=case_id)))

@router.get("/by/interaction/{interaction_id}")
async def get_transactions_by_interaction_id(
    interaction_id: str,
    services: DomainServices = Depends(get_services),
    pipeline: RequestPipeline = Depends(get_pipeline),
):
    handler = query_handlers.GetTransactionsByInteractionIdQueryHandler(services.transactions)
    return to_http_response(await pipeline.send(handler, queries.GetTransactionsByInteractionIdQuery(interaction_id=interaction_id)))

@router.get("/by/identification/{identification_number}")
async def get_transactions_by_customer_identification(
    identification_number: str,
    services: DomainServices = Depends(get_services),
    pipeline: RequestPipeline = Depends(get_pipeline),
):
    handler = query_handlers.GetTransactionsByCustomerIdentificationQueryHandler(services.transactions)
    query = queries.GetTransactionsByCustomerIdentificationQuery(identification_number=identification_number)
    return to_http_response(await pipeline.send(handler, query))

@router.get("/by/identification/{identification_number}/interaction/{interaction_id}")
async def get_transactions_for_interaction_by_customer_identification(
    identification_number: str,
    interaction_id: str,
    services: DomainServices = Depends(get_services),
    pipeline: RequestPipeline = Depends(get_pipeline),
):
    handler = query_handlers.GetTransactionsForInteractionByCustomerIdentificationQueryHandler(services.transactions)
    query = queries.GetTransactionsForInteractionByCustomerIdentificationQuery(
        identification_number=identification_number, interaction_id=interaction_id
    )
    return to_http_response(await pipeline.send(handler, query))
