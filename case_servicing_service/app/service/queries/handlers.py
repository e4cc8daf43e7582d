# Query Handler Implementation. Read-only: every handler delegates to a domain service,
# which rejects blank parameters before touching persistence.
import logging
from typing import Optional

from opentelemetry import trace

from .models import (
    GetCasesByIdentificationNumberAndStatusQuery,
    GetCasesByIdentificationNumberQuery,
    GetCasesByReferenceNumberAndStatusQuery,
    GetCasesByReferenceNumberQuery,
    GetInteractionsByCaseIdQuery,
    GetInteractionsByCaseReferenceNumberQuery,
    GetInteractionsByCustomerIdentificationQuery,
    GetTransactionsByCaseIdQuery,
    GetTransactionsByInteractionIdQuery,
    GetTransactionsByCustomerIdentificationQuery,
    GetTransactionsForInteractionByCustomerIdentificationQuery,
)
from case_servicing_service.app.service.case_service import CaseService
from case_servicing_service.app.service.interaction_service import InteractionService
from case_servicing_service.app.service.responses import CaseListResponse, InteractionListResponse, TransactionListResponse
from case_servicing_service.app.service.transaction_service import TransactionService

logger = logging.getLogger(__name__)


class BaseQueryHandler:
    response_model = CaseListResponse

    def __init__(self, service, logger: Optional[logging.Logger] = None):
        self.service = service
        self.logger = logger or logging.getLogger(__name__)

    async def fetch(self, query):
        raise NotImplementedError

    async def handle(self, query):
        current_span = trace.get_current_span()
        current_span.set_attribute("query.name", type(query).__name__)
        current_span.set_attribute("query.id", query.query_id)

        response = await self.fetch(query)
        current_span.set_attribute("query.result.count", len(response.data))
        if not response.success:
            self.logger.warning(f"{type(query).__name__} {query.query_id} failed: {response.error_messages}")
        return response


# --- Cases ---

class GetCasesByIdentificationNumberQueryHandler(BaseQueryHandler):
    service: CaseService

    async def fetch(self, query: GetCasesByIdentificationNumberQuery) -> CaseListResponse:
        return await self.service.get_cases_by_identification_number(query.identification_number)


class GetCasesByIdentificationNumberAndStatusQueryHandler(BaseQueryHandler):
    service: CaseService

    async def fetch(self, query: GetCasesByIdentificationNumberAndStatusQuery) -> CaseListResponse:
        return await self.service.get_cases_by_identification_number_and_status(query.identification_number, query.status)


class GetCasesByReferenceNumberQueryHandler(BaseQueryHandler):
    service: CaseService

    async def fetch(self, query: GetCasesByReferenceNumberQuery) -> CaseListResponse:
        return await self.service.get_cases_by_reference_number(query.reference_number)


class GetCasesByReferenceNumberAndStatusQueryHandler(BaseQueryHandler):
    service: CaseService

    async def fetch(self, query: GetCasesByReferenceNumberAndStatusQuery) -> CaseListResponse:
        return await self.service.get_cases_by_reference_number_and_status(query.reference_number, query.status)


# --- Interactions ---

class GetInteractionsByCaseIdQueryHandler(BaseQueryHandler):
    response_model = InteractionListResponse
    service: InteractionService

    async def fetch(self, query: GetInteractionsByCaseIdQuery) -> InteractionListResponse:
        return await self.service.get_interactions_by_case_id(query.case_id)


class GetInteractionsByCaseReferenceNumberQueryHandler(BaseQueryHandler):
    response_model = InteractionListResponse
    service: InteractionService

    async def fetch(self, query: GetInteractionsByCaseReferenceNumberQuery) -> InteractionListResponse:
        return await self.service.get_interactions_by_case_reference_number(query.case_reference_number)


class GetInteractionsByCustomerIdentificationQueryHandler(BaseQueryHandler):
    response_model = InteractionListResponse
    service: InteractionService

    async def fetch(self, query: GetInteractionsByCustomerIdentificationQuery) -> InteractionListResponse:
        return await self.service.get_interactions_by_customer_identification(query.identification_number)


# --- Transactions ---

class GetTransactionsByCaseIdQueryHandler(BaseQueryHandler):
    response_model = TransactionListResponse
    service: TransactionService

    async def fetch(self, query: GetTransactionsByCaseIdQuery) -> TransactionListResponse:
        return await self.service.get_transactions_by_case_id(query.case_id)


class GetTransactionsByInteractionIdQueryHandler(BaseQueryHandler):
    response_model = TransactionListResponse
    service: TransactionService

    async def fetch(self, query: GetTransactionsByInteractionIdQuery) -> TransactionListResponse:
        return await self.service.get_transactions_by_interaction_id(query.interaction_id)


class GetTransactionsByCustomerIdentificationQueryHandler(BaseQueryHandler):
    response_model = TransactionListResponse
    service: TransactionService

    async def fetch(self, query: GetTransactionsByCustomerIdentificationQuery) -> TransactionListResponse:
        return await self.service.get_transactions_by_customer_identification(query.identification_number)


class GetTransactionsForInteractionByCustomerIdentificationQueryHandler(BaseQueryHandler):
    response_model = TransactionListResponse
    service: TransactionService

    async def fetch(self, query: GetTransactionsForInteractionByCustomerIdentificationQuery) -> TransactionListResponse:
        return await self.service.get_transactions_for_interaction_by_customer_identification(
            query.identification_number, query.interaction_id
        )
