# Transaction domain service
import logging
from typing import Any, Dict, Optional

from case_servicing_service.app.models import TransactionDB
from case_servicing_service.app.observability import transactions_created_counter
from case_servicing_service.app.service.base_service import BaseService, require
from case_servicing_service.app.service.case_service import CaseService
from case_servicing_service.app.service.dtos import TransactionDto
from case_servicing_service.app.service.interaction_service import InteractionService
from case_servicing_service.app.service.mappings import to_dto_list, to_entity
from case_servicing_service.app.service.responses import ItemExistsResponse, TransactionCreateResponse, TransactionListResponse
from case_servicing_service.infrastructure.database.repository import MongoRepository

logger = logging.getLogger(__name__)

# Transactions are returned with their type so callers can read name and approval rules.
_INCLUDE = ("transaction_type",)


class TransactionService(BaseService):
    def __init__(
        self,
        transaction_repository: MongoRepository[TransactionDB],
        case_service: CaseService,
        interaction_service: InteractionService,
        logger: Optional[logging.Logger] = None,
        **kwargs,
    ):
        super().__init__(logger=logger, **kwargs)
        self.transaction_repository = transaction_repository
        self.case_service = case_service
        self.interaction_service = interaction_service

    async def _find(self, filter: Dict[str, Any]) -> TransactionListResponse:
        transactions = await self.transaction_repository.find(filter, include=_INCLUDE)
        return TransactionListResponse(data=to_dto_list(transactions))

    async def get_transactions_by_case_id(self, case_id: str) -> TransactionListResponse:
        response = TransactionListResponse()
        if not require(response, ("Case Id", case_id)):
            return response
        return await self._find({"case_id": case_id})

    async def get_transactions_by_interaction_id(self, interaction_id: str) -> TransactionListResponse:
        response = TransactionListResponse()
        if not require(response, ("Interaction Id", interaction_id)):
            return response
        return await self._find({"interaction_id": interaction_id})

    async def get_transactions_by_customer_identification(self, identification_number: str) -> TransactionListResponse:
        response = TransactionListResponse()
        cases = await self.case_service.get_cases_by_identification_number(identification_number)
        response.merge_failures_from(cases)
        if not cases.success:
            return response
        for case in cases.data:
            for_case = await self._find({"case_id": case.id})
            response.data.extend(for_case.data)
        return response

    async def get_transactions_for_interaction_by_customer_identification(
        self, identification_number: str, interaction_id: str
    ) -> TransactionListResponse:
        """Transactions of ``interaction_id``, provided the interaction belongs to one of the customer's cases."""
        response = TransactionListResponse()
        if not require(response, ("Identification number", identification_number), ("Interaction Id", interaction_id)):
            return response

        interactions = await self.interaction_service.get_interactions_by_customer_identification(identification_number)
        response.merge_failures_from(interactions)
        if not interactions.success:
            return response

        for interaction in interactions.data:
            if interaction.id == interaction_id:
                for_interaction = await self._find({"interaction_id": interaction.id})
                response.data.extend(for_interaction.data)
        return response

    async def transaction_exists_with_id(self, transaction_id: str) -> ItemExistsResponse:
        response = ItemExistsResponse()
        if require(response, ("Transaction Id", transaction_id)):
            response.data = bool(await self.transaction_repository.find({"id": transaction_id}))
        return response

    async def transaction_exists_with_reference_number(self, reference_number: str) -> ItemExistsResponse:
        response = ItemExistsResponse()
        if require(response, ("Reference number", reference_number)):
            response.data = bool(await self.transaction_repository.find({"reference_number": reference_number}))
        return response

    async def _id_exists(self, transaction_id: str) -> bool:
        return (await self.transaction_exists_with_id(transaction_id)).data

    async def _reference_exists(self, reference_number: str) -> bool:
        return (await self.transaction_exists_with_reference_number(reference_number)).data

    async def create_transaction(self, transaction_dto: Optional[TransactionDto]) -> TransactionCreateResponse:
        response = TransactionCreateResponse()
        if transaction_dto is None:
            response.add_error_message("Transaction data is required.")
            return response
        if transaction_dto.case is None or not transaction_dto.case.id:
            response.add_error_message("Case is required.")
            return response

        channel = self.channel_for_reference(transaction_dto.case.channel, response)
        if channel is None:
            return response

        await self.assign_identity(transaction_dto, channel, self._id_exists, self._reference_exists, "transaction")

        transaction = to_entity(transaction_dto)
        await self.transaction_repository.add(transaction)
        transactions_created_counter.add(1, {"channel": channel.value, "immediate": transaction.is_immediate})
        self.logger.info(
            f"Transaction created with ID: {transaction.id}, reference number: {transaction.reference_number}, "
            f"case ID: {transaction.case_id}, interaction ID: {transaction.interaction_id or 'N/A'}"
        )

        response.data.id = transaction.id
        response.data.reference_number = transaction.reference_number
        response.data.case_id = transaction_dto.case.id
        response.data.case_reference_number = transaction_dto.case.reference_number
        if transaction_dto.interaction is not None:
            response.data.interaction_id = transaction_dto.interaction.id
            response.data.interaction_reference_number = transaction_dto.interaction.reference_number
        return response
