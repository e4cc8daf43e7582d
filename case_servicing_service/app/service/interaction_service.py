# Interaction domain service
import logging
from typing import Any, Dict, Optional

from case_servicing_service.app.models import InteractionDB
from case_servicing_service.app.observability import interactions_created_counter
from case_servicing_service.app.service.base_service import BaseService, require
from case_servicing_service.app.service.case_service import CaseService
from case_servicing_service.app.service.dtos import InteractionDto
from case_servicing_service.app.service.mappings import to_dto_list, to_entity
from case_servicing_service.app.service.responses import (
    CaseListResponse,
    InteractionCreateResponse,
    InteractionListResponse,
    ItemExistsResponse,
)
from case_servicing_service.infrastructure.database.repository import MongoRepository

logger = logging.getLogger(__name__)


class InteractionService(BaseService):
    def __init__(
        self,
        interaction_repository: MongoRepository[InteractionDB],
        case_service: CaseService,
        logger: Optional[logging.Logger] = None,
        **kwargs,
    ):
        super().__init__(logger=logger, **kwargs)
        self.interaction_repository = interaction_repository
        self.case_service = case_service

    async def _find(self, filter: Dict[str, Any]) -> InteractionListResponse:
        interactions = await self.interaction_repository.find(filter)
        return InteractionListResponse(data=to_dto_list(interactions))

    async def get_interactions_by_id(self, interaction_id: str) -> InteractionListResponse:
        response = InteractionListResponse()
        if not require(response, ("Interaction Id", interaction_id)):
            return response
        return await self._find({"id": interaction_id})

    async def get_interactions_by_case_id(self, case_id: str) -> InteractionListResponse:
        response = InteractionListResponse()
        if not require(response, ("Case Id", case_id)):
            return response
        return await self._find({"case_id": case_id})

    async def _interactions_for_cases(self, cases: CaseListResponse) -> InteractionListResponse:
        response = InteractionListResponse()
        response.merge_failures_from(cases)
        if not cases.success:
            return response
        for case in cases.data:
            for_case = await self._find({"case_id": case.id})
            response.data.extend(for_case.data)
        return response

    async def get_interactions_by_customer_identification(self, identification_number: str) -> InteractionListResponse:
        """Interactions across every case held by the customer, in case order."""
        cases = await self.case_service.get_cases_by_identification_number(identification_number)
        return await self._interactions_for_cases(cases)

    async def get_interactions_by_case_reference_number(self, case_reference_number: str) -> InteractionListResponse:
        cases = await self.case_service.get_cases_by_reference_number(case_reference_number)
        return await self._interactions_for_cases(cases)

    async def interaction_exists_with_id(self, interaction_id: str) -> ItemExistsResponse:
        response = ItemExistsResponse()
        if require(response, ("Interaction Id", interaction_id)):
            response.data = bool(await self.interaction_repository.find({"id": interaction_id}))
        return response

    async def interaction_exists_with_reference_number(self, reference_number: str) -> ItemExistsResponse:
        response = ItemExistsResponse()
        if require(response, ("Reference number", reference_number)):
            response.data = bool(await self.interaction_repository.find({"reference_number": reference_number}))
        return response

    async def interaction_exists_on_case(self, interaction_id: str, case_id: str) -> ItemExistsResponse:
        response = ItemExistsResponse()
        if require(response, ("Interaction Id", interaction_id), ("Case Id", case_id)):
            response.data = bool(await self.interaction_repository.find({"id": interaction_id, "case_id": case_id}))
        return response

    async def _id_exists(self, interaction_id: str) -> bool:
        return (await self.interaction_exists_with_id(interaction_id)).data

    async def _reference_exists(self, reference_number: str) -> bool:
        return (await self.interaction_exists_with_reference_number(reference_number)).data

    async def create_interaction(self, interaction_dto: Optional[InteractionDto]) -> InteractionCreateResponse:
        response = InteractionCreateResponse()
        if interaction_dto is None:
            response.add_error_message("Interaction data is required.")
            return response
        if interaction_dto.case is None or not interaction_dto.case.id:
            response.add_error_message("Case is required.")
            return response

        # Interactions take their reference prefix from the owning case's channel.
        channel = self.channel_for_reference(interaction_dto.case.channel, response)
        if channel is None:
            return response

        await self.assign_identity(interaction_dto, channel, self._id_exists, self._reference_exists, "interaction")

        interaction = to_entity(interaction_dto)
        await self.interaction_repository.add(interaction)
        interactions_created_counter.add(1, {"channel": channel.value})
        self.logger.info(
            f"Interaction created with ID: {interaction.id}, reference number: {interaction.reference_number}, case ID: {interaction.case_id}"
        )

        response.data.id = interaction.id
        response.data.reference_number = interaction.reference_number
        response.data.case_id = interaction_dto.case.id
        response.data.case_reference_number = interaction_dto.case.reference_number
        return response
