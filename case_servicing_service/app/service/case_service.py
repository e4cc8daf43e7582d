# Case domain service: lookups, existence checks and creation over the case repository
import logging
from typing import Any, Dict, Optional

from case_servicing_service.app.models import CaseDB
from case_servicing_service.app.observability import cases_created_counter
from case_servicing_service.app.service.base_service import BaseService, require
from case_servicing_service.app.service.dtos import CaseDto
from case_servicing_service.app.service.enums import CaseStatus, parse_enum
from case_servicing_service.app.service.mappings import to_dto_list, to_entity
from case_servicing_service.app.service.responses import CaseCreateResponse, CaseListResponse, ItemExistsResponse
from case_servicing_service.infrastructure.database.repository import MongoRepository

logger = logging.getLogger(__name__)


def normalise_status(status: str, enum_cls=CaseStatus) -> str:
    """Maps a status given by value, name or label onto its stored value; unknown text is matched verbatim."""
    member = parse_enum(enum_cls, status)
    return member.value if member is not None else status.strip()


class CaseService(BaseService):
    def __init__(self, case_repository: MongoRepository[CaseDB], logger: Optional[logging.Logger] = None, **kwargs):
        super().__init__(logger=logger, **kwargs)
        self.case_repository = case_repository

    async def _find(self, filter: Dict[str, Any]) -> CaseListResponse:
        cases = await self.case_repository.find(filter)
        return CaseListResponse(data=to_dto_list(cases))

    async def get_cases_by_id(self, case_id: str) -> CaseListResponse:
        response = CaseListResponse()
        if not require(response, ("Case Id", case_id)):
            return response
        return await self._find({"id": case_id})

    async def get_cases_by_identification_number(self, identification_number: str) -> CaseListResponse:
        response = CaseListResponse()
        if not require(response, ("Identification number", identification_number)):
            return response
        return await self._find({"identification_number": identification_number})

    async def get_cases_by_identification_number_and_status(self, identification_number: str, status: str) -> CaseListResponse:
        response = CaseListResponse()
        if not require(response, ("Identification number", identification_number), ("Status", status)):
            return response
        return await self._find({"identification_number": identification_number, "status": normalise_status(status)})

    async def get_cases_by_reference_number(self, reference_number: str) -> CaseListResponse:
        response = CaseListResponse()
        if not require(response, ("Reference number", reference_number)):
            return response
        return await self._find({"reference_number": reference_number})

    async def get_cases_by_reference_number_and_status(self, reference_number: str, status: str) -> CaseListResponse:
        response = CaseListResponse()
        if not require(response, ("Reference number", reference_number), ("Status", status)):
            return response
        return await self._find({"reference_number": reference_number, "status": normalise_status(status)})

    async def case_exists_with_id(self, case_id: str) -> ItemExistsResponse:
        response = ItemExistsResponse()
        if require(response, ("Case Id", case_id)):
            response.data = bool(await self.case_repository.find({"id": case_id}))
        return response

    async def case_exists_with_reference_number(self, reference_number: str) -> ItemExistsResponse:
        response = ItemExistsResponse()
        if require(response, ("Reference number", reference_number)):
            response.data = bool(await self.case_repository.find({"reference_number": reference_number}))
        return response

    async def _id_exists(self, case_id: str) -> bool:
        return (await self.case_exists_with_id(case_id)).data

    async def _reference_exists(self, reference_number: str) -> bool:
        return (await self.case_exists_with_reference_number(reference_number)).data

    async def create_case(self, case_dto: Optional[CaseDto]) -> CaseCreateResponse:
        """
        Assigns id, reference number and creation date to ``case_dto`` and persists it.

        The reference number is derived from the case's own channel, so a case
        whose channel is Unknown (or unparseable) is rejected without a write.
        """
        response = CaseCreateResponse()
        if case_dto is None:
            response.add_error_message("Case data is required.")
            return response

        channel = self.channel_for_reference(case_dto.channel, response)
        if channel is None:
            return response
        case_dto.channel = channel.value

        await self.assign_identity(case_dto, channel, self._id_exists, self._reference_exists, "case")

        case = to_entity(case_dto)
        await self.case_repository.add(case)
        cases_created_counter.add(1, {"channel": case.channel})
        self.logger.info(f"Case created with ID: {case.id}, reference number: {case.reference_number}")

        response.data.id = case.id
        response.data.reference_number = case.reference_number
        return response
