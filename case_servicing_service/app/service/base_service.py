# Shared plumbing for the domain services
import datetime
import logging
from typing import Awaitable, Callable, List, Optional, Tuple

from case_servicing_service.app.config import settings
from case_servicing_service.app.service.dtos import BaseDtoWithReferenceNumberAndStatus
from case_servicing_service.app.service.enums import CaseChannel, parse_enum
from case_servicing_service.app.service.exceptions import ReferenceNumberGenerationError
from case_servicing_service.app.service.identifiers import new_ulid
from case_servicing_service.app.service.reference_numbers import generate_reference_number
from case_servicing_service.app.service.responses import OutcomeEnvelope


ExistsCheck = Callable[[str], Awaitable[bool]]


def is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def require(response: OutcomeEnvelope, *parameters: Tuple[str, Optional[str]]) -> bool:
    """Adds "<Label> is required." for each blank (label, value) pair. Returns True when all are present."""
    missing: List[str] = [f"{label} is required." for label, value in parameters if is_blank(value)]
    if missing:
        response.add_error_messages(missing)
        return False
    return True


class BaseService:
    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        business_segment: Optional[str] = None,
        max_reference_attempts: Optional[int] = None,
    ):
        self.logger = logger or logging.getLogger(type(self).__module__)
        self.business_segment = business_segment or settings.BUSINESS_SEGMENT
        self.max_reference_attempts = max_reference_attempts or settings.REFERENCE_NUMBER_MAX_ATTEMPTS

    def channel_for_reference(self, channel: Optional[str], response: OutcomeEnvelope) -> Optional[CaseChannel]:
        member = parse_enum(CaseChannel, channel, CaseChannel.UNKNOWN)
        if member == CaseChannel.UNKNOWN:
            response.add_error_message(
                f"A known case channel is required to generate a reference number; got '{channel or ''}'."
            )
            return None
        return member

    async def assign_identity(
        self,
        dto: BaseDtoWithReferenceNumberAndStatus,
        channel: CaseChannel,
        id_exists: ExistsCheck,
        reference_exists: ExistsCheck,
        entity_name: str,
    ) -> None:
        """
        Sets ``created_date``, ``id`` and ``reference_number`` on ``dto``.

        Candidates are regenerated while either value already exists in
        persistence. Raises ReferenceNumberGenerationError once
        ``max_reference_attempts`` candidates have collided.
        """
        dto.created_date = datetime.datetime.now(datetime.UTC)
        for attempt in range(1, self.max_reference_attempts + 1):
            dto.id = new_ulid()
            dto.reference_number = generate_reference_number(
                dto.id, channel, self.business_segment, now=dto.created_date
            )
            if not await id_exists(dto.id) and not await reference_exists(dto.reference_number):
                return
            self.logger.warning(
                f"{entity_name} id or reference number collision on attempt {attempt}: "
                f"{dto.id} / {dto.reference_number}"
            )
        raise ReferenceNumberGenerationError(entity_name, self.max_reference_attempts)
