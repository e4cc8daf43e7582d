# Transport-shape models. Relations are nested objects only; no foreign key ids.
import datetime
from typing import List, Optional

from pydantic import BaseModel


class BaseDto(BaseModel):
    id: str = ""
    created_date: Optional[datetime.datetime] = None
    update_date: Optional[datetime.datetime] = None


class BaseDtoWithReferenceNumberAndStatus(BaseDto):
    status: str = ""
    reference_number: str = ""


class TransactionTypeDto(BaseDto):
    name: str = ""
    description: str = ""
    requires_approval: bool = False


class CaseDto(BaseDtoWithReferenceNumberAndStatus):
    channel: str = ""
    identification_number: str = ""
    interactions: Optional[List["InteractionDto"]] = None


class InteractionDto(BaseDtoWithReferenceNumberAndStatus):
    notes: str = ""
    is_primary_interaction: bool = True
    previous_interaction_id: str = ""
    case: Optional[CaseDto] = None
    transactions: Optional[List["TransactionDto"]] = None


class TransactionDto(BaseDtoWithReferenceNumberAndStatus):
    case: Optional[CaseDto] = None
    interaction: Optional[InteractionDto] = None
    transaction_type: Optional[TransactionTypeDto] = None
    is_immediate: bool = False
    is_fulfilled_externally: bool = False
    external_system: str = ""
    external_system_id: str = ""
    external_system_status: str = ""
    external_system_parent_id: str = ""
    parent_reference_number: str = ""
    received_details: str = ""
    processed_details: str = ""


CaseDto.model_rebuild()
InteractionDto.model_rebuild()
TransactionDto.model_rebuild()
