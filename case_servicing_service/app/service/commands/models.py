# Pydantic models for Commands
from pydantic import BaseModel, Field
from typing import List, Optional
import uuid

from case_servicing_service.app.service.enums import CaseChannel
from case_servicing_service.app.service.responses import ValidationFailure

class BaseCommand(BaseModel):
    command_id: str = Field(default_factory=lambda: str(uuid.uuid4()))

    def validation_failures(self) -> List[ValidationFailure]:
        """Structural checks run by the handler before any lookup. Empty when the command is well formed."""
        return []

def _required(field: str, value: Optional[str], label: str) -> List[ValidationFailure]:
    if value is None or not value.strip():
        return [ValidationFailure(field=field, message=f"{label} is required.", attempted_value=value)]
    return []

def _known_channel(channel: CaseChannel) -> List[ValidationFailure]:
    if channel == CaseChannel.UNKNOWN:
        return [ValidationFailure(field="source_channel", message="A known source channel is required.", attempted_value=channel.value)]
    return []

class CreateCaseCommand(BaseCommand):
    source_channel: CaseChannel = CaseChannel.UNKNOWN
    identification_number: str = ""

    def validation_failures(self) -> List[ValidationFailure]:
        return _known_channel(self.source_channel) + _required(
            "identification_number", self.identification_number, "Identification number"
        )

class CreateShellCaseCommand(BaseCommand):
    # A case opened before the customer is identified
    source_channel: CaseChannel = CaseChannel.UNKNOWN

    def validation_failures(self) -> List[ValidationFailure]:
        return _known_channel(self.source_channel)

class CreateInteractionCommand(BaseCommand):
    case_id: str = ""
    notes: str = ""
    is_primary_interaction: bool = True
    previous_interaction_id: str = ""

    def validation_failures(self) -> List[ValidationFailure]:
        failures = _required("case_id", self.case_id, "Case Id")
        if not self.is_primary_interaction:
            failures += _required("previous_interaction_id", self.previous_interaction_id, "Previous interaction Id")
        return failures

class CreateTransactionCommand(BaseCommand):
    case_id: str = ""
    interaction_id: str = "" # optional linkage
    transaction_type_id: str = "" # optional; resolved against the seeded types when given
    is_immediate: bool = True
    is_fulfilled_externally: bool = False
    external_system: str = ""
    external_system_id: str = ""
    received_details: str = ""
    processed_details: str = ""

    def validation_failures(self) -> List[ValidationFailure]:
        return _required("case_id", self.case_id, "Case Id")
