# Command Handler Implementation
import logging
from typing import Optional

from opentelemetry import trace

from .models import CreateCaseCommand, CreateInteractionCommand, CreateShellCaseCommand, CreateTransactionCommand
from case_servicing_service.app.service import eligibility
from case_servicing_service.app.service.case_service import CaseService
from case_servicing_service.app.service.dtos import CaseDto, InteractionDto, TransactionDto
from case_servicing_service.app.service.enums import CaseStatus, InteractionStatus, TransactionStatus
from case_servicing_service.app.service.interaction_service import InteractionService
from case_servicing_service.app.service.responses import (
    CaseCreateResponse,
    InteractionCreateResponse,
    OutcomeEnvelope,
    TransactionCreateResponse,
)
from case_servicing_service.app.service.transaction_service import TransactionService
from case_servicing_service.app.service.transaction_type_service import TransactionTypeService

logger = logging.getLogger(__name__)


def _start_span(command_name: str, command_id: str):
    current_span = trace.get_current_span()
    current_span.set_attribute("command.name", command_name)
    current_span.set_attribute("command.id", command_id)
    current_span.add_event(f"{command_name}HandlerStarted")
    return current_span


def _rejected(response: OutcomeEnvelope, command) -> bool:
    failures = command.validation_failures()
    if failures:
        response.apply_validation_failures(failures)
        return True
    return False


async def _interaction_on_case(
    interaction_service: InteractionService, interaction_id: str, case_id: str, response: OutcomeEnvelope
) -> bool:
    """Adds a not-found message to ``response`` unless the interaction belongs to the case."""
    on_case = await interaction_service.interaction_exists_on_case(interaction_id, case_id)
    response.merge_failures_from(on_case)
    if not on_case.success:
        return False
    if not on_case.data:
        response.add_error_message(f"{eligibility.INTERACTION.not_found_message(interaction_id)} on CaseId: {case_id}")
        return False
    return True


class CreateCaseCommandHandler:
    response_model = CaseCreateResponse
    failure_message = "Failed to create case."

    def __init__(self, case_service: CaseService, logger: Optional[logging.Logger] = None):
        self.case_service = case_service
        self.logger = logger or logging.getLogger(__name__)

    def _build_case(self, command) -> CaseDto:
        return CaseDto(
            channel=command.source_channel.value,
            identification_number=getattr(command, "identification_number", ""),
            status=CaseStatus.INITIATED.value,
        )

    async def handle(self, command: CreateCaseCommand) -> CaseCreateResponse:
        current_span = _start_span(type(command).__name__, command.command_id)
        current_span.set_attribute("case.channel", command.source_channel.value)

        response = self.response_model()
        if _rejected(response, command):
            self.logger.warning(f"{type(command).__name__} {command.command_id} rejected: {response.error_messages}")
            return response

        created = await self.case_service.create_case(self._build_case(command))
        if not created.success:
            response.add_error_message(self.failure_message)
            response.merge_failures_from(created)
            return response

        current_span.add_event("CaseCreated", {"case.id": created.data.id})
        response.data = created.data
        return response


class CreateShellCaseCommandHandler(CreateCaseCommandHandler):
    failure_message = "Failed to create shell case."

    async def handle(self, command: CreateShellCaseCommand) -> CaseCreateResponse:
        return await super().handle(command)


class CreateInteractionCommandHandler:
    response_model = InteractionCreateResponse

    def __init__(
        self,
        case_service: CaseService,
        interaction_service: InteractionService,
        logger: Optional[logging.Logger] = None,
    ):
        self.case_service = case_service
        self.interaction_service = interaction_service
        self.logger = logger or logging.getLogger(__name__)

    async def handle(self, command: CreateInteractionCommand) -> InteractionCreateResponse:
        current_span = _start_span("CreateInteractionCommand", command.command_id)
        current_span.set_attribute("case.id", command.case_id)

        response = self.response_model()
        if _rejected(response, command):
            return response

        case = await eligibility.resolve_single(
            eligibility.CASE, self.case_service.get_cases_by_id, command.case_id, response
        )
        if case is None:
            return response

        if command.previous_interaction_id and not await _interaction_on_case(
            self.interaction_service, command.previous_interaction_id, case.id, response
        ):
            return response

        interaction = InteractionDto(
            notes=command.notes,
            is_primary_interaction=command.is_primary_interaction,
            previous_interaction_id=command.previous_interaction_id,
            case=case,
            status=InteractionStatus.INITIATED.value,
        )
        created = await self.interaction_service.create_interaction(interaction)
        response.merge_failures_from(created)
        if not created.success:
            return response

        current_span.add_event("InteractionCreated", {"interaction.id": created.data.id})
        response.data = created.data
        return response


class CreateTransactionCommandHandler:
    response_model = TransactionCreateResponse

    def __init__(
        self,
        case_service: CaseService,
        interaction_service: InteractionService,
        transaction_service: TransactionService,
        transaction_type_service: TransactionTypeService,
        logger: Optional[logging.Logger] = None,
    ):
        self.case_service = case_service
        self.interaction_service = interaction_service
        self.transaction_service = transaction_service
        self.transaction_type_service = transaction_type_service
        self.logger = logger or logging.getLogger(__name__)

    async def handle(self, command: CreateTransactionCommand) -> TransactionCreateResponse:
        current_span = _start_span("CreateTransactionCommand", command.command_id)
        current_span.set_attribute("case.id", command.case_id)
        current_span.set_attribute("interaction.id", command.interaction_id or "N/A")

        response = self.response_model()
        if _rejected(response, command):
            return response

        case = await eligibility.resolve_single(
            eligibility.CASE, self.case_service.get_cases_by_id, command.case_id, response
        )
        if case is None:
            return response

        interaction = None
        if command.interaction_id and command.interaction_id.strip():
            interaction = await eligibility.resolve_single(
                eligibility.INTERACTION, self.interaction_service.get_interactions_by_id, command.interaction_id, response
            )
            if interaction is None:
                return response
            if not await _interaction_on_case(self.interaction_service, interaction.id, case.id, response):
                return response
        else:
            self.logger.info(f"No interaction supplied for transaction on case {case.id}; creating without interaction linkage.")

        transaction_type = None
        if command.transaction_type_id and command.transaction_type_id.strip():
            transaction_type = await eligibility.resolve_single(
                eligibility.TRANSACTION_TYPE,
                self.transaction_type_service.get_transaction_types_by_id,
                command.transaction_type_id,
                response,
            )
            if transaction_type is None:
                return response

        transaction = TransactionDto(
            case=case,
            interaction=interaction,
            transaction_type=transaction_type,
            status=TransactionStatus.RECEIVED.value,
            is_immediate=command.is_immediate,
            is_fulfilled_externally=command.is_fulfilled_externally,
            external_system=command.external_system,
            external_system_id=command.external_system_id,
            received_details=command.received_details,
            processed_details=command.processed_details,
        )
        created = await self.transaction_service.create_transaction(transaction)
        response.merge_failures_from(created)
        if not created.success:
            return response

        current_span.add_event("TransactionCreated", {"transaction.id": created.data.id})
        response.data = created.data
        return response
