# Entity <-> DTO conversion. Every persistence/transport boundary goes through here.
from functools import singledispatch
from typing import Iterable, List, Optional

from case_servicing_service.app.models import MIN_DATE, CaseDB, InteractionDB, TransactionDB, TransactionTypeDB
from case_servicing_service.app.service.dtos import CaseDto, InteractionDto, TransactionDto, TransactionTypeDto


# --- Entity -> DTO ---

@singledispatch
def to_dto(entity):
    raise TypeError(f"No DTO mapping registered for {type(entity).__name__}")


@to_dto.register
def _(entity: CaseDB) -> CaseDto:
    return CaseDto(
        id=entity.id,
        created_date=entity.created_date,
        update_date=entity.update_date,
        status=entity.status,
        reference_number=entity.reference_number,
        channel=entity.channel,
        identification_number=entity.identification_number,
        interactions=[to_dto(i) for i in entity.interactions or []],
    )


@to_dto.register
def _(entity: InteractionDB) -> InteractionDto:
    return InteractionDto(
        id=entity.id,
        created_date=entity.created_date,
        update_date=entity.update_date,
        status=entity.status,
        reference_number=entity.reference_number,
        notes=entity.notes,
        is_primary_interaction=entity.is_primary_interaction,
        previous_interaction_id=entity.previous_interaction_id,
        case=to_dto(entity.case) if entity.case is not None else None,
        transactions=[to_dto(t) for t in entity.transactions or []],
    )


@to_dto.register
def _(entity: TransactionDB) -> TransactionDto:
    return TransactionDto(
        id=entity.id,
        created_date=entity.created_date,
        update_date=entity.update_date,
        status=entity.status,
        reference_number=entity.reference_number,
        case=to_dto(entity.case) if entity.case is not None else None,
        interaction=to_dto(entity.interaction) if entity.interaction is not None else None,
        transaction_type=to_dto(entity.transaction_type) if entity.transaction_type is not None else None,
        is_immediate=entity.is_immediate,
        is_fulfilled_externally=entity.is_fulfilled_externally,
        external_system=entity.external_system,
        external_system_id=entity.external_system_id,
        external_system_status=entity.external_system_status,
        external_system_parent_id=entity.external_system_parent_id,
        parent_reference_number=entity.parent_reference_number,
        received_details=entity.received_details,
        processed_details=entity.processed_details,
    )


@to_dto.register
def _(entity: TransactionTypeDB) -> TransactionTypeDto:
    return TransactionTypeDto(
        id=entity.id,
        created_date=entity.created_date,
        update_date=entity.update_date,
        name=entity.name,
        description=entity.description,
        requires_approval=entity.requires_approval,
    )


# --- DTO -> Entity ---
# Absent DTO dates become MIN_DATE; absent nested objects leave an empty foreign key.

@singledispatch
def to_entity(dto):
    raise TypeError(f"No entity mapping registered for {type(dto).__name__}")


@to_entity.register
def _(dto: CaseDto) -> CaseDB:
    return CaseDB(
        id=dto.id,
        created_date=dto.created_date or MIN_DATE,
        update_date=dto.update_date or MIN_DATE,
        status=dto.status,
        reference_number=dto.reference_number,
        channel=dto.channel,
        identification_number=dto.identification_number,
        interactions=[to_entity(i) for i in dto.interactions or []],
    )


@to_entity.register
def _(dto: InteractionDto) -> InteractionDB:
    return InteractionDB(
        id=dto.id,
        created_date=dto.created_date or MIN_DATE,
        update_date=dto.update_date or MIN_DATE,
        status=dto.status,
        reference_number=dto.reference_number,
        notes=dto.notes,
        is_primary_interaction=dto.is_primary_interaction,
        previous_interaction_id=dto.previous_interaction_id,
        case_id=dto.case.id if dto.case is not None else "",
        case=to_entity(dto.case) if dto.case is not None else None,
        transactions=[to_entity(t) for t in dto.transactions or []],
    )


@to_entity.register
def _(dto: TransactionDto) -> TransactionDB:
    return TransactionDB(
        id=dto.id,
        created_date=dto.created_date or MIN_DATE,
        update_date=dto.update_date or MIN_DATE,
        status=dto.status,
        reference_number=dto.reference_number,
        case_id=dto.case.id if dto.case is not None else "",
        case=to_entity(dto.case) if dto.case is not None else None,
        interaction_id=dto.interaction.id if dto.interaction is not None else "",
        interaction=to_entity(dto.interaction) if dto.interaction is not None else None,
        transaction_type_id=dto.transaction_type.id if dto.transaction_type is not None else "",
        transaction_type=to_entity(dto.transaction_type) if dto.transaction_type is not None else None,
        is_immediate=dto.is_immediate,
        is_fulfilled_externally=dto.is_fulfilled_externally,
        external_system=dto.external_system,
        external_system_id=dto.external_system_id,
        external_system_status=dto.external_system_status,
        external_system_parent_id=dto.external_system_parent_id,
        parent_reference_number=dto.parent_reference_number,
        received_details=dto.received_details,
        processed_details=dto.processed_details,
    )


@to_entity.register
def _(dto: TransactionTypeDto) -> TransactionTypeDB:
    return TransactionTypeDB(
        id=dto.id,
        created_date=dto.created_date or MIN_DATE,
        update_date=dto.update_date or MIN_DATE,
        name=dto.name,
        description=dto.description,
        requires_approval=dto.requires_approval,
    )


def to_dto_list(entities: Optional[Iterable]) -> List:
    return [to_dto(entity) for entity in entities or []]


def to_entity_list(dtos: Optional[Iterable]) -> List:
    return [to_entity(dto) for dto in dtos or []]
