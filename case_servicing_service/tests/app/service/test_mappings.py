import datetime

import pytest

from case_servicing_service.app.models import MIN_DATE, CaseDB, InteractionDB, TransactionDB, TransactionTypeDB
from case_servicing_service.app.service.dtos import CaseDto, InteractionDto, TransactionDto
from case_servicing_service.app.service.mappings import to_dto, to_dto_list, to_entity, to_entity_list

CREATED = datetime.datetime(2025, 1, 2, 3, 4, 5, tzinfo=datetime.UTC)
UPDATED = datetime.datetime(2025, 2, 3, 4, 5, 6, tzinfo=datetime.UTC)


@pytest.fixture
def full_transaction():
    case = CaseDB(
        id="01JFK3M8Q2W7YB2XK3VQ5F4J8T", created_date=CREATED, update_date=UPDATED,
        status="Initiated", reference_number="CSP250102417F4J8T", channel="PublicWeb", identification_number="ID-1001",
    )
    interaction = InteractionDB(
        id="01JFK3M8Q2W7YB2XK3VQ5F4J8V", created_date=CREATED, update_date=UPDATED,
        status="Initiated", reference_number="CSP2501024185F4J8V", case_id=case.id, notes="Called in",
    )
    transaction_type = TransactionTypeDB(
        id="01JFJ0R4E5SK1Q7HBS9D5RX2CP", created_date=CREATED, update_date=UPDATED,
        name="Policy", description="A transaction that relates to a policy number.", requires_approval=True,
    )
    return TransactionDB(
        id="01JFK3M8Q2W7YB2XK3VQ5F4J8W", created_date=CREATED, update_date=UPDATED,
        status="Received", reference_number="CSP2501024195F4J8W",
        case_id=case.id, interaction_id=interaction.id, transaction_type_id=transaction_type.id,
        is_immediate=True, is_fulfilled_externally=True, external_system="CRM", external_system_id="X-9",
        external_system_status="Open", external_system_parent_id="P-1", parent_reference_number="CSP0",
        received_details="{}", processed_details="done",
        case=case, interaction=interaction, transaction_type=transaction_type,
    )


def _scalars(entity):
    return entity.model_dump(exclude=set(entity.navigation_fields))


def test_transaction_round_trip_preserves_scalars(full_transaction):
    round_tripped = to_entity(to_dto(full_transaction))

    assert _scalars(round_tripped) == _scalars(full_transaction)
    assert _scalars(round_tripped.case) == _scalars(full_transaction.case)
    assert round_tripped.transaction_type.requires_approval is True


def test_collections_keep_size_and_order():
    case = CaseDB(id="C1", created_date=CREATED, update_date=UPDATED, channel="Branch")
    case.interactions = [
        InteractionDB(id=f"I{n}", created_date=CREATED, update_date=UPDATED, case_id="C1") for n in range(3)
    ]

    dto = to_dto(case)
    assert [i.id for i in dto.interactions] == ["I0", "I1", "I2"]

    entity = to_entity(dto)
    assert [i.id for i in entity.interactions] == ["I0", "I1", "I2"]


def test_absent_collection_maps_to_empty_list():
    dto = to_dto(CaseDB(id="C1"))
    assert dto.interactions == []


def test_absent_nested_objects_leave_empty_foreign_keys():
    entity = to_entity(TransactionDto(id="T1", status="Received"))

    assert entity.case_id == ""
    assert entity.interaction_id == ""
    assert entity.transaction_type_id == ""
    assert entity.case is None


def test_nested_object_supplies_foreign_key():
    entity = to_entity(InteractionDto(id="I1", case=CaseDto(id="C9")))
    assert entity.case_id == "C9"
    assert entity.case.id == "C9"


def test_absent_dates_become_min_date_sentinel():
    entity = to_entity(CaseDto(id="C1"))
    assert entity.created_date == MIN_DATE
    assert entity.update_date == MIN_DATE


def test_navigation_fields_are_not_part_of_the_document(full_transaction):
    document = full_transaction.to_document()
    assert "case" not in document
    assert "interaction" not in document
    assert "transaction_type" not in document
    assert document["case_id"] == full_transaction.case.id


def test_list_helpers_accept_none():
    assert to_dto_list(None) == []
    assert to_entity_list([]) == []


def test_unregistered_type_raises():
    with pytest.raises(TypeError):
        to_dto(object())
