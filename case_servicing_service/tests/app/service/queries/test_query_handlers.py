import pytest

from case_servicing_service.app.models import CaseDB, InteractionDB, TransactionDB
from case_servicing_service.app.service.queries import handlers, models


@pytest.mark.asyncio
async def test_blank_identification_number_is_rejected_without_lookup(services, case_repo):
    handler = handlers.GetCasesByIdentificationNumberQueryHandler(services.cases)

    response = await handler.handle(models.GetCasesByIdentificationNumberQuery(identification_number=" "))

    assert response.success is False
    assert response.error_messages == ["Identification number is required."]
    assert response.data == []
    assert case_repo.find_calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("handler_cls,query,service_attr", [
    (handlers.GetCasesByReferenceNumberQueryHandler, models.GetCasesByReferenceNumberQuery(), "cases"),
    (handlers.GetCasesByReferenceNumberAndStatusQueryHandler, models.GetCasesByReferenceNumberAndStatusQuery(), "cases"),
    (handlers.GetCasesByIdentificationNumberAndStatusQueryHandler, models.GetCasesByIdentificationNumberAndStatusQuery(), "cases"),
    (handlers.GetInteractionsByCaseIdQueryHandler, models.GetInteractionsByCaseIdQuery(), "interactions"),
    (handlers.GetInteractionsByCaseReferenceNumberQueryHandler, models.GetInteractionsByCaseReferenceNumberQuery(), "interactions"),
    (handlers.GetInteractionsByCustomerIdentificationQueryHandler, models.GetInteractionsByCustomerIdentificationQuery(), "interactions"),
    (handlers.GetTransactionsByCaseIdQueryHandler, models.GetTransactionsByCaseIdQuery(), "transactions"),
    (handlers.GetTransactionsByInteractionIdQueryHandler, models.GetTransactionsByInteractionIdQuery(), "transactions"),
    (handlers.GetTransactionsByCustomerIdentificationQueryHandler, models.GetTransactionsByCustomerIdentificationQuery(), "transactions"),
    (handlers.GetTransactionsForInteractionByCustomerIdentificationQueryHandler, models.GetTransactionsForInteractionByCustomerIdentificationQuery(), "transactions"),
])
async def test_every_query_rejects_blank_parameters_uniformly(
    services, case_repo, interaction_repo, transaction_repo, handler_cls, query, service_attr
):
    response = await handler_cls(getattr(services, service_attr)).handle(query)

    assert response.success is False
    assert response.data == []
    assert all(message.endswith("is required.") for message in response.error_messages)
    assert case_repo.find_calls == interaction_repo.find_calls == transaction_repo.find_calls == []


@pytest.mark.asyncio
async def test_cases_by_reference_number_and_status(services, case_repo, stored_case):
    case_repo.seed(stored_case, CaseDB(id="C2", reference_number=stored_case.reference_number, status="Closed"))
    handler = handlers.GetCasesByReferenceNumberAndStatusQueryHandler(services.cases)

    response = await handler.handle(
        models.GetCasesByReferenceNumberAndStatusQuery(reference_number=stored_case.reference_number, status="Closed")
    )

    assert [c.id for c in response.data] == ["C2"]


@pytest.mark.asyncio
async def test_interactions_by_case_id(services, interaction_repo):
    interaction_repo.seed(InteractionDB(id="I1", case_id="C1"), InteractionDB(id="I2", case_id="C2"))
    handler = handlers.GetInteractionsByCaseIdQueryHandler(services.interactions)

    response = await handler.handle(models.GetInteractionsByCaseIdQuery(case_id="C1"))

    assert response.success is True
    assert [i.id for i in response.data] == ["I1"]


@pytest.mark.asyncio
async def test_transactions_by_customer_identification(services, case_repo, transaction_repo, stored_case):
    case_repo.seed(stored_case)
    transaction_repo.seed(TransactionDB(id="T1", case_id=stored_case.id), TransactionDB(id="T2", case_id="other"))
    handler = handlers.GetTransactionsByCustomerIdentificationQueryHandler(services.transactions)

    response = await handler.handle(models.GetTransactionsByCustomerIdentificationQuery(identification_number="ID-1001"))

    assert [t.id for t in response.data] == ["T1"]


@pytest.mark.asyncio
async def test_unknown_customer_yields_successful_empty_list(services):
    handler = handlers.GetInteractionsByCustomerIdentificationQueryHandler(services.interactions)

    response = await handler.handle(models.GetInteractionsByCustomerIdentificationQuery(identification_number="ID-404"))

    assert response.success is True
    assert response.data == []


@pytest.mark.asyncio
async def test_interactions_by_case_reference_number(services, case_repo, interaction_repo, stored_case):
    case_repo.seed(stored_case)
    interaction_repo.seed(InteractionDB(id="I1", case_id=stored_case.id), InteractionDB(id="I2", case_id="other"))
    handler = handlers.GetInteractionsByCaseReferenceNumberQueryHandler(services.interactions)

    response = await handler.handle(
        models.GetInteractionsByCaseReferenceNumberQuery(case_reference_number=stored_case.reference_number)
    )

    assert [i.id for i in response.data] == ["I1"]


@pytest.mark.asyncio
async def test_transactions_by_interaction_id(services, transaction_repo):
    transaction_repo.seed(
        TransactionDB(id="T1", case_id="C1", interaction_id="I1"),
        TransactionDB(id="T2", case_id="C1", interaction_id="I2"),
    )
    handler = handlers.GetTransactionsByInteractionIdQueryHandler(services.transactions)

    response = await handler.handle(models.GetTransactionsByInteractionIdQuery(interaction_id="I1"))

    assert response.success is True
    assert [t.id for t in response.data] == ["T1"]
