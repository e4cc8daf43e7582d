import pytest
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient

from case_servicing_service.app.api.dependencies import get_services
from case_servicing_service.app.main import app
from case_servicing_service.app.models import CaseDB, InteractionDB, TransactionDB

PREFIX = "/api/casemanagement/v1"


@pytest.fixture
def client(services):
    app.dependency_overrides = {get_services: lambda: services}
    yield TestClient(app)
    app.dependency_overrides = {}


# --- Cases ---

def test_create_case_from_headers(client, case_repo):
    response = client.post(
        f"{PREFIX}/case/create", headers={"X-Source-System": "Public Web", "X-Customer-Id": "ID-1001"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["reference_number"].startswith("CSP")
    assert body["custom_exceptions"] is None
    assert case_repo.documents[0]["identification_number"] == "ID-1001"


def test_create_case_with_unrecognised_source_system_is_bad_request(client, case_repo):
    response = client.post(f"{PREFIX}/case/create", headers={"X-Source-System": "Fax", "X-Customer-Id": "ID-1001"})

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert case_repo.documents == []


def test_create_shell_case(client, case_repo):
    response = client.post(f"{PREFIX}/case/create/shell", headers={"X-Source-System": "Branch"})

    assert response.status_code == 200
    assert response.json()["data"]["reference_number"].startswith("CSB")


def test_cases_by_identification_number(client, case_repo, stored_case):
    case_repo.seed(stored_case)

    response = client.get(f"{PREFIX}/case/by/identification/ID-1001")

    assert response.status_code == 200
    assert [c["id"] for c in response.json()["data"]] == [stored_case.id]
    assert response.json()["data"][0]["channel"] == "PublicWeb"


def test_cases_by_identification_number_and_status(client, case_repo, stored_case):
    case_repo.seed(stored_case)

    matching = client.get(f"{PREFIX}/case/by/identification/ID-1001/status/Initiated")
    other = client.get(f"{PREFIX}/case/by/identification/ID-1001/status/Closed")

    assert len(matching.json()["data"]) == 1
    assert other.status_code == 200
    assert other.json()["data"] == []


def test_cases_by_reference_number(client, case_repo, stored_case):
    case_repo.seed(stored_case)

    response = client.get(f"{PREFIX}/case/by/reference/{stored_case.reference_number}")
    with_status = client.get(f"{PREFIX}/case/by/reference/{stored_case.reference_number}/status/Initiated")

    assert response.json()["data"][0]["id"] == stored_case.id
    assert with_status.json()["data"][0]["id"] == stored_case.id


# --- Interactions ---

def test_create_interaction_for_missing_case_is_bad_request(client):
    response = client.post(f"{PREFIX}/interaction/create", json={"case_id": "C404"})

    assert response.status_code == 400
    assert response.json()["error_messages"] == ["No case found for CaseId: C404"]


def test_create_interaction_for_duplicated_case_is_conflict(client, case_repo):
    case_repo.seed(CaseDB(id="C1", channel="Branch"), CaseDB(id="C1", channel="Branch"))

    response = client.post(f"{PREFIX}/interaction/create", json={"case_id": "C1"})

    assert response.status_code == 409
    assert response.json()["custom_exceptions"] == [
        {"kind": "Conflict", "message": "Multiple cases found for CaseId: C1"}
    ]


def test_create_interaction(client, case_repo, stored_case):
    case_repo.seed(stored_case)

    response = client.post(f"{PREFIX}/interaction/create", json={"case_id": stored_case.id, "notes": "Called in"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["case_id"] == stored_case.id
    assert data["case_reference_number"] == stored_case.reference_number


def test_interactions_by_case_and_customer(client, case_repo, interaction_repo, stored_case):
    case_repo.seed(stored_case)
    interaction_repo.seed(InteractionDB(id="I1", case_id=stored_case.id))

    by_case = client.get(f"{PREFIX}/interaction/by/case/{stored_case.id}")
    by_customer = client.get(f"{PREFIX}/interaction/by/identification/ID-1001")
    by_reference = client.get(f"{PREFIX}/interaction/by/reference/{stored_case.reference_number}")

    assert [i["id"] for i in by_case.json()["data"]] == ["I1"]
    assert [i["id"] for i in by_customer.json()["data"]] == ["I1"]
    assert [i["id"] for i in by_reference.json()["data"]] == ["I1"]


# --- Transactions ---

def test_create_transaction(client, case_repo, transaction_repo, stored_case):
    case_repo.seed(stored_case)

    response = client.post(
        f"{PREFIX}/transaction/create",
        json={"case_id": stored_case.id, "transaction_type_id": "01JFJ0R4E4MTHQ4KSNVQ5H1K3W"},
    )

    assert response.status_code == 200
    assert response.json()["data"]["interaction_id"] == ""
    assert transaction_repo.documents[0]["status"] == "Received"


def test_transaction_queries(client, case_repo, interaction_repo, transaction_repo, stored_case):
    case_repo.seed(stored_case)
    interaction_repo.seed(InteractionDB(id="I1", case_id=stored_case.id))
    transaction_repo.seed(
        TransactionDB(id="T1", case_id=stored_case.id, interaction_id="I1"),
        TransactionDB(id="T2", case_id=stored_case.id),
    )

    by_case = client.get(f"{PREFIX}/transaction/by/case/{stored_case.id}")
    by_customer = client.get(f"{PREFIX}/transaction/by/identification/ID-1001")
    by_interaction = client.get(f"{PREFIX}/transaction/by/identification/ID-1001/interaction/I1")
    by_interaction_id = client.get(f"{PREFIX}/transaction/by/interaction/I1")

    assert [t["id"] for t in by_case.json()["data"]] == ["T1", "T2"]
    assert [t["id"] for t in by_customer.json()["data"]] == ["T1", "T2"]
    assert [t["id"] for t in by_interaction.json()["data"]] == ["T1"]
    assert [t["id"] for t in by_interaction_id.json()["data"]] == ["T1"]


def test_unexpected_fault_is_internal_server_error(client, services, mocker):
    mocker.patch.object(services.cases, "get_cases_by_id", AsyncMock(side_effect=ConnectionError("mongo down")))

    response = client.post(f"{PREFIX}/interaction/create", json={"case_id": "C1"})

    assert response.status_code == 500
    assert response.json()["error_messages"] == [
        "An unexpected error occurred while handling CreateInteractionCommand."
    ]
    assert response.json()["custom_exceptions"][0]["kind"] == "UnexpectedFault"


# --- Health ---

def test_health_check_db_connected(client):
    from case_servicing_service.infrastructure.database.connection import get_db

    mock_db = MagicMock()
    mock_db.command = AsyncMock(return_value={"ok": 1})
    app.dependency_overrides[get_db] = lambda: mock_db

    response = client.get(f"{PREFIX}/health")

    assert response.status_code == 200
    assert response.json()["components"] == {"mongodb": "connected"}
    mock_db.command.assert_called_once_with('ping')


def test_health_check_db_disconnected(client):
    from case_servicing_service.infrastructure.database.connection import get_db

    mock_db = MagicMock()
    mock_db.command = AsyncMock(side_effect=Exception("Connection failed"))
    app.dependency_overrides[get_db] = lambda: mock_db

    response = client.get(f"{PREFIX}/health")

    assert response.status_code == 200
    assert response.json()["components"] == {"mongodb": "disconnected"}
