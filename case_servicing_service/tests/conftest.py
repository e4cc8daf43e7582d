import pytest
from typing import Any, Dict, List

from case_servicing_service.app.api.dependencies import build_services
from case_servicing_service.app.models import CaseDB, InteractionDB, TransactionDB, TransactionTypeDB
from case_servicing_service.infrastructure.database.seed import default_transaction_types


def _matches(document: Dict[str, Any], filter: Dict[str, Any]) -> bool:
    for field, expected in filter.items():
        if isinstance(expected, dict) and "$in" in expected:
            if document.get(field) not in expected["$in"]:
                return False
        elif document.get(field) != expected:
            return False
    return True


class InMemoryRepository:
    """Repository fake honouring the find/add contract of MongoRepository. Documents are stored as dicts."""

    def __init__(self, model):
        self.model = model
        self.documents: List[Dict[str, Any]] = []
        self.find_calls: List[Dict[str, Any]] = []

    def seed(self, *entities):
        for entity in entities:
            self.documents.append(entity.to_document())

    async def find(self, filter, include=None):
        self.find_calls.append(filter)
        return [self.model(**doc) for doc in self.documents if _matches(doc, filter)]

    async def get_by_id(self, entity_id, include=None):
        found = await self.find({"id": entity_id}, include=include)
        return found[0] if found else None

    async def get_all(self, include=None):
        return await self.find({}, include=include)

    async def add(self, entity):
        self.documents.append(entity.to_document())
        return entity


@pytest.fixture
def case_repo():
    return InMemoryRepository(CaseDB)


@pytest.fixture
def interaction_repo():
    return InMemoryRepository(InteractionDB)


@pytest.fixture
def transaction_repo():
    return InMemoryRepository(TransactionDB)


@pytest.fixture
def transaction_type_repo():
    repo = InMemoryRepository(TransactionTypeDB)
    repo.seed(*default_transaction_types())
    return repo


@pytest.fixture
def services(case_repo, interaction_repo, transaction_repo, transaction_type_repo):
    return build_services(case_repo, interaction_repo, transaction_repo, transaction_type_repo)


@pytest.fixture
def stored_case():
    """A persisted PublicWeb case for customer ID-1001."""
    return CaseDB(
        id="01JFK3M8Q2W7YB2XK3VQ5F4J8T",
        status="Initiated",
        reference_number="CSP2501014175F4J8T",
        channel="PublicWeb",
        identification_number="ID-1001",
    )
