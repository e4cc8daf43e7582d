import pytest
from unittest.mock import AsyncMock, MagicMock

from case_servicing_service.app.models import CaseDB, InteractionDB, TransactionDB
from case_servicing_service.infrastructure.database.repository import (
    CASES_COLLECTION,
    INTERACTIONS_COLLECTION,
    TRANSACTIONS_COLLECTION,
    case_repository,
    transaction_repository,
)


class FakeDatabase:
    """Hands out one MagicMock collection per name, each returning the configured documents from find()."""

    def __init__(self):
        self.collections = {}

    def __getitem__(self, name):
        if name not in self.collections:
            collection = MagicMock()
            cursor = MagicMock()
            cursor.to_list = AsyncMock(return_value=[])
            collection.find.return_value = cursor
            collection.insert_one = AsyncMock()
            collection.replace_one = AsyncMock()
            collection.delete_one = AsyncMock()
            collection.delete_many = AsyncMock(return_value=MagicMock(deleted_count=0))
            self.collections[name] = collection
        return self.collections[name]

    def returns(self, name, documents):
        self[name].find.return_value.to_list = AsyncMock(return_value=documents)


@pytest.fixture
def mock_db():
    return FakeDatabase()


@pytest.mark.asyncio
async def test_find_maps_documents_and_hides_mongo_id(mock_db):
    mock_db.returns(CASES_COLLECTION, [{"id": "C1", "channel": "Branch", "identification_number": "ID-1"}])
    repo = case_repository(mock_db)

    cases = await repo.find({"identification_number": "ID-1"})

    assert [c.id for c in cases] == ["C1"]
    assert isinstance(cases[0], CaseDB)
    mock_db[CASES_COLLECTION].find.assert_called_once_with({"identification_number": "ID-1"}, {"_id": 0})


@pytest.mark.asyncio
async def test_find_with_no_matches_returns_empty_list(mock_db):
    assert await case_repository(mock_db).find({"id": "missing"}) == []


@pytest.mark.asyncio
async def test_get_by_id(mock_db):
    mock_db.returns(CASES_COLLECTION, [{"id": "C1"}])
    case = await case_repository(mock_db).get_by_id("C1")
    assert case.id == "C1"


@pytest.mark.asyncio
async def test_add_writes_scalar_fields_only(mock_db):
    case = CaseDB(id="C1", channel="Branch", interactions=[InteractionDB(id="I1", case_id="C1")])

    await case_repository(mock_db).add(case)

    document = mock_db[CASES_COLLECTION].insert_one.await_args.args[0]
    assert document["id"] == "C1"
    assert "interactions" not in document


@pytest.mark.asyncio
async def test_update_stamps_update_date(mock_db):
    case = CaseDB(id="C1")

    await case_repository(mock_db).update(case)

    assert case.update_date is not None
    mock_db[CASES_COLLECTION].replace_one.assert_awaited_once()
    assert mock_db[CASES_COLLECTION].replace_one.await_args.args[0] == {"id": "C1"}


@pytest.mark.asyncio
async def test_removing_a_case_cascades_to_children(mock_db):
    await case_repository(mock_db).remove(CaseDB(id="C1"))

    mock_db[TRANSACTIONS_COLLECTION].delete_many.assert_awaited_once_with({"case_id": "C1"})
    mock_db[INTERACTIONS_COLLECTION].delete_many.assert_awaited_once_with({"case_id": "C1"})
    mock_db[CASES_COLLECTION].delete_one.assert_awaited_once_with({"id": "C1"})


@pytest.mark.asyncio
async def test_include_hydrates_navigation(mock_db):
    mock_db.returns(TRANSACTIONS_COLLECTION, [
        {"id": "T1", "case_id": "C1", "interaction_id": ""},
        {"id": "T2", "case_id": "C2", "interaction_id": ""},
    ])
    mock_db.returns(CASES_COLLECTION, [{"id": "C1", "channel": "Branch"}])
    repo = transaction_repository(mock_db)

    transactions = await repo.find({}, include=["case"])

    assert isinstance(transactions[0], TransactionDB)
    assert transactions[0].case.id == "C1"
    assert transactions[1].case is None
    query = mock_db[CASES_COLLECTION].find.call_args.args[0]
    assert sorted(query["id"]["$in"]) == ["C1", "C2"]


@pytest.mark.asyncio
async def test_include_unknown_relation_raises(mock_db):
    mock_db.returns(CASES_COLLECTION, [{"id": "C1"}])
    with pytest.raises(ValueError):
        await case_repository(mock_db).find({}, include=["owner"])
