# Generic MongoDB repository used as the persistence collaborator
import datetime
import logging
from dataclasses import dataclass
from typing import Any, Dict, Generic, Iterable, List, Optional, Sequence, Type, TypeVar

from motor.motor_asyncio import AsyncIOMotorDatabase

from case_servicing_service.app.models import BaseEntity, CaseDB, InteractionDB, TransactionDB, TransactionTypeDB

logger = logging.getLogger(__name__)

CASES_COLLECTION = "cases"
INTERACTIONS_COLLECTION = "interactions"
TRANSACTIONS_COLLECTION = "transactions"
TRANSACTION_TYPES_COLLECTION = "transaction_types"

EntityT = TypeVar("EntityT", bound=BaseEntity)

# Never expose Mongo's own key; entities are addressed by "id".
_PROJECTION = {"_id": 0}


@dataclass(frozen=True)
class Relation:
    """A navigation property that can be hydrated on read."""
    name: str
    collection: str
    model: Type[BaseEntity]
    local_field: str
    foreign_field: str
    many: bool = False


@dataclass(frozen=True)
class CascadeRule:
    """Documents in ``collection`` whose ``foreign_field`` equals the removed entity's id are deleted with it."""
    collection: str
    foreign_field: str


class MongoRepository(Generic[EntityT]):
    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        collection_name: str,
        model: Type[EntityT],
        relations: Sequence[Relation] = (),
        cascades: Sequence[CascadeRule] = (),
    ):
        self.db = db
        self.collection_name = collection_name
        self.model = model
        self.relations = {relation.name: relation for relation in relations}
        self.cascades = list(cascades)

    @property
    def collection(self):
        return self.db[self.collection_name]

    async def find(self, filter: Dict[str, Any], include: Optional[Iterable[str]] = None) -> List[EntityT]:
        """Returns every entity matching the Mongo filter document; an empty list when nothing matches."""
        cursor = self.collection.find(filter, _PROJECTION)
        documents = await cursor.to_list(length=None)
        entities = [self.model(**document) for document in documents]
        if include and entities:
            await self._hydrate(entities, include)
        return entities

    async def get_by_id(self, entity_id: str, include: Optional[Iterable[str]] = None) -> Optional[EntityT]:
        entities = await self.find({"id": entity_id}, include=include)
        return entities[0] if entities else None

    async def get_all(self, include: Optional[Iterable[str]] = None) -> List[EntityT]:
        return await self.find({}, include=include)

    async def add(self, entity: EntityT) -> EntityT:
        await self.collection.insert_one(entity.to_document())
        logger.info(f"{self.model.__name__} added to '{self.collection_name}' with ID: {entity.id}")
        return entity

    async def update(self, entity: EntityT) -> EntityT:
        entity.update_date = datetime.datetime.now(datetime.UTC)
        await self.collection.replace_one({"id": entity.id}, entity.to_document())
        logger.info(f"{self.model.__name__} updated in '{self.collection_name}' with ID: {entity.id}")
        return entity

    async def remove(self, entity: EntityT) -> None:
        for rule in self.cascades:
            result = await self.db[rule.collection].delete_many({rule.foreign_field: entity.id})
            logger.info(
                f"Cascade removed {result.deleted_count} document(s) from '{rule.collection}' "
                f"for {self.model.__name__} ID: {entity.id}"
            )
        await self.collection.delete_one({"id": entity.id})
        logger.info(f"{self.model.__name__} removed from '{self.collection_name}' with ID: {entity.id}")

    async def _hydrate(self, entities: List[EntityT], include: Iterable[str]) -> None:
        for name in include:
            relation = self.relations.get(name)
            if relation is None:
                raise ValueError(f"'{name}' is not a relation of {self.model.__name__}")

            keys = list({getattr(entity, relation.local_field) for entity in entities if getattr(entity, relation.local_field)})
            related: Dict[str, List[BaseEntity]] = {}
            if keys:
                cursor = self.db[relation.collection].find({relation.foreign_field: {"$in": keys}}, _PROJECTION)
                for document in await cursor.to_list(length=None):
                    item = relation.model(**document)
                    related.setdefault(getattr(item, relation.foreign_field), []).append(item)

            for entity in entities:
                matches = related.get(getattr(entity, relation.local_field), [])
                if relation.many:
                    setattr(entity, relation.name, matches)
                else:
                    setattr(entity, relation.name, matches[0] if matches else None)


def case_repository(db: AsyncIOMotorDatabase) -> MongoRepository[CaseDB]:
    return MongoRepository(
        db,
        CASES_COLLECTION,
        CaseDB,
        relations=[
            Relation("interactions", INTERACTIONS_COLLECTION, InteractionDB, "id", "case_id", many=True),
        ],
        cascades=[
            CascadeRule(TRANSACTIONS_COLLECTION, "case_id"),
            CascadeRule(INTERACTIONS_COLLECTION, "case_id"),
        ],
    )


def interaction_repository(db: AsyncIOMotorDatabase) -> MongoRepository[InteractionDB]:
    return MongoRepository(
        db,
        INTERACTIONS_COLLECTION,
        InteractionDB,
        relations=[
            Relation("case", CASES_COLLECTION, CaseDB, "case_id", "id"),
            Relation("transactions", TRANSACTIONS_COLLECTION, TransactionDB, "id", "interaction_id", many=True),
        ],
        cascades=[CascadeRule(TRANSACTIONS_COLLECTION, "interaction_id")],
    )


def transaction_repository(db: AsyncIOMotorDatabase) -> MongoRepository[TransactionDB]:
    return MongoRepository(
        db,
        TRANSACTIONS_COLLECTION,
        TransactionDB,
        relations=[
            Relation("case", CASES_COLLECTION, CaseDB, "case_id", "id"),
            Relation("interaction", INTERACTIONS_COLLECTION, InteractionDB, "interaction_id", "id"),
            Relation("transaction_type", TRANSACTION_TYPES_COLLECTION, TransactionTypeDB, "transaction_type_id", "id"),
        ],
    )


def transaction_type_repository(db: AsyncIOMotorDatabase) -> MongoRepository[TransactionTypeDB]:
    return MongoRepository(
        db,
        TRANSACTION_TYPES_COLLECTION,
        TransactionTypeDB,
        cascades=[CascadeRule(TRANSACTIONS_COLLECTION, "transaction_type_id")],
    )
