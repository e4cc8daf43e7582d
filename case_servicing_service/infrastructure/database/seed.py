# Index creation and reference data seeding, run once at application startup
import datetime
import logging
from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase

from case_servicing_service.app.models import TransactionTypeDB
from .repository import (
    CASES_COLLECTION,
    INTERACTIONS_COLLECTION,
    TRANSACTIONS_COLLECTION,
    TRANSACTION_TYPES_COLLECTION,
)

logger = logging.getLogger(__name__)

INDEXES = {
    CASES_COLLECTION: ["id", "identification_number", "reference_number", "status"],
    INTERACTIONS_COLLECTION: ["id", "case_id", "reference_number"],
    TRANSACTIONS_COLLECTION: ["id", "case_id", "interaction_id", "transaction_type_id", "reference_number"],
    TRANSACTION_TYPES_COLLECTION: ["id", "name"],
}

def default_transaction_types() -> List[TransactionTypeDB]:
    created = datetime.datetime(2025, 1, 1, tzinfo=datetime.UTC)
    return [
        TransactionTypeDB(
            id="01JFJ0R4E4MTHQ4KSNVQ5H1K3W",
            created_date=created,
            name="POCR",
            description="A standard transaction that does not require approval/consent and requirements on an identified customer and policies owned by that customer.",
            requires_approval=False,
        ),
        TransactionTypeDB(
            id="01JFJ0R4E5SK1Q7HBS9D5RX2CP",
            created_date=created,
            name="Policy",
            description="A transaction that relates to a policy number.",
            requires_approval=True,
        ),
        TransactionTypeDB(
            id="01JFJ0R4E6G2EHFQ89CD3C9Z2Z",
            created_date=created,
            name="Non-Policy",
            description="A transaction that does not relate to a policy number.",
            requires_approval=False,
        ),
    ]

async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    for collection_name, fields in INDEXES.items():
        for field in fields:
            await db[collection_name].create_index(field, unique=(field == "id"))
    logger.info(f"Indexes ensured for collections: {', '.join(INDEXES)}")

async def seed_transaction_types(db: AsyncIOMotorDatabase) -> int:
    """Inserts any default transaction type that is missing (matched by name). Returns the number inserted."""
    inserted = 0
    for transaction_type in default_transaction_types():
        result = await db[TRANSACTION_TYPES_COLLECTION].update_one(
            {"name": transaction_type.name},
            {"$setOnInsert": transaction_type.to_document()},
            upsert=True,
        )
        if result.upserted_id is not None:
            inserted += 1
    logger.info(f"Transaction type seeding complete. {inserted} new type(s) inserted.")
    return inserted
