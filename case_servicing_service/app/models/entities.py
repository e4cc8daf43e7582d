# Persistence-shape models, one per MongoDB collection.
# Foreign keys are plain ids; the Optional relation fields are only populated
# when a repository hydrates them on read and are never written back.
import datetime
from typing import ClassVar, FrozenSet, List, Optional

from pydantic import BaseModel, Field

# Stored in place of a missing date when a DTO is mapped to an entity.
MIN_DATE = datetime.datetime.min.replace(tzinfo=datetime.UTC)


class BaseEntity(BaseModel):
    navigation_fields: ClassVar[FrozenSet[str]] = frozenset()

    id: str
    created_date: datetime.datetime = Field(default_factory=lambda: datetime.datetime.now(datetime.UTC))
    update_date: Optional[datetime.datetime] = None

    def to_document(self) -> dict:
        return self.model_dump(exclude=set(self.navigation_fields))


class BaseEntityWithStatus(BaseEntity):
    status: str = ""


class BaseEntityWithReferenceNumberAndStatus(BaseEntityWithStatus):
    reference_number: str = ""


class TransactionTypeDB(BaseEntity): # "transaction_types" lookup collection
    name: str
    description: str = ""
    requires_approval: bool = False


class CaseDB(BaseEntityWithReferenceNumberAndStatus): # "cases" collection
    navigation_fields: ClassVar[FrozenSet[str]] = frozenset({"interactions"})

    channel: str = ""
    identification_number: str = ""

    interactions: Optional[List["InteractionDB"]] = None


class InteractionDB(BaseEntityWithReferenceNumberAndStatus): # "interactions" collection
    navigation_fields: ClassVar[FrozenSet[str]] = frozenset({"case", "transactions"})

    case_id: str = ""
    notes: str = ""
    # One primary interaction per case by convention; not enforced here.
    is_primary_interaction: bool = True
    # Soft link to an earlier interaction on the same case.
    previous_interaction_id: str = ""

    case: Optional[CaseDB] = None
    transactions: Optional[List["TransactionDB"]] = None


class TransactionDB(BaseEntityWithReferenceNumberAndStatus): # "transactions" collection
    navigation_fields: ClassVar[FrozenSet[str]] = frozenset({"case", "interaction", "transaction_type"})

    case_id: str = ""
    interaction_id: str = ""
    transaction_type_id: str = ""

    is_immediate: bool = False
    is_fulfilled_externally: bool = False
    external_system: str = ""
    external_system_id: str = ""
    external_system_status: str = ""
    external_system_parent_id: str = ""
    parent_reference_number: str = ""
    received_details: str = ""
    processed_details: str = ""

    case: Optional[CaseDB] = None
    interaction: Optional[InteractionDB] = None
    transaction_type: Optional[TransactionTypeDB] = None


CaseDB.model_rebuild()
InteractionDB.model_rebuild()
TransactionDB.model_rebuild()
