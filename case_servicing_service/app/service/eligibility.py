"""
Pre-creation guards that resolve a parent entity supplied only by id.

A single rule covers every parent kind. It asks a lookup for all records
matching the id and classifies the result:

* no match   -> "No <noun> found for <IdLabel>: <id>"
* one match  -> the match is returned, the envelope is untouched
* many       -> "Multiple <plural> found for <IdLabel>: <id>" plus a
                ConflictException carrying the same message

The rule never writes to persistence.
"""
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

from case_servicing_service.app.service.exceptions import ConflictException
from case_servicing_service.app.service.responses import OutcomeEnvelope

ItemT = TypeVar("ItemT")


@dataclass(frozen=True)
class EntityKind:
    noun: str
    plural: str
    id_label: str

    def not_found_message(self, entity_id: str) -> str:
        return f"No {self.noun} found for {self.id_label}: {entity_id}"

    def conflict_message(self, entity_id: str) -> str:
        return f"Multiple {self.plural} found for {self.id_label}: {entity_id}"


CASE = EntityKind("case", "cases", "CaseId")
INTERACTION = EntityKind("interaction", "interactions", "Interaction Id")
TRANSACTION_TYPE = EntityKind("transaction type", "transaction types", "TransactionTypeId")


async def resolve_single(
    kind: EntityKind,
    lookup: Callable[[str], Awaitable[OutcomeEnvelope]],
    entity_id: str,
    response: OutcomeEnvelope,
) -> Optional[ItemT]:
    """Returns the unique match for ``entity_id``, or None after recording why into ``response``."""
    found = await lookup(entity_id)
    response.merge_failures_from(found)
    if not found.success:
        return None

    matches = list(found.data or [])
    if not matches:
        response.add_error_message(kind.not_found_message(entity_id))
        return None

    if len(matches) > 1:
        message = kind.conflict_message(entity_id)
        response.add_error_message(message)
        response.add_custom_exception(ConflictException(message))
        return None

    return matches[0]
