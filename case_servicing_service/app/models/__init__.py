from .entities import (
    MIN_DATE,
    BaseEntity,
    BaseEntityWithStatus,
    BaseEntityWithReferenceNumberAndStatus,
    CaseDB,
    InteractionDB,
    TransactionDB,
    TransactionTypeDB,
)

__all__ = [
    "MIN_DATE",
    "BaseEntity",
    "BaseEntityWithStatus",
    "BaseEntityWithReferenceNumberAndStatus",
    "CaseDB",
    "InteractionDB",
    "TransactionDB",
    "TransactionTypeDB",
]
