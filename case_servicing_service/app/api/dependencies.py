# FastAPI dependency providers: repositories -> services -> request pipeline
import logging
from dataclasses import dataclass

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from case_servicing_service.app.service.case_service import CaseService
from case_servicing_service.app.service.interaction_service import InteractionService
from case_servicing_service.app.service.pipeline import RequestPipeline
from case_servicing_service.app.service.transaction_service import TransactionService
from case_servicing_service.app.service.transaction_type_service import TransactionTypeService
from case_servicing_service.infrastructure.database.connection import get_db
from case_servicing_service.infrastructure.database.repository import (
    case_repository,
    interaction_repository,
    transaction_repository,
    transaction_type_repository,
)

logger = logging.getLogger(__name__)


@dataclass
class DomainServices:
    cases: CaseService
    interactions: InteractionService
    transactions: TransactionService
    transaction_types: TransactionTypeService


def build_services(case_repo, interaction_repo, transaction_repo, transaction_type_repo) -> DomainServices:
    cases = CaseService(case_repo)
    interactions = InteractionService(interaction_repo, cases)
    transactions = TransactionService(transaction_repo, cases, interactions)
    transaction_types = TransactionTypeService(transaction_type_repo)
    return DomainServices(cases, interactions, transactions, transaction_types)


async def get_services(db: AsyncIOMotorDatabase = Depends(get_db)) -> DomainServices:
    return build_services(
        case_repository(db),
        interaction_repository(db),
        transaction_repository(db),
        transaction_type_repository(db),
    )


def get_pipeline() -> RequestPipeline:
    return RequestPipeline()
