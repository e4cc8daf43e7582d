# Transaction type lookups (read-only reference data)
import logging
from typing import Optional

from case_servicing_service.app.models import TransactionTypeDB
from case_servicing_service.app.service.base_service import BaseService, require
from case_servicing_service.app.service.mappings import to_dto_list
from case_servicing_service.app.service.responses import TransactionTypeListResponse
from case_servicing_service.infrastructure.database.repository import MongoRepository

logger = logging.getLogger(__name__)


class TransactionTypeService(BaseService):
    def __init__(
        self,
        transaction_type_repository: MongoRepository[TransactionTypeDB],
        logger: Optional[logging.Logger] = None,
        **kwargs,
    ):
        super().__init__(logger=logger, **kwargs)
        self.transaction_type_repository = transaction_type_repository

    async def get_transaction_types_by_id(self, transaction_type_id: str) -> TransactionTypeListResponse:
        response = TransactionTypeListResponse()
        if not require(response, ("Transaction type Id", transaction_type_id)):
            return response
        types = await self.transaction_type_repository.find({"id": transaction_type_id})
        return TransactionTypeListResponse(data=to_dto_list(types))

    async def get_transaction_types(self) -> TransactionTypeListResponse:
        types = await self.transaction_type_repository.get_all()
        return TransactionTypeListResponse(data=to_dto_list(types))
