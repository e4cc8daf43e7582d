# Pydantic models for Queries
from pydantic import BaseModel, Field
import uuid

class BaseQuery(BaseModel):
    query_id: str = Field(default_factory=lambda: str(uuid.uuid4()))

# --- Cases ---

class GetCasesByIdentificationNumberQuery(BaseQuery):
    identification_number: str = ""

class GetCasesByIdentificationNumberAndStatusQuery(BaseQuery):
    identification_number: str = ""
    status: str = ""

class GetCasesByReferenceNumberQuery(BaseQuery):
    reference_number: str = ""

class GetCasesByReferenceNumberAndStatusQuery(BaseQuery):
    reference_number: str = ""
    status: str = ""

# --- Interactions ---

class GetInteractionsByCaseIdQuery(BaseQuery):
    case_id: str = ""

class GetInteractionsByCaseReferenceNumberQuery(BaseQuery):
    case_reference_number: str = ""

class GetInteractionsByCustomerIdentificationQuery(BaseQuery):
    identification_number: str = ""

# --- Transactions ---

class GetTransactionsByCaseIdQuery(BaseQuery):
    case_id: str = ""

class GetTransactionsByInteractionIdQuery(BaseQuery):
    interaction_id: str = ""

class GetTransactionsByCustomerIdentificationQuery(BaseQuery):
    identification_number: str = ""

class GetTransactionsForInteractionByCustomerIdentificationQuery(BaseQuery):
    identification_number: str = ""
    interaction_id: str = ""
