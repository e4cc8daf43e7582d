"""
The outcome envelope returned by every service, handler and endpoint.

``success`` is derived, never stored: an envelope is successful exactly when
it holds no error messages and no custom exceptions. Every mutator
re-normalises the envelope so that a clean envelope always reports
``custom_exceptions`` as ``None``.
"""
import datetime
from typing import Any, Generic, Iterable, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, computed_field, field_serializer

from case_servicing_service.app.service.dtos import CaseDto, InteractionDto, TransactionDto, TransactionTypeDto
from case_servicing_service.app.service.exceptions import CustomException

DataT = TypeVar("DataT")


class ValidationFailure(BaseModel):
    field: str
    message: str
    attempted_value: Any = None

    def render(self) -> str:
        attempted = "" if self.attempted_value is None else self.attempted_value
        return f"{self.message} on property '{self.field}' with value ({attempted})"

    @classmethod
    def from_pydantic_error(cls, error: ValidationError) -> List["ValidationFailure"]:
        return [
            cls(
                field=".".join(str(part) for part in detail.get("loc", ())),
                message=detail.get("msg", "Invalid value"),
                attempted_value=detail.get("input"),
            )
            for detail in error.errors()
        ]


class OutcomeEnvelope(BaseModel, Generic[DataT]):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    data: Optional[DataT] = None
    error_messages: List[str] = Field(default_factory=list)
    custom_exceptions: Optional[List[CustomException]] = None
    response_time: datetime.datetime = Field(default_factory=lambda: datetime.datetime.now(datetime.UTC))

    @computed_field
    @property
    def success(self) -> bool:
        return not self.error_messages and not self.custom_exceptions

    @field_serializer("custom_exceptions")
    def _serialize_custom_exceptions(self, value: Optional[List[CustomException]]):
        if value is None:
            return None
        return [exc.to_dict() for exc in value]

    @classmethod
    def from_validation_failures(cls, failures: Iterable[ValidationFailure]):
        response = cls()
        response.apply_validation_failures(failures)
        return response

    def add_error_message(self, message: str, clear: bool = False) -> None:
        if clear:
            self.error_messages.clear()
        self.error_messages.append(message)
        self._normalise()

    def add_error_messages(self, messages: Iterable[str], clear: bool = False) -> None:
        if clear:
            self.error_messages.clear()
        self.error_messages.extend(messages)
        self._normalise()

    def add_custom_exception(self, exception: CustomException, clear: bool = False) -> None:
        self.add_custom_exceptions([exception], clear=clear)

    def add_custom_exceptions(self, exceptions: Iterable[CustomException], clear: bool = False) -> None:
        if clear and self.custom_exceptions is not None:
            self.custom_exceptions.clear()
        if self.custom_exceptions is None:
            self.custom_exceptions = []
        self.custom_exceptions.extend(exceptions)
        self._normalise()

    def apply_validation_failures(self, failures: Iterable[ValidationFailure], clear: bool = False) -> None:
        self.add_error_messages([failure.render() for failure in failures], clear=clear)

    def merge_failures_from(self, other: "OutcomeEnvelope") -> None:
        """Copies the error messages and custom exceptions of ``other`` into this envelope."""
        if other.error_messages:
            self.add_error_messages(other.error_messages)
        if other.custom_exceptions:
            self.add_custom_exceptions(other.custom_exceptions)

    def has_custom_exception(self, exception_type: type) -> bool:
        return any(isinstance(exc, exception_type) for exc in self.custom_exceptions or [])

    def _normalise(self) -> None:
        if self.success:
            self.error_messages.clear()
            self.custom_exceptions = None


# --- Payloads returned by create operations ---

class BasicCaseCreateResponse(BaseModel):
    id: str = ""
    reference_number: str = ""


class BasicInteractionCreateResponse(BaseModel):
    id: str = ""
    reference_number: str = ""
    case_id: str = ""
    case_reference_number: str = ""


class BasicTransactionCreateResponse(BaseModel):
    id: str = ""
    reference_number: str = ""
    case_id: str = ""
    case_reference_number: str = ""
    interaction_id: str = ""
    interaction_reference_number: str = ""


# --- Concrete envelopes ---

class CaseListResponse(OutcomeEnvelope[List[CaseDto]]):
    data: List[CaseDto] = Field(default_factory=list)


class InteractionListResponse(OutcomeEnvelope[List[InteractionDto]]):
    data: List[InteractionDto] = Field(default_factory=list)


class TransactionListResponse(OutcomeEnvelope[List[TransactionDto]]):
    data: List[TransactionDto] = Field(default_factory=list)


class TransactionTypeListResponse(OutcomeEnvelope[List[TransactionTypeDto]]):
    data: List[TransactionTypeDto] = Field(default_factory=list)


class ItemExistsResponse(OutcomeEnvelope[bool]):
    data: bool = False


class CaseCreateResponse(OutcomeEnvelope[BasicCaseCreateResponse]):
    data: BasicCaseCreateResponse = Field(default_factory=BasicCaseCreateResponse)


class InteractionCreateResponse(OutcomeEnvelope[BasicInteractionCreateResponse]):
    data: BasicInteractionCreateResponse = Field(default_factory=BasicInteractionCreateResponse)


class TransactionCreateResponse(OutcomeEnvelope[BasicTransactionCreateResponse]):
    data: BasicTransactionCreateResponse = Field(default_factory=BasicTransactionCreateResponse)
