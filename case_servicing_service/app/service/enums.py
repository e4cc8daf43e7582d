# Domain enumerations and their display-label tables
from enum import Enum
from typing import Dict, Optional, Type, TypeVar, Union

E = TypeVar("E", bound=Enum)


class CaseChannel(str, Enum):
    UNKNOWN = "Unknown"
    AGENT_WORK_BENCH = "AgentWorkBench"
    ADVISER_WORK_BENCH = "AdviserWorkBench"
    CONNECT = "Connect"
    MOM_APP = "MomApp"
    PUBLIC_WEB = "PublicWeb"
    SECURE_WEB = "SecureWeb"
    BRANCH = "Branch"


class CaseStatus(str, Enum):
    UNKNOWN = "Unknown"
    INITIATED = "Initiated"
    OPEN = "Open"
    IN_PROGRESS = "InProgress"
    CLOSED = "Closed"


class InteractionStatus(str, Enum):
    UNKNOWN = "Unknown"
    INITIATED = "Initiated"
    IN_PROGRESS = "InProgress"
    CLOSED = "Closed"


class TransactionStatus(str, Enum):
    UNKNOWN = "Unknown"
    ABORTED = "Aborted"
    SUBMITTED = "Submitted"
    IN_PROGRESS = "InProgress"
    CANCELLED = "Cancelled"
    CLOSED = "Closed"
    RECEIVED = "Received"


class OperationalBusinessSegment(str, Enum):
    CUSTOMER_SERVICING = "CustomerServicing"


# Human-readable labels. Members without an entry are labelled by their value.
DISPLAY_LABELS: Dict[Enum, str] = {
    CaseChannel.UNKNOWN: "Unknown",
    CaseChannel.AGENT_WORK_BENCH: "UAW",
    CaseChannel.ADVISER_WORK_BENCH: "DAE",
    CaseChannel.CONNECT: "Whatsapp",
    CaseChannel.MOM_APP: "MomApp",
    CaseChannel.PUBLIC_WEB: "Public Web",
    CaseChannel.SECURE_WEB: "Secure Web",
    CaseChannel.BRANCH: "Branch",
    OperationalBusinessSegment.CUSTOMER_SERVICING: "Customer Servicing",
}

# Reverse table, keyed by (enum class, lower-cased label).
_MEMBERS_BY_LABEL: Dict[tuple, Enum] = {
    (type(member), label.lower()): member for member, label in DISPLAY_LABELS.items()
}


def get_display_label(member: Enum) -> str:
    return DISPLAY_LABELS.get(member, member.value)


def parse_enum(enum_cls: Type[E], text: Union[str, E, None], default: Optional[E] = None) -> Optional[E]:
    """
    Resolves ``text`` to a member of ``enum_cls``.

    Accepts a member, a member value ("PublicWeb"), a member name
    ("PUBLIC_WEB") or a display label ("Public Web"), all case-insensitive.
    Returns ``default`` when nothing matches.
    """
    if isinstance(text, enum_cls):
        return text
    if text is None:
        return default

    candidate = str(text).strip().lower()
    if not candidate:
        return default

    for member in enum_cls:
        if member.value.lower() == candidate or member.name.lower() == candidate:
            return member

    return _MEMBERS_BY_LABEL.get((enum_cls, candidate), default)
