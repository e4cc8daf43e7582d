"""
Reference number generation.

A reference number is a short, human-shareable identifier distinct from the
entity id:

    <segment prefix><channel prefix><YYMMDD><3 random digits><last 6 of id>

e.g. ``CSP2510184175F4J8T`` for a PublicWeb case in the CustomerServicing
segment. Uniqueness is probabilistic; callers that need a
guarantee must check for collisions before persisting.
"""
import datetime
import random
from typing import Optional, Union

from case_servicing_service.app.service.enums import CaseChannel, OperationalBusinessSegment, parse_enum
from case_servicing_service.app.service.exceptions import ReferenceNumberPrefixError

ID_SUFFIX_LENGTH = 6
RANDOM_CODE_MIN = 100
RANDOM_CODE_MAX = 999

CHANNEL_PREFIXES = {
    CaseChannel.ADVISER_WORK_BENCH: "D",
    CaseChannel.AGENT_WORK_BENCH: "T",
    CaseChannel.BRANCH: "B",
    CaseChannel.CONNECT: "C",
    CaseChannel.MOM_APP: "A",
    CaseChannel.PUBLIC_WEB: "P",
    CaseChannel.SECURE_WEB: "W",
}

BUSINESS_SEGMENT_PREFIXES = {
    OperationalBusinessSegment.CUSTOMER_SERVICING: "CS",
}

_random = random.SystemRandom()


def get_channel_prefix(channel: Union[CaseChannel, str]) -> str:
    member = parse_enum(CaseChannel, channel)
    if member not in CHANNEL_PREFIXES:
        raise ReferenceNumberPrefixError("channel", channel)
    return CHANNEL_PREFIXES[member]


def get_business_segment_prefix(business_segment: Union[OperationalBusinessSegment, str]) -> str:
    member = parse_enum(OperationalBusinessSegment, business_segment)
    if member not in BUSINESS_SEGMENT_PREFIXES:
        raise ReferenceNumberPrefixError("business segment", business_segment)
    return BUSINESS_SEGMENT_PREFIXES[member]


def generate_reference_number(
    identifier: Optional[str],
    channel: Union[CaseChannel, str],
    business_segment: Union[OperationalBusinessSegment, str] = OperationalBusinessSegment.CUSTOMER_SERVICING,
    now: Optional[datetime.datetime] = None,
) -> str:
    """
    Builds a reference number for the entity with the given identifier.

    Raises:
        ValueError: the identifier is blank or shorter than six characters,
            or the channel is ``CaseChannel.UNKNOWN``.
        ReferenceNumberPrefixError: the channel or business segment has no
            prefix mapping.
    """
    if (
        identifier is None
        or not identifier.strip()
        or len(identifier) < ID_SUFFIX_LENGTH
        or parse_enum(CaseChannel, channel) == CaseChannel.UNKNOWN
    ):
        raise ValueError("Invalid identifier or channel for reference number generation.")

    channel_prefix = get_channel_prefix(channel)
    segment_prefix = get_business_segment_prefix(business_segment)

    timestamp = (now or datetime.datetime.now(datetime.UTC)).strftime("%y%m%d")
    random_code = str(_random.randint(RANDOM_CODE_MIN, RANDOM_CODE_MAX))

    return f"{segment_prefix}{channel_prefix}{timestamp}{random_code}{identifier[-ID_SUFFIX_LENGTH:]}"


def expected_reference_number_length(business_segment=OperationalBusinessSegment.CUSTOMER_SERVICING) -> int:
    return len(get_business_segment_prefix(business_segment)) + 1 + 6 + 3 + ID_SUFFIX_LENGTH
