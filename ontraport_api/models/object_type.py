"""Well-known Ontraport object type ids."""

from enum import IntEnum


class ObjectType(IntEnum):
    """Ids accepted by the generic ``objectID`` parameter.

    Custom objects use account-specific ids above 10000.
    """

    CONTACT = 0
    TASK = 1
    SEQUENCE = 5
    RULE = 6
    MESSAGE = 7
    NOTE = 12
    TAG = 14
    PRODUCT = 16
    PURCHASE = 17
    LANDING_PAGE = 20
    TRANSACTION = 46
    CAMPAIGN = 140
