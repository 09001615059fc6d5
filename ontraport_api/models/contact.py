"""Ontraport contact record."""

from datetime import date, datetime
from decimal import Decimal
from enum import IntEnum

from ontraport_api.models.api_object import ApiObject
from ontraport_api.models.api_property import ApiField
from ontraport_api.models.converters import IntConverter, ListConverter


class BulkMailStatus(IntEnum):
    """Email subscription state of a contact."""

    HARD_BOUNCE = -5
    UNDER_REVIEW = -2
    TRANSACTIONAL_ONLY = 0
    SINGLE_OPT_IN = 1
    DOUBLE_OPT_IN = 2


class BulkSmsStatus(IntEnum):
    HARD_BOUNCE = -5
    UNCONFIRMED = -2
    UNSUBSCRIBED = 0
    SUBSCRIBED = 1


class ApiContact(ApiObject):
    """A contact with the standard Ontraport fields.

    Account-specific custom fields (``f1234``) remain reachable through
    ``contact.get("f1234")`` or ``ApiProperty(contact, "f1234", kind)``.
    """

    owner = ApiField("owner", int)
    first_name = ApiField("firstname")
    last_name = ApiField("lastname")
    email = ApiField("email")
    title = ApiField("title")
    company = ApiField("company")
    website = ApiField("website")

    address = ApiField("address")
    address2 = ApiField("address2")
    city = ApiField("city")
    state = ApiField("state")
    zip_code = ApiField("zip")
    country = ApiField("country")
    timezone = ApiField("timezone")

    office_phone = ApiField("office_phone")
    cell_phone = ApiField("cell_phone")
    home_phone = ApiField("home_phone")
    sms_number = ApiField("sms_number")
    fax = ApiField("fax")

    birthday = ApiField("birthday", date)
    bulk_mail = ApiField("bulk_mail", BulkMailStatus)
    bulk_sms = ApiField("bulk_sms", BulkSmsStatus)
    spent = ApiField("spent", Decimal)
    num_purchased = ApiField("num_purchased", int)
    date_last_activity = ApiField("dla", datetime)
    unique_id = ApiField("unique_id")
    tags = ApiField("contact_cat", ListConverter(IntConverter(), separator="*/*"), doc="Tag ids.")
