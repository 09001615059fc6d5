"""Contacts endpoint."""

from typing import Optional

from ontraport_api.models.contact import ApiContact
from ontraport_api.models.object_type import ObjectType
from ontraport_api.models.search import ApiSearchOptions
from ontraport_api.services.base_write import OntraportBaseWrite


class OntraportContacts(OntraportBaseWrite[ApiContact]):
    """Full CRUD over contacts."""

    endpoint_single = "Contact"
    endpoint_plural = "Contacts"
    object_type_id = ObjectType.CONTACT
    object_class = ApiContact

    async def select_by_email(self, email: str) -> Optional[ApiContact]:
        """Return the contact with this email address, or None."""
        condition = [{"field": {"field": "email"}, "op": "=", "value": {"value": email}}]
        contacts = await self.select_multiple(ApiSearchOptions(condition=condition, range=1))
        return contacts[0] if contacts else None
