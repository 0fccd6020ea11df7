"""Contact use cases."""

from haven.application.usecase.contact.list_contacts import (
    ListContactsRequest,
    ListContactsUseCase,
)
from haven.application.usecase.contact.remove_contact import (
    RemoveContactRequest,
    RemoveContactUseCase,
)
from haven.application.usecase.contact.resolve_contact import (
    ResolveContactRequest,
    ResolveContactResponse,
    ResolveContactUseCase,
)
from haven.application.usecase.contact.upsert_contact import (
    UpsertContactRequest,
    UpsertContactUseCase,
)

__all__ = [
    "ListContactsRequest",
    "ListContactsUseCase",
    "RemoveContactRequest",
    "RemoveContactUseCase",
    "ResolveContactRequest",
    "ResolveContactResponse",
    "ResolveContactUseCase",
    "UpsertContactRequest",
    "UpsertContactUseCase",
]
