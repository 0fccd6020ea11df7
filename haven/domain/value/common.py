"""Value object bases."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel

T = TypeVar("T")


class ValueObject(BaseModel):
    """Frozen record compared field by field (e.g. IdentityInfo)."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class RootValueObject(RootModel[T], Generic[T]):
    """Frozen wrapper around one primitive, read back through ``.root``.

    Email, InviteToken and ReferralCode are built on this. Serialising one
    yields the bare primitive, so API models and table rows never see the
    wrapper.
    """

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)
