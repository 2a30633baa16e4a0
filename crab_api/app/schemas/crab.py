"""
Pydantic schemas for crab records.

A crab has a storage-assigned ``id``, a ``name``, an ``age`` and a
``height``.  Clients never send the ``id``: ``CrabCreate`` carries the
three writable fields and ``CrabRead`` is the full record returned
when listing.
"""

from pydantic import BaseModel, ConfigDict, Field


# ``age`` is stored in a SMALLINT column.
SMALLINT_MIN = -32768
SMALLINT_MAX = 32767


class CrabCreate(BaseModel):
    """Schema for creating a crab.

    Validation is strict: ``"5"`` is not an age and ``5.0`` is not an
    integer.  JSON integers are still accepted for ``height``.
    Non-finite heights (``NaN``, ``1e999``) cannot be stored or
    serialised back and are rejected.
    """

    model_config = ConfigDict(strict=True)

    name: str = Field(..., examples=["Ferris"])
    age: int = Field(..., ge=SMALLINT_MIN, le=SMALLINT_MAX, examples=[5])
    height: float = Field(..., allow_inf_nan=False, examples=[0.1])


class CrabRead(BaseModel):
    """Schema for reading a crab from the API."""

    id: int
    name: str
    age: int
    height: float

    model_config = {
        "from_attributes": True,
    }
