from datetime import date
from enum import Enum
from typing import Optional

from sqlmodel import Field

from database.models.base import RecordBase, new_id


class AssetType(str, Enum):
    PROPERTY = "property"
    EQUIPMENT = "equipment"
    VEHICLE = "vehicle"
    FURNITURE = "furniture"
    OTHER = "other"


class AssetStatus(str, Enum):
    ACTIVE = "active"
    DISPOSED = "disposed"
    FULLY_DEPRECIATED = "fully_depreciated"


class FixedAsset(RecordBase, table=True):
    """A depreciating asset. Book values are recomputed, never entered by hand."""
    __tablename__ = "fixed_assets"

    id: str = Field(default_factory=new_id, primary_key=True)
    asset_number: str = Field(index=True, max_length=50)
    asset_name: str = Field(max_length=255)
    asset_type: str = Field(default=AssetType.EQUIPMENT.value, max_length=20)

    purchase_date: date
    purchase_price: float
    salvage_value: float = Field(default=0)
    useful_life: float  # years
    depreciation_method: str = Field(default="straight_line", max_length=30)

    accumulated_depreciation: float = Field(default=0)
    current_value: float = Field(default=0)
    status: str = Field(default=AssetStatus.ACTIVE.value, max_length=20)

    disposal_date: Optional[date] = Field(default=None)
    disposal_amount: Optional[float] = Field(default=None)

    location: Optional[str] = Field(default=None, max_length=255)
    serial_number: Optional[str] = Field(default=None, max_length=100)
    notes: Optional[str] = Field(default=None)
