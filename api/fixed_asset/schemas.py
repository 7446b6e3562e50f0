from datetime import date
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from database.models.fixed_asset import AssetType
from services.finance.depreciation import DepreciationMethod


class FixedAssetCreate(BaseModel):
    asset_name: str = Field(min_length=1)
    asset_type: AssetType = AssetType.EQUIPMENT
    purchase_date: date
    purchase_price: float = Field(gt=0)
    salvage_value: float = Field(default=0, ge=0)
    useful_life: float = Field(gt=0)
    depreciation_method: DepreciationMethod = DepreciationMethod.STRAIGHT_LINE
    location: Optional[str] = None
    serial_number: Optional[str] = None
    notes: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)


class FixedAssetUpdate(BaseModel):
    asset_name: Optional[str] = Field(default=None, min_length=1)
    asset_type: Optional[AssetType] = None
    purchase_date: Optional[date] = None
    purchase_price: Optional[float] = Field(default=None, gt=0)
    salvage_value: Optional[float] = Field(default=None, ge=0)
    useful_life: Optional[float] = Field(default=None, gt=0)
    depreciation_method: Optional[DepreciationMethod] = None
    location: Optional[str] = None
    serial_number: Optional[str] = None
    notes: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)


class DisposeRequest(BaseModel):
    disposal_date: date
    disposal_amount: float = Field(default=0, ge=0)


class DepreciationRunRequest(BaseModel):
    as_of: Optional[date] = None
