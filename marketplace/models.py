from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from marketplace.config import BALANCE_MAX, QUANTITY_MAX

AssetId = str
AccountId = str

Balance = int   # unsigned, at most BALANCE_MAX
Quantity = int  # unsigned 128-bit


class SaleRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    price: Balance = Field(default=0, ge=0, le=BALANCE_MAX)  # per unit
    quantity: Quantity = Field(default=0, ge=0, le=QUANTITY_MAX)


class Listing(BaseModel):
    asset_id: AssetId
    seller: AccountId
    price: Balance
    quantity: Quantity


# ── notifications ────────────────────────────────────────────────────────────

class Listed(BaseModel):
    event: Literal["Listed"] = "Listed"
    asset_id: AssetId
    seller: AccountId
    price: Balance
    quantity: Quantity


class Sold(BaseModel):
    event: Literal["Sold"] = "Sold"
    asset_id: AssetId
    seller: AccountId
    buyer: AccountId
    quantity: Quantity


# ── request models ───────────────────────────────────────────────────────────

class ListRequest(BaseModel):
    asset_id: AssetId = Field(..., min_length=1)
    price: Balance = Field(..., ge=0, le=BALANCE_MAX)
    # zero is accepted here and rejected by the sale operation as ZeroAmount
    quantity: Quantity = Field(..., ge=0, le=QUANTITY_MAX)


class PurchaseRequest(BaseModel):
    quantity: Quantity = Field(..., ge=0, le=QUANTITY_MAX)


# ── response models ──────────────────────────────────────────────────────────

class SaleReceipt(BaseModel):
    asset_id: AssetId
    seller: AccountId
    buyer: AccountId
    quantity: Quantity
    unit_price: Balance
    # saturated at BALANCE_MAX
    total_paid: Balance
    # None once the listing has been filled completely
    remaining: Optional[SaleRecord] = None


class AccountSummary(BaseModel):
    account_id: AccountId
    free_balance: Balance
    holdings: dict[AssetId, Quantity]
