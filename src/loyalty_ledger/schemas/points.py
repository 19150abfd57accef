"""Pydantic schemas for point mutations and transaction history."""

from datetime import datetime
from typing import Optional, Union
from uuid import UUID

from pydantic import BaseModel, Field

from ..models import TransactionType


class BalanceChange(BaseModel):
    """Balances of a profile right after a ledger write."""

    user_id: UUID
    delta: int
    new_points: int
    new_accumulated: int
    new_monthly: int


class PointsOperationResult(BaseModel):
    """Typed outcome of a caller-facing points operation."""

    success: bool
    message: str
    error: Optional[str] = Field(None, description="Error code when the operation was rejected.")
    balance: Optional[BalanceChange] = None


class PointsAdjustment(BaseModel):
    """Signed manual adjustment; the amount is validated by the ledger."""

    user_id: str
    amount: Union[int, float, str]
    description: Optional[str] = Field(None, max_length=280)


class VisitCreate(BaseModel):
    user_id: str
    points: int = Field(1, gt=0, le=1000)
    description: str = Field("Visit", max_length=280)


class RedemptionCreate(BaseModel):
    """Incoming payload for redeeming points."""

    user_id: str
    amount: int = Field(..., gt=0, description="Number of points to redeem.")
    description: str = Field("Reward redemption", max_length=280)


class TransactionRead(BaseModel):
    id: UUID
    user_id: UUID
    type: TransactionType
    amount: int
    description: str
    created_at: datetime

    class Config:
        from_attributes = True
