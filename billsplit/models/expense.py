from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional, Sequence

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class SplitType(str, Enum):
    EQUAL = "equal"
    EXACT = "exact"
    PERCENTAGE = "percentage"
    ADJUST = "adjust"


class ShareDetail(BaseModel):
    """Per-participant share descriptor; which field is read depends on the split type."""
    amount: Decimal = Decimal("0")
    percentage: Decimal = Decimal("0")
    adjustment: Decimal = Decimal("0")

    model_config = ConfigDict(from_attributes=True)

    @field_validator("amount", "percentage", "adjustment", mode="before")
    @classmethod
    def blank_as_zero(cls, value):
        # Form inputs arrive as "" or null when left empty
        if value is None or value == "":
            return Decimal("0")
        return value


class Expense(BaseModel):
    id: Optional[str] = Field(default=None, validation_alias=AliasChoices("id", "_id"))
    description: str = ""
    amount: Decimal = Field(gt=0)
    payer: str = Field(validation_alias=AliasChoices("payer", "paidBy", "paid_by"))
    date: Optional[datetime] = None
    split_type: SplitType = Field(
        default=SplitType.EQUAL,
        validation_alias=AliasChoices("split_type", "splitType")
    )

    # None: derive from split_details, then from the roster. [] means nobody.
    participants: Optional[List[str]] = None
    split_details: Dict[str, ShareDetail] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("split_details", "splitDetails")
    )

    model_config = ConfigDict(from_attributes=True)

    @field_validator("split_type", mode="before")
    @classmethod
    def normalize_split_type(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def participating_members(self, roster: Sequence[str]) -> List[str]:
        """Members sharing this expense."""
        if self.participants is not None:
            return list(self.participants)
        if self.split_details:
            return list(self.split_details)
        return list(roster)
