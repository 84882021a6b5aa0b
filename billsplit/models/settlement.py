from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Transfer(BaseModel):
    """One payment of the settlement plan: debtor pays creditor amount."""
    from_participant: str = Field(alias="from")
    to_participant: str = Field(alias="to")
    amount: Decimal = Field(gt=0)

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @model_validator(mode="after")
    def check_not_self(self) -> "Transfer":
        if self.from_participant == self.to_participant:
            raise ValueError(f"'{self.from_participant}' cannot transfer to themselves")
        return self
