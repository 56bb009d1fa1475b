"""
Opportunity qualification policy.
"""
from pydantic import BaseModel, ConfigDict, Field


class QualificationPolicy(BaseModel):
    """Decides whether an evaluated spread is worth reporting."""
    model_config = ConfigDict(frozen=True)

    min_profit: float = Field(default=0.3, description="Minimum net profit percentage")
    show_all: bool = Field(default=False, description="Accept every evaluated pair")

    def accepts(self, net_profit_percent: float) -> bool:
        return self.show_all or net_profit_percent >= self.min_profit
