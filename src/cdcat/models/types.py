"""Pydantic models for CAT simulation configuration.

These blocks travel with every simulation result and are
attached unchanged to single-record summaries.
"""

from pydantic import BaseModel, ConfigDict, Field


class FitControl(BaseModel):
    """Estimation fit configuration of the calibrated item bank."""

    model_config = ConfigDict(frozen=True)

    max_iterations: int | None = Field(default=None, ge=0)


class Specifications(BaseModel):
    """Specifications of one CAT application."""

    model_config = ConfigDict(frozen=True)

    fixed_length: bool
    max_items: int = Field(gt=0)
    model: str
    fit: FitControl | None = None

    @property
    def uses_true_parameters(self) -> bool:
        """Whether the bank was fitted with zero iterations (true item parameters)."""
        return self.fit is not None and self.fit.max_iterations == 0
