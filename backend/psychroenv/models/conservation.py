"""
Pydantic models for collection risk metrics.
"""

from typing import Optional

from pydantic import BaseModel, Field

from psychroenv.config import (
    PI_ACTIVATION_ENERGY,
    IPI_ACTIVATION_ENERGY,
    LM_ACTIVATION_ENERGY,
)
from psychroenv.models.state import Observation


class ConservationInput(BaseModel):
    """Input for the collection risk metrics of one observation."""

    observation: Observation
    pi_activation_energy: float = Field(
        default=PI_ACTIVATION_ENERGY, gt=0.0, description="Preservation Index Ea (J/mol)"
    )
    ipi_activation_energy: float = Field(
        default=IPI_ACTIVATION_ENERGY, gt=0.0, description="IPI kinetics Ea (J/mol)"
    )
    lm_activation_energy: float = Field(
        default=LM_ACTIVATION_ENERGY, gt=0.0,
        description="Lifetime multiplier Ea (kJ/mol); 100 paper, 70 varnish",
    )


class ConservationMetrics(BaseModel):
    """Deterioration indicators for one reading. None where undefined."""

    preservation_index: Optional[float] = Field(
        None, description="Expected lifetime of acetate film (years)"
    )
    ipi_preservation_index: Optional[float] = Field(
        None, description="Years to a defined state of deterioration (IPI kinetics)"
    )
    lifetime_multiplier: Optional[float] = Field(
        None, description="Lifetime relative to 20°C / 50% RH"
    )
    emc_wood: Optional[float] = Field(
        None, description="Equilibrium moisture content of wood (%)"
    )
