from __future__ import annotations

from dataclasses import dataclass

from ..domain import (
    AssetPrice,
    CalculationResult,
    DistributionInputs,
    DistributionState,
)
from ..state import AppState


@dataclass
class PipelineContext:
    state: AppState
    account_id: str
    distribution_id: int
    database: str | None = None
    asset_prices: tuple[AssetPrice, ...] | None = None
    distribution_state: DistributionState | None = None
    inputs: DistributionInputs | None = None
    results: CalculationResult | None = None

    @property
    def distribution_state_required(self) -> DistributionState:
        if self.distribution_state is None:
            raise RuntimeError(
                "Distribution state has not been set. Ensure fetch_inputs() is called before accessing this property."
            )
        return self.distribution_state

    @property
    def inputs_required(self) -> DistributionInputs:
        if self.inputs is None:
            raise RuntimeError(
                "Calculation inputs have not been set. Ensure fetch_inputs() is called before accessing this property."
            )
        return self.inputs

    @property
    def results_required(self) -> CalculationResult:
        if self.results is None:
            raise RuntimeError(
                "Calculation results have not been set. Ensure compute_rewards() is called before accessing this property."
            )
        return self.results
