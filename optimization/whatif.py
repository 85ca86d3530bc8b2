"""
What-if simulation of optimization scenarios.

A scenario is applied to copies of the flights and fleet metrics are
compared before and after. Catalog flights are never modified.
"""

from dataclasses import replace
from typing import Dict, List, Optional, Sequence
import logging

from core.config import PricingConfig
from core.models import (
    Flight, OptimizationScenario, FleetMetrics, SimulationImprovements,
    WhatIfSimulation
)
from pricing.calculator import round_half_up


# Booking uplift assumed by each kind of change
AIRCRAFT_CHANGE_UPLIFT = 1.1
SCHEDULE_CHANGE_UPLIFT = 1.15


def compute_roi(revenue_gain: float, cost_savings: float) -> float:
    """Return on investment as a percentage of cost savings (floored at 1)."""
    return revenue_gain / max(1, cost_savings) * 100


class WhatIfSimulator:
    """
    Compare baseline and simulated fleet metrics for scenarios.

    Only aircraft changes and schedule adjustments affect the simulated
    flights; frequency changes and consolidations are reported by the
    scenario but not simulated.
    """

    def __init__(self, config: Optional[PricingConfig] = None):
        self.config = config or PricingConfig()
        self.logger = logging.getLogger('WhatIfSimulator')

    def calculate_metrics(self, flights: Sequence[Flight]) -> FleetMetrics:
        """
        Aggregate revenue, load factor, empty seats and operating cost.

        Args:
            flights: Flights to aggregate

        Returns:
            FleetMetrics (load factor is 0 when there are no seats)
        """
        total_revenue = sum(f.booked_seats * f.price for f in flights)
        total_seats = sum(f.total_seats for f in flights)
        booked_seats = sum(f.booked_seats for f in flights)

        return FleetMetrics(
            total_revenue=total_revenue,
            average_load_factor=booked_seats / total_seats * 100 if total_seats else 0.0,
            total_empty_seats=total_seats - booked_seats,
            operating_costs=len(flights) * self.config.operating_cost_per_flight
        )

    @staticmethod
    def apply_changes(flights: Sequence[Flight], scenario: OptimizationScenario) -> List[Flight]:
        """
        Apply a scenario's aircraft and schedule changes to copies of the flights.

        Changes referencing unknown flights are ignored.
        """
        simulated = list(flights)
        index = {f.id: i for i, f in enumerate(simulated)}
        changes = scenario.changes

        for change in changes.aircraft_changes or []:
            i = index.get(change.flight_id)
            if i is None:
                continue
            flight = simulated[i]
            simulated[i] = replace(
                flight,
                aircraft=change.new_aircraft,
                total_seats=change.new_capacity,
                booked_seats=min(
                    change.new_capacity,
                    round_half_up(flight.booked_seats * AIRCRAFT_CHANGE_UPLIFT)
                )
            )

        for adjustment in changes.schedule_adjustments or []:
            i = index.get(adjustment.flight_id)
            if i is None:
                continue
            flight = simulated[i]
            simulated[i] = replace(
                flight,
                departure_time=adjustment.new_departure_time,
                arrival_time=adjustment.new_arrival_time,
                # Cannot book past capacity
                booked_seats=min(
                    flight.total_seats,
                    round_half_up(flight.booked_seats * SCHEDULE_CHANGE_UPLIFT)
                )
            )

        return simulated

    def simulate(self, flights: Sequence[Flight], scenario: OptimizationScenario) -> WhatIfSimulation:
        """
        Run one scenario against a flight set.

        Args:
            flights: Baseline flights
            scenario: Scenario to apply

        Returns:
            WhatIfSimulation with baseline, simulated metrics and improvements
        """
        baseline = self.calculate_metrics(flights)
        simulated = self.calculate_metrics(self.apply_changes(flights, scenario))

        revenue_gain = simulated.total_revenue - baseline.total_revenue
        cost_savings = baseline.operating_costs - simulated.operating_costs

        improvements = SimulationImprovements(
            revenue_gain=revenue_gain,
            load_factor_gain=simulated.average_load_factor - baseline.average_load_factor,
            empty_seats_reduction=baseline.total_empty_seats - simulated.total_empty_seats,
            cost_savings=cost_savings,
            roi=compute_roi(revenue_gain, cost_savings)
        )

        self.logger.debug(
            f"Scenario {scenario.id}: revenue {revenue_gain:+,.0f}, "
            f"load factor {improvements.load_factor_gain:+.1f}pp"
        )

        return WhatIfSimulation(
            scenario_id=scenario.id,
            baseline_metrics=baseline,
            simulated_metrics=simulated,
            improvements=improvements
        )

    def simulate_all(
        self,
        flights: Sequence[Flight],
        scenarios: Sequence[OptimizationScenario]
    ) -> Dict[str, WhatIfSimulation]:
        """Simulate every scenario, keyed by scenario id."""
        results = {s.id: self.simulate(flights, s) for s in scenarios}
        self.logger.info(f"Simulated {len(results)} scenarios over {len(flights)} flights")
        return results
