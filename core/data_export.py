"""
Data export module for pricing and optimization results.

This module provides CSV export functionality for:
- Per-flight price history
- Batch price updates
- What-if simulation results

and pandas DataFrame helpers for interactive analysis.
"""

import csv
from pathlib import Path
from typing import List, Dict, Any, Iterable, Mapping
import logging

import pandas as pd

from core.models import PriceUpdate, WhatIfSimulation

logger = logging.getLogger(__name__)


PRICE_UPDATE_COLUMNS = [
    'flight_id', 'timestamp', 'valid_until', 'old_price', 'new_price',
    'discount', 'adjustment_factor', 'reason'
]

SIMULATION_COLUMNS = [
    'scenario_id',
    'baseline_revenue', 'simulated_revenue',
    'baseline_load_factor', 'simulated_load_factor',
    'baseline_empty_seats', 'simulated_empty_seats',
    'baseline_operating_costs', 'simulated_operating_costs',
    'revenue_gain', 'load_factor_gain', 'empty_seats_reduction',
    'cost_savings', 'roi'
]


def _price_update_row(update: PriceUpdate) -> Dict[str, Any]:
    return {
        'flight_id': update.flight_id,
        'timestamp': update.timestamp.isoformat(),
        'valid_until': update.valid_until.isoformat(),
        'old_price': update.old_price,
        'new_price': update.new_price,
        'discount': update.discount,
        'adjustment_factor': round(update.adjustment_factor, 4),
        'reason': update.reason,
    }


def _simulation_row(simulation: WhatIfSimulation) -> Dict[str, Any]:
    baseline = simulation.baseline_metrics
    simulated = simulation.simulated_metrics
    improvements = simulation.improvements
    return {
        'scenario_id': simulation.scenario_id,
        'baseline_revenue': baseline.total_revenue,
        'simulated_revenue': simulated.total_revenue,
        'baseline_load_factor': round(baseline.average_load_factor, 2),
        'simulated_load_factor': round(simulated.average_load_factor, 2),
        'baseline_empty_seats': baseline.total_empty_seats,
        'simulated_empty_seats': simulated.total_empty_seats,
        'baseline_operating_costs': baseline.operating_costs,
        'simulated_operating_costs': simulated.operating_costs,
        'revenue_gain': improvements.revenue_gain,
        'load_factor_gain': round(improvements.load_factor_gain, 2),
        'empty_seats_reduction': improvements.empty_seats_reduction,
        'cost_savings': improvements.cost_savings,
        'roi': round(improvements.roi, 2),
    }


def price_updates_to_frame(updates: Iterable[PriceUpdate]) -> pd.DataFrame:
    """Price updates as a DataFrame, one row per update."""
    frame = pd.DataFrame([_price_update_row(u) for u in updates], columns=PRICE_UPDATE_COLUMNS)
    frame['timestamp'] = pd.to_datetime(frame['timestamp'])
    frame['valid_until'] = pd.to_datetime(frame['valid_until'])
    return frame


def simulations_to_frame(simulations: Mapping[str, WhatIfSimulation]) -> pd.DataFrame:
    """What-if simulations as a DataFrame indexed by scenario id."""
    frame = pd.DataFrame(
        [_simulation_row(s) for s in simulations.values()],
        columns=SIMULATION_COLUMNS
    )
    return frame.set_index('scenario_id')


class PricingDataExporter:
    """
    Export pricing data to CSV files.

    Creates structured CSV files for analysis:
    - price_history.csv: Every recorded price, grouped by flight
    - price_updates.csv: Updates collected from batch runs
    - simulations.csv: Baseline vs simulated metrics per scenario
    """

    def __init__(self, output_dir: str = "pricing_results"):
        """
        Initialize data exporter.

        Args:
            output_dir: Directory to save CSV files
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        # Data collectors
        self.updates: List[PriceUpdate] = []
        self.simulations: Dict[str, WhatIfSimulation] = {}

        logger.info(f"Data exporter initialized. Output directory: {self.output_dir}")

    def add_updates(self, updates: Iterable[PriceUpdate]) -> None:
        """Record price updates from a batch run."""
        self.updates.extend(updates)

    def add_simulations(self, simulations: Mapping[str, WhatIfSimulation]) -> None:
        """Record what-if simulations, replacing earlier runs of the same scenario."""
        self.simulations.update(simulations)

    def _write_rows(self, filename: str, columns: List[str], rows: Iterable[Dict[str, Any]]) -> str:
        filepath = self.output_dir / filename

        with open(filepath, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=columns)
            writer.writeheader()
            for row in rows:
                writer.writerow(row)

        return str(filepath)

    def export_price_history(self, history, filename: str = "price_history.csv") -> str:
        """
        Export a price history store.

        Args:
            history: PriceHistoryStore to export
            filename: Output file name

        Returns:
            Path to created file
        """
        rows = (
            _price_update_row(update)
            for flight_id in history.flight_ids()
            for update in history.get(flight_id)
        )
        filepath = self._write_rows(filename, PRICE_UPDATE_COLUMNS, rows)
        logger.info(f"Exported price history to {filepath}")
        return filepath

    def export_price_updates(self, filename: str = "price_updates.csv") -> str:
        filepath = self._write_rows(
            filename, PRICE_UPDATE_COLUMNS, (_price_update_row(u) for u in self.updates)
        )
        logger.info(f"Exported {len(self.updates)} price updates to {filepath}")
        return filepath

    def export_simulations(self, filename: str = "simulations.csv") -> str:
        filepath = self._write_rows(
            filename, SIMULATION_COLUMNS,
            (_simulation_row(s) for s in self.simulations.values())
        )
        logger.info(f"Exported {len(self.simulations)} simulations to {filepath}")
        return filepath

    def export_all(self, history=None) -> Dict[str, str]:
        """
        Export all collected data to CSV files.

        Args:
            history: Optional PriceHistoryStore to include

        Returns:
            Dictionary mapping data type to file path
        """
        exports = {}

        if history is not None and len(history):
            exports['price_history'] = self.export_price_history(history)

        if self.updates:
            exports['price_updates'] = self.export_price_updates()

        if self.simulations:
            exports['simulations'] = self.export_simulations()

        logger.info(f"Exported {len(exports)} data files to {self.output_dir}")
        return exports

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics of collected data."""
        return {
            'updates_count': len(self.updates),
            'simulations_count': len(self.simulations),
            'output_directory': str(self.output_dir)
        }
