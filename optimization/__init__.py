"""
Route optimization and what-if simulation.

This package provides:
- Optimization scenario generation
- Baseline vs simulated fleet metrics
- Phased implementation roadmaps
- Per-route schedule analysis
"""

from .scenarios import ScenarioGenerator, ScenarioKind, SCENARIO_DEFINITIONS
from .whatif import WhatIfSimulator, compute_roi
from .roadmap import RoadmapPlanner
from .route_analyzer import RouteAnalyzer

__all__ = [
    'ScenarioGenerator',
    'ScenarioKind',
    'SCENARIO_DEFINITIONS',
    'WhatIfSimulator',
    'compute_roi',
    'RoadmapPlanner',
    'RouteAnalyzer'
]
