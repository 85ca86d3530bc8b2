"""Phased implementation roadmap for optimization scenarios."""

from dataclasses import dataclass
from typing import List, Sequence

from core.models import ComplexityTier, OptimizationScenario, RoadmapPhase


@dataclass(frozen=True)
class PhaseTemplate:
    phase: str
    complexity: ComplexityTier
    duration: str
    expected_benefits: str


ROADMAP_PHASES = (
    PhaseTemplate(
        phase="Phase 1: Quick Wins",
        complexity=ComplexityTier.LOW,
        duration="1-3 weeks",
        expected_benefits="Immediate load factor improvements with minimal disruption"
    ),
    PhaseTemplate(
        phase="Phase 2: Strategic Adjustments",
        complexity=ComplexityTier.MEDIUM,
        duration="4-8 weeks",
        expected_benefits="Significant revenue gains through schedule and capacity optimization"
    ),
    PhaseTemplate(
        phase="Phase 3: Structural Changes",
        complexity=ComplexityTier.HIGH,
        duration="6-12 weeks",
        expected_benefits="Long-term efficiency gains through route consolidation and network redesign"
    ),
)


class RoadmapPlanner:
    """Group scenarios into three phases by implementation complexity."""

    @staticmethod
    def plan(scenarios: Sequence[OptimizationScenario]) -> List[RoadmapPhase]:
        """
        Build the roadmap.

        Every scenario lands in exactly one phase, keeping input order
        within a phase. Phases are always returned, even when empty.
        """
        return [
            RoadmapPhase(
                phase=template.phase,
                complexity=template.complexity,
                scenarios=[s for s in scenarios if s.implementation_complexity == template.complexity],
                duration=template.duration,
                expected_benefits=template.expected_benefits
            )
            for template in ROADMAP_PHASES
        ]
