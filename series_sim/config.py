"""
Simulation tunables
Period lengths, possession counts and rotation constants in one place
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class SimConfig:
    """Knobs shared by the period simulator, rotation manager and game driver"""
    regulation_possessions: int = 48  # 12-minute quarter
    overtime_possessions: int = 20  # 5-minute overtime
    regulation_minutes: int = 12
    overtime_minutes: int = 5
    regulation_periods: int = 4
    rotation_periods: Tuple[int, ...] = (1, 2, 3)  # Lineups re-picked only after these
    bench_recovery: int = 25  # Stamina regained per boundary on the bench
    handler_stamina_cost: int = 2
    defender_stamina_cost: int = 1
    foul_trouble: int = 4  # Personal fouls before the rotation benches a player
    wins_to_clinch: int = 4  # Best of seven

    def is_overtime(self, period: int) -> bool:
        return period > self.regulation_periods

    def possessions_for(self, period: int) -> int:
        """Number of possessions simulated in the given period"""
        if self.is_overtime(period):
            return self.overtime_possessions
        return self.regulation_possessions

    def minutes_for(self, period: int) -> int:
        """Minutes every on-court player accrues for the given period"""
        if self.is_overtime(period):
            return self.overtime_minutes
        return self.regulation_minutes


DEFAULT_CONFIG = SimConfig()
