"""Achievement definitions."""

from dataclasses import dataclass

FIRST_WORKOUT = "first_workout"
WEEK_WARRIOR = "week_warrior"
CONSISTENCY_KING = "consistency_king"

WEEK_WARRIOR_SESSIONS = 5
CONSISTENCY_KING_STREAK = 30


@dataclass(frozen=True)
class AchievementDefinition:
    id: str
    title: str
    description: str
    emoji: str
    required_value: int


ACHIEVEMENTS: tuple[AchievementDefinition, ...] = (
    AchievementDefinition(
        id=FIRST_WORKOUT,
        title="First Workout",
        description="Log your first workout session",
        emoji="🎯",
        required_value=1,
    ),
    AchievementDefinition(
        id=WEEK_WARRIOR,
        title="Week Warrior",
        description=f"Complete {WEEK_WARRIOR_SESSIONS} workouts in a single week",
        emoji="⚔️",
        required_value=WEEK_WARRIOR_SESSIONS,
    ),
    AchievementDefinition(
        id=CONSISTENCY_KING,
        title="Consistency King",
        description=f"Train {CONSISTENCY_KING_STREAK} days in a row",
        emoji="👑",
        required_value=CONSISTENCY_KING_STREAK,
    ),
)

ACHIEVEMENTS_BY_ID: dict[str, AchievementDefinition] = {a.id: a for a in ACHIEVEMENTS}
