"""Quiz-related constants shared across UI and core layers."""

BASE_POINTS_EASY: int = 100
BASE_POINTS_MEDIUM: int = 200
BASE_POINTS_HARD: int = 300
SPEED_MULTIPLIER_FLOOR: float = 0.5

TIMER_INTERVAL_MS: int = 1000
TIME_LIMIT_WARNING_WINDOW_SECONDS: int = 9

NOTIFICATION_DURATION_MS: int = 3000
NOTIFICATION_STAGGER_MS: int = 500

PASSING_PERCENTAGE: int = 70
XP_PER_POINT: float = 0.1
