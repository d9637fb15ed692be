"""Progression rules: XP award and access levels.

Levels are a pure function of completed work cycles:

    pomodoros   title   level
    0-4         GUEST   1
    5-14        SUDO    2
    15+         ROOT    3
"""

XP_PER_POMODORO = 100

# Minimum completed pomodoros for each title, highest first
LEVEL_THRESHOLDS: tuple[tuple[str, int, int], ...] = (
    ("ROOT", 15, 3),
    ("SUDO", 5, 2),
    ("GUEST", 0, 1),
)

LEVEL_LABELS = {
    "GUEST": "GUEST USER",
    "SUDO": "SUDO USER",
    "ROOT": "ROOT ACCESS",
}


def level_title(pomodoros_completed: int) -> str:
    """Return GUEST, SUDO or ROOT for a number of completed pomodoros."""
    for title, threshold, _ in LEVEL_THRESHOLDS:
        if pomodoros_completed >= threshold:
            return title
    return "GUEST"


def level_number(pomodoros_completed: int) -> int:
    """Return the numeric level (1-3) using the same thresholds as level_title."""
    for _, threshold, number in LEVEL_THRESHOLDS:
        if pomodoros_completed >= threshold:
            return number
    return 1


def level_label(pomodoros_completed: int) -> str:
    """Return the display label, e.g. ``SUDO USER``."""
    return LEVEL_LABELS[level_title(pomodoros_completed)]
