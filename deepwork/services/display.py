"""Formatting helpers for the terminal screen."""

from deepwork.services.progression import level_label

PHASE_LABELS = {
    "WORK": "WORK",
    "SHORT_BREAK": "SHORT BREAK",
    "LONG_BREAK": "LONG BREAK",
}


def format_time(seconds: int) -> str:
    """Format seconds as zero-padded ``MM:SS`` (minutes may exceed 99)."""
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def progress_fraction(remaining: int, total: int) -> float:
    """Fraction of the phase already elapsed, clamped to [0, 1].

    A zero-length phase counts as complete.
    """
    if total <= 0:
        return 1.0
    return max(0.0, min(1.0, (total - remaining) / total))


def progress_bar(fraction: float, width: int = 20) -> str:
    """Render e.g. ``[########------------] 40%``."""
    fraction = max(0.0, min(1.0, fraction))
    filled = round(fraction * width)
    return f"[{'#' * filled}{'-' * (width - filled)}] {round(fraction * 100)}%"


def render_screen(snapshot: dict, log_lines: int = 10) -> str:
    """Render a controller snapshot as plain terminal text."""
    session = snapshot["session"]
    stats = snapshot["stats"]
    settings = snapshot["settings"]
    user = snapshot["identity"]["username"] or "UNKNOWN"

    lines = [
        f"USER: {user}@deepwork  LEVEL: {level_label(stats['pomodoros_completed'])}  "
        f"XP: {stats['xp']}",
        f"UPTIME: {format_time(stats['total_work_seconds'])}  AMB: {snapshot['ambience']}",
        "",
        f"[ {PHASE_LABELS[session['phase']]} ] {'RUNNING' if session['running'] else 'PAUSED'}",
        f"    {session['display']}",
        f"    {progress_bar(session['progress'], 30)}",
        f"    CYCLES: {session['cycles_completed_in_window']} / "
        f"{settings['cycles_before_long_break']}",
    ]
    if snapshot.get("quote") and session["phase"] != "WORK":
        lines.append(f'    "{snapshot["quote"]}"')

    lines.extend(["", "[ OBJECTIVE_MODULE ]"])
    if not snapshot["tasks"]:
        lines.append("  NO OBJECTIVES DETECTED.")
    for task in snapshot["tasks"]:
        mark = "x" if task["completed"] else " "
        lines.append(f"  [{mark}] {task['text']}")

    lines.extend(["", "[ LOG ]"])
    for entry in snapshot["log"][-log_lines:]:
        lines.append(f"  [{entry['timestamp']}] {entry['kind']}: {entry['message']}")

    return "\n".join(lines) + "\n"
