"""
End-of-game score report (printed to the console after the window closes).
"""
from game.sim.contracts import GameSummary

_REASONS = {
    "caught": "Caught by an enemy!",
    "completed": "You escaped the final level!",
    "level_unavailable": "The next level could not be loaded.",
    "quit": "Game abandoned.",
}


def format_report(summary: GameSummary) -> str:
    lines = ["********** GAME OVER **********"]
    reason = _REASONS.get(summary.reason or "")
    if reason:
        lines.append(reason)
    lines += [
        "",
        "Your Score:",
        f"Levels played:   {summary.levels_played}/{summary.num_levels}",
        f"Coins collected: {summary.coins_collected}",
        "",
        "******************************",
    ]
    return "\n".join(lines)


def print_report(summary: GameSummary) -> None:
    print(format_report(summary))
