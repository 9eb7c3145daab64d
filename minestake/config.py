"""
Default settings for MineStake.

Values here are the defaults used by the CLI; command-line flags in
``minestake.cli`` override them for a single session.
"""

# Currency shown in prompts, messages and the game log
CURRENCY = "Rs."

# Round rules
GAME_CONFIG = {
    "player_name": "Player",
    "starting_balance": 1000.0,
    "min_mines": 2,
    "max_mines": 10,
    "base_multiplier": 1.0,
    "multiplier_step": 0.25,    # added per safe reveal
}

# Cosmetic terminal pacing (seconds)
ANIMATION_CONFIG = {
    "enabled": True,
    "loading_message": "Placing mines",
    "loading_dots": 3,
    "dot_delay": 0.5,
    "done_delay": 0.3,
    "status_message": "Game Started!",
    "status_delay": 0.1,
}

# Append-only round history
HISTORY_CONFIG = {
    "log_file": "game_log.txt",
    "display_count": 5,
}

# Placement search limits
PLACEMENT_CONFIG = {
    "max_backtrack_steps": 200_000,    # constraint strategy, shared across seeds
    "attempts_per_cell": 10,           # min-distance strategy samples size*size*this per level
}
