# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TRACKER_APP_NAME": "App display name (default: tracker).",
    "TRACKER_LOG_LEVEL": "Console logging level (default: WARNING; the log file gets DEBUG).",
    "TRACKER_DATA_DIR": "Local data directory for logs (default: .local/tracker).",
    # Front-end
    "TRACKER_CONSOLE_ENABLED": "Run the console REPL (true/false, default: true).",
    "TRACKER_SEED_SAMPLE_DATA": "Seed demo habits/tasks on start (true/false, default: true).",
    # Task filters
    "TRACKER_DEFAULT_PERIOD": (
        "Period restored when a date filter is enabled: "
        "all_time|current_year|current_month|current_week|today (default: current_month)."
    ),
    "TRACKER_CUSTOM_YEAR_MIN": "Lowest year accepted for a custom range (default: 1900).",
    "TRACKER_CUSTOM_YEAR_MAX": "Highest year accepted for a custom range (default: 2100).",
}
