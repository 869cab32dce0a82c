# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKTRACK_APP_NAME": "App display name (default: tasktrack).",
    "TASKTRACK_LOG_LEVEL": "Console logging level (default: INFO).",
    # Connectors
    "TASKTRACK_CONSOLE_ENABLED": "Run the console REPL (true/false, default: true).",
    # Storage (gitignored)
    "TASKTRACK_PERSIST": "Save every change to the task file (true/false, default: true).",
    "TASKTRACK_DATA_DIR": "Local data directory for the task file and logs (default: .local/tasktrack).",
    "TASKTRACK_SAVE_PATH": "Task file path (default: <data_dir>/tasks.csv).",
    # Tuning
    "TASKTRACK_HISTORY_LIMIT": "How many recently viewed entities to keep (default: 10).",
}
