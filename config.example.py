# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKPAD_APP_NAME": "Title shown above the list (default: Task Manager).",
    "TASKPAD_LOG_LEVEL": "Console logging level (default: WARNING). The log file always gets DEBUG.",
    # Storage (gitignored)
    "TASKPAD_DATA_DIR": "Local data directory (default: .local/taskpad).",
    "TASKPAD_STORE_BACKEND": "Preference store backend: sqlite | json (default: sqlite).",
    "TASKPAD_PREFS_DB_PATH": "SQLite store path (default: <data_dir>/prefs.sqlite3).",
    "TASKPAD_PREFS_JSON_PATH": "JSON store path (default: <data_dir>/prefs.json).",
    # Console
    "TASKPAD_CONFIRM_DELETE": "Ask before deleting a task (true/false, default: true).",
    "TASKPAD_COLOR": "ANSI colors on a TTY (true/false, default: true unless NO_COLOR is set).",
}
