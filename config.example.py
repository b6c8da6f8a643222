# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKBOARD_APP_NAME": "App display name, also the OpenAPI title (default: taskboard).",
    "TASKBOARD_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Connectors
    "TASKBOARD_CONSOLE_ENABLED": "Enable the console REPL (true/false, default: true).",
    "TASKBOARD_HTTP_ENABLED": "Enable the HTTP API (true/false, default: true).",
    # HTTP API
    "TASKBOARD_HTTP_HOST": "Bind address (default: 127.0.0.1).",
    "TASKBOARD_HTTP_PORT": "Bind port (default: 5000).",
    "TASKBOARD_CORS_ORIGINS": "Comma/space separated allowed origins (default: *).",
    # Paths (gitignored)
    "TASKBOARD_DATA_DIR": "Local data directory (default: .local/taskboard).",
    "TASKBOARD_LOG_DIR": "Log directory (default: <data_dir>/logs).",
}
