# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env` for everything. This file should contain only quick connector toggles.
"""

# Example: run the HTTP API only (no console REPL)
# CONSOLE_ENABLED = False

# Example: console only, no HTTP server
# HTTP_ENABLED = False

# Example: move the API to another port
# HTTP_PORT = 8080
