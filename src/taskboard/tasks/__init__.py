"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, TaskPriority) and wire encoding
- task_store.py: in-memory storage + search/filter queries
- task_api.py: small high-level helpers used by the connectors
"""
