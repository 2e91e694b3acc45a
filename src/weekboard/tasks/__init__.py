"""
Task subsystem.

Components:
- task_models.py: data structures (Task, EditSession)
- task_store.py: in-memory ordered collection + mutation operations
- persistence.py: key-value storage adapters and the JSON task mirror
- weekly_policy.py: pure Sunday-reset / urgent-window time rules
- completion.py: completion percentage and the celebration gate
- reset_scheduler.py: polling loop that applies the weekly reset
"""
