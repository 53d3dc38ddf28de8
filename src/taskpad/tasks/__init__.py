"""
Task subsystem.

Components:
- task_models.py: data structure (Task)
- task_codec.py: lenient JSON encoding of the task sequence
- task_list.py: in-memory list manager with fire-and-forget persistence
"""
