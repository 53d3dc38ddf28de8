"""
Preference persistence.

Components:
- persisted.py: shared load/save discipline for one store key
- theme.py: dark/light theme flag
- sqlite_store.py / json_store.py: PreferenceStore backends
"""
