"""
Owner-scoped record resources (ideas, notes, goals, deadlines, events, ...).

Each resource is described once in `resources.py`; the repository and router
are generic over that description.
"""
