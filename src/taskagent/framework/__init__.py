"""
Framework services shared by the agent: structured, task-aware logging.
"""
