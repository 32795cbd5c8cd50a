"""
Task Manager TUI - terminal front end for the task list.

Architecture:
- providers.py: Data access protocol + TaskInfo snapshots
- store_provider.py: Provider backed by the task file
- views/: Textual screen/widget components
- app.py: Main application entry point
"""
