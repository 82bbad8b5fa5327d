"""
Core wiring.

- ports.py: Protocols for the persistence and notification collaborators
- state.py: AppState shared by the CLI and connectors
"""
