"""
Application Layer

Contains the services that orchestrate domain objects and infrastructure.

Structure:
- services/: Player controller, device synchronizer, channel session, chat pipeline
- interfaces/: Port interfaces for infrastructure adapters
"""
