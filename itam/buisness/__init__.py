"""
Domain layer for asset management system.
Contains business logic, factories, services, and domain entities
separated from data persistence concerns.
"""

