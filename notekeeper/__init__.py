"""
Notekeeper.

- backend/: API, database models, repositories, services, configuration
"""
