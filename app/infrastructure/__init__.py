"""Infrastructure modules for the translation service.

Centralized infrastructure components:
- configuration: Settings management
- logging: Structured logging and request context
- operations: Operation results returned by infrastructure clients
- clients: AWS service clients
- services: Dependency injection services (SettingsDep, get_settings)
"""
