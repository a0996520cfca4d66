"""
healthbeat - Source Code Root Module

Periodic liveness and latency probing for HTTP endpoints and databases.

Layer Structure:
- Domain: Monitoring entities, probe ports and repository interfaces
- Application: Health check dispatch and catalog use cases, DTOs
- Infrastructure: Probes, MongoDB repositories, schedulers and Celery tasks
- Presentation: Controllers for the REST API
- Shared: Cross-cutting concerns and shared utilities
- Main: Composition root, application entry point and configuration
"""
