"""
Infrastructure layer for the task management service.

This layer contains the implementation details behind the domain ports:
- In-memory task storage guarded by a readers-writer lock
- Request validation
- The HTTP surface (FastAPI routers and middleware)

The infrastructure layer implements interfaces defined in the domain layer,
following the Dependency Inversion Principle of Clean Architecture.
"""
