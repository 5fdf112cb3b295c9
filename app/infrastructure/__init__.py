"""
Infrastructure layer for the HR self-service portal.

This layer contains the implementation details for external systems integration:
- Database (SQLAlchemy) and in-memory stores
- Authentication (JWT bearer tokens, werkzeug password hashes)
- File Storage (Supabase Storage or a local directory)
- The FastAPI web layer

The infrastructure layer implements interfaces defined in the domain layer,
following the Dependency Inversion Principle of Clean Architecture.
"""
