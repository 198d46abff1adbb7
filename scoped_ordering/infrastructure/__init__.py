"""
Infrastructure layer.

The infrastructure layer implements the ports defined in the application
layer:

- Persistence (SQLAlchemy resolvers, position store, repository)
- Web framework (FastAPI router and schemas)
- Dependency injection glue

This layer depends on domain and application layers,
but they do not depend on it.
"""
