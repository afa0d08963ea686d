"""
Kitchen OS back-office API.

- models: SQLAlchemy ORM models
- repositories: data access with eager loading
- schemas: pydantic request/response models
- services: costing, recipe numbering, form mapping, domain services, exports
- routers: thin FastAPI routers under /api
"""
