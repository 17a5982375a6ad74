"""
Persistence layer: engine/session setup, models, schemas, repositories and
transaction scopes.
"""
