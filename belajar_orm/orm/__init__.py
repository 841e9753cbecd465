"""
This orm module contains the ORM (Object-Relational Mapping) models and the data access layer
exercised by belajar-orm against a PostgreSQL (or SQLite) database.
It contains the mapped models, soft-delete filtering, query scopes, repositories,
Unit of Work patterns, services and database connection utilities.
"""
