"""Translations module.

Stores multilingual snippets identified by (key, locale), groups them with
reusable tags and serves them through lookup, search and export.

Layout:
  - domain: immutable models and the error taxonomy
  - persistence: storage backends (in-memory, DynamoDB)
  - core: store, tag resolver, search engine, cache, export, service facade
  - api: FastAPI routes, schemas and exception handlers
  - seeder: synthetic data generator for load testing
"""
