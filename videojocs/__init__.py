"""
Videojocs application package.

Uses the same layered architecture as the rest of the project:

  videojocs/repositories/  - pure I/O: reading and rewriting the JSON catalog file.
  videojocs/services/      - business logic: id assignment, seeding, queries.

``videojocs_server.create_app`` is the integration point: it builds the
repository and service for one storage path and hands the service to the
Flask route handlers, keeping the HTTP layer out of the domain.
"""
