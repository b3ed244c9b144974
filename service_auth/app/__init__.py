"""
Auth Service package for Moment.

This package exposes the FastAPI application that creates subjects and
logs them in. It is intentionally small and focused:

- app.main: Application entrypoint that wires routes and lifecycle.
- app.schema: Declared request shapes and their flattening.
- app.validation: Strict request shape validation.
- app.tokens: RS256 identity token issuance.
- app.users: Credential gateway clients (user service, in-memory).

Design notes:
- Keep the package import side-effects minimal; module import must not
  perform IO. The signing key is read once when the service is built.
- Use the shared/ utilities for logging, metrics, tracing, and errors.
- Treat this package as stateless; issued tokens are never tracked.
"""
