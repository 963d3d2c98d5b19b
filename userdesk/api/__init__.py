"""HTTP API layer built on FastAPI.

Key components:
- **main**: Application factory and lifecycle
- **routes**: The users router
- **validation**: Schema validation gate for request bodies
- **handlers**: Semantic checks and users service delegation
- **middleware**: Security headers, correlation IDs, request logging and
  centralized error handling
- **schemas**: Pydantic request, response and error models
- **utils**: orjson-backed response class
"""
