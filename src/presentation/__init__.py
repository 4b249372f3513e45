"""
Presentation Layer - HTTP interface of the workflow.

FastAPI routers, request/response schemas and error mapping.
"""
