from __future__ import annotations

class FalgenError(RuntimeError):
    """Base error for falgen I/O seams (catalog, request building)."""

class CatalogError(FalgenError):
    pass

class RequestError(FalgenError):
    pass
