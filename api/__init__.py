"""
Merkle Vault HTTP API (FastAPI)

- POST /upload - Store a file
- GET /download/{index} - Fetch a stored file
- GET /proof/{index} - Inclusion proof for a stored file
- GET /root - Current root digest
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
