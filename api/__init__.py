"""
Module 08 - Minimal API (FastAPI)

HTTP API for the encoding and commitment library:
- POST /convert - Convert between binary, decimal and hex
- POST /encode - Pack a magnitude into field elements
- POST /decode - Reassemble a magnitude from field elements
- POST /hash - Chained commitment hash
- GET /leaf-index/{count} - Resolve a tree leaf index
- POST /verify - Check a received commitment
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
