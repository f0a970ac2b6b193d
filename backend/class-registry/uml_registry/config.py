from __future__ import annotations
import os

API_TITLE = "UML Class Registry API"
API_VERSION = "1.0"

CORS_ORIGINS = ["http://localhost:5173", "http://localhost:3000"]

LOG_LEVEL = os.getenv("UML_REGISTRY_LOG_LEVEL", "INFO").upper()

# defaults for request bodies only; the data model takes whatever it is given
DEFAULT_VISIBILITY = "public"
DEFAULT_MULTIPLICITY = "1"
DEFAULT_NAVIGABILITY = "unidirectional"
