from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from uml_registry.config import (
    API_TITLE,
    API_VERSION,
    CORS_ORIGINS,
    LOG_LEVEL,
    DEFAULT_VISIBILITY,
    DEFAULT_MULTIPLICITY,
    DEFAULT_NAVIGABILITY,
)
from uml_registry.graph import RegistryGraph
from uml_registry.model import Parameter, UMLClass
from uml_registry.registry import ClassRegistry

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

# ==============================================================================
# FastAPI & CORS
# ==============================================================================
app = FastAPI(title=API_TITLE, version=API_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# The registry itself is not thread-safe; sync endpoints run in a threadpool.
registry = ClassRegistry()
registry_lock = threading.Lock()

# ==============================================================================
# Models
# ==============================================================================
class ParameterReq(BaseModel):
    name: str
    type: str

class ClassReq(BaseModel):
    name: str = Field(..., min_length=1)
    visibility: str = DEFAULT_VISIBILITY
    is_abstract: bool = False

class ClassPatchReq(BaseModel):
    name: Optional[str] = None
    visibility: Optional[str] = None
    is_abstract: Optional[bool] = None

class AttributeReq(BaseModel):
    name: str
    type: str
    visibility: str = DEFAULT_VISIBILITY
    is_static: bool = False
    default_value: Optional[str] = None

class MethodReq(BaseModel):
    name: str
    return_type: str = "void"
    visibility: str = DEFAULT_VISIBILITY
    is_static: bool = False
    is_abstract: bool = False
    parameters: List[ParameterReq] = []

class RelationshipReq(BaseModel):
    source: str
    target: str
    type: str = "association"
    multiplicity: str = DEFAULT_MULTIPLICITY
    navigability: str = DEFAULT_NAVIGABILITY

class RelationshipRef(BaseModel):
    source: str
    target: str

# ==============================================================================
# Utilities
# ==============================================================================
def class_to_dict(uml_class: UMLClass) -> Dict[str, Any]:
    return {
        "name": uml_class.name,
        "visibility": uml_class.visibility,
        "is_abstract": uml_class.is_abstract,
        "attributes": [
            {
                "name": a.name,
                "type": a.type,
                "visibility": a.visibility,
                "is_static": a.is_static,
                "default_value": a.default_value,
            }
            for a in uml_class.attributes
        ],
        "methods": [
            {
                "name": m.name,
                "return_type": m.return_type,
                "visibility": m.visibility,
                "is_static": m.is_static,
                "is_abstract": m.is_abstract,
                "parameters": [{"name": p.name, "type": p.type} for p in m.parameters],
            }
            for m in uml_class.methods
        ],
        "relationships": [
            {
                "type": r.type,
                "target": r.target_name,
                "multiplicity": r.multiplicity,
                "navigability": r.navigability,
                "dangling": r.target not in registry,
            }
            for r in uml_class.relationships
        ],
    }

def _parameters(params: List[ParameterReq]) -> List[Parameter]:
    return [Parameter(p.name, p.type) for p in params]

def _require_class(name: str) -> UMLClass:
    uml_class = registry.find_class_by_name(name)
    if uml_class is None:
        logger.info("class %s not found", name)
        raise HTTPException(status_code=404, detail=f"Class not found: {name}")
    return uml_class

# ==============================================================================
# Classes
# ==============================================================================
@app.get("/health")
def health():
    return {"ok": True}

@app.get("/classes")
def list_classes():
    with registry_lock:
        return {"classes": [class_to_dict(c) for c in registry.get_classes()]}

@app.post("/classes")
def add_class(req: ClassReq):
    with registry_lock:
        uml_class = UMLClass(req.name, req.visibility, req.is_abstract)
        registry.add_class(uml_class)
        return class_to_dict(uml_class)

@app.get("/classes/{name}")
def get_class(name: str):
    with registry_lock:
        return class_to_dict(_require_class(name))

@app.patch("/classes/{name}")
def patch_class(name: str, req: ClassPatchReq):
    with registry_lock:
        uml_class = _require_class(name)
        if req.visibility is not None:
            uml_class.set_visibility(req.visibility)
        if req.is_abstract is not None:
            uml_class.set_abstract_status(req.is_abstract)
        if req.name is not None:
            uml_class.set_class_name(req.name)
        return class_to_dict(uml_class)

@app.delete("/classes/{name}")
def delete_class(name: str):
    with registry_lock:
        registry.delete_class(name)
        return {"ok": True}

# ==============================================================================
# Attributes & methods
# ==============================================================================
@app.post("/classes/{name}/attributes")
def add_attribute(name: str, req: AttributeReq):
    with registry_lock:
        uml_class = _require_class(name)
        uml_class.add_attribute(req.name, req.type, req.visibility, req.is_static, req.default_value)
        return class_to_dict(uml_class)

@app.put("/classes/{name}/attributes/{attr}")
def edit_attribute(name: str, attr: str, req: AttributeReq):
    with registry_lock:
        uml_class = _require_class(name)
        uml_class.edit_attribute(attr, req.name, req.type, req.visibility, req.is_static, req.default_value)
        return class_to_dict(uml_class)

@app.delete("/classes/{name}/attributes/{attr}")
def delete_attribute(name: str, attr: str):
    with registry_lock:
        _require_class(name).delete_attribute(attr)
        return {"ok": True}

@app.post("/classes/{name}/methods")
def add_method(name: str, req: MethodReq):
    with registry_lock:
        uml_class = _require_class(name)
        uml_class.add_method(
            req.name, req.return_type, req.visibility,
            req.is_static, req.is_abstract, _parameters(req.parameters),
        )
        return class_to_dict(uml_class)

@app.put("/classes/{name}/methods/{method}")
def edit_method(name: str, method: str, req: MethodReq):
    with registry_lock:
        uml_class = _require_class(name)
        uml_class.edit_method(
            method, req.name, req.return_type, req.visibility,
            req.is_static, req.is_abstract, _parameters(req.parameters),
        )
        return class_to_dict(uml_class)

@app.delete("/classes/{name}/methods/{method}")
def delete_method(name: str, method: str):
    with registry_lock:
        _require_class(name).delete_method(method)
        return {"ok": True}

# ==============================================================================
# Relationships
# ==============================================================================
@app.post("/relationships")
def add_relationship(req: RelationshipReq):
    with registry_lock:
        registry.add_relationship(req.source, req.target, req.type, req.multiplicity, req.navigability)
        return {"ok": True}

@app.put("/relationships")
def edit_relationship(req: RelationshipReq):
    with registry_lock:
        source = registry.find_class_by_name(req.source)
        target = registry.find_class_by_name(req.target)
        if source is not None and target is not None:
            source.edit_relationship(target, req.type, req.multiplicity, req.navigability)
        return {"ok": True}

@app.delete("/relationships")
def delete_relationship(req: RelationshipRef):
    with registry_lock:
        registry.delete_relationship(req.source, req.target)
        return {"ok": True}

@app.get("/graph")
def graph():
    with registry_lock:
        return RegistryGraph.from_registry(registry).to_debug_json()
