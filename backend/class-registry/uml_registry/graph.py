import networkx as nx # type: ignore
from typing import Any, Dict

from uml_registry.registry import ClassRegistry

# relationship type -> edge type
_ETYPES = {
    "association": "ASSOCIATES",
    "aggregation": "AGGREGATES",
    "composition": "COMPOSES",
    "inheritance": "INHERITS",
    "realization": "IMPLEMENTS",
    "dependency": "DEPENDS_ON",
}

def relationship_etype(relationship_type: str) -> str:
    key = (relationship_type or "").strip().lower()
    if key in _ETYPES:
        return _ETYPES[key]
    return key.upper().replace(" ", "_") or "RELATES"


class RegistryGraph:
    """
    Typed multi-graph snapshot of a ClassRegistry.
    Nodes: UMLClass, Attribute, Method, Parameter, Dangling
    Edges: HAS_FIELD, HAS_METHOD, PARAM_OF, plus one edge per relationship
           (INHERITS, IMPLEMENTS, ASSOCIATES, AGGREGATES, COMPOSES, ...)

    Relationship targets that are no longer in the registry show up as
    Dangling nodes and their edges carry dangling=True.
    """
    def __init__(self) -> None:
        self.g = nx.MultiDiGraph()

    @classmethod
    def from_registry(cls, registry: ClassRegistry) -> "RegistryGraph":
        graph = cls()
        ids: Dict[int, str] = {}

        for i, uml_class in enumerate(registry.get_classes()):
            class_id = f"class:{i}"
            ids.setdefault(id(uml_class), class_id)
            graph.add_node(class_id, "UMLClass", uml_class)

            for j, attribute in enumerate(uml_class.attributes):
                attr_id = f"{class_id}:field:{j}"
                graph.add_node(attr_id, "Attribute", attribute)
                graph.add_edge(class_id, attr_id, "HAS_FIELD")

            for j, method in enumerate(uml_class.methods):
                method_id = f"{class_id}:method:{j}"
                graph.add_node(method_id, "Method", method)
                graph.add_edge(class_id, method_id, "HAS_METHOD")
                for k, param in enumerate(method.parameters):
                    param_id = f"{method_id}:param:{k}"
                    graph.add_node(param_id, "Parameter", param)
                    graph.add_edge(param_id, method_id, "PARAM_OF")

        # second pass so forward references resolve to class ids
        dangling_ids: Dict[int, str] = {}
        for i, uml_class in enumerate(registry.get_classes()):
            src = f"class:{i}"
            for rel in uml_class.relationships:
                dst = ids.get(id(rel.target))
                dangling = dst is None
                if dangling:
                    dst = dangling_ids.get(id(rel.target))
                    if dst is None:
                        dst = f"dangling:{len(dangling_ids)}"
                        dangling_ids[id(rel.target)] = dst
                        graph.add_node(dst, "Dangling", {"name": rel.target.name})
                graph.add_edge(
                    src, dst, relationship_etype(rel.type),
                    relationship_type=rel.type,
                    multiplicity=rel.multiplicity,
                    navigability=rel.navigability,
                    dangling=dangling,
                )
        return graph

    def add_node(self, node_id: str, kind: str, payload: Any) -> None:
        self.g.add_node(node_id, kind=kind, payload=payload)

    def add_edge(self, src: str, dst: str, etype: str, **attrs: Any) -> None:
        self.g.add_edge(src, dst, etype=etype, **attrs)

    def dangling_edges(self):
        return [
            (src, dst, data) for src, dst, data in self.g.edges(data=True)
            if data.get("dangling")
        ]

    def to_debug_json(self) -> Dict[str, Any]:
        """
        Convert graph to JSON-like dict for debugging / API responses.
        """
        nodes = []
        for node_id, data in self.g.nodes(data=True):
            payload = data.get("payload")
            nodes.append({
                "id": node_id,
                "kind": data.get("kind"),
                "attrs": _payload_attrs(payload),
            })

        edges = []
        for src, dst, data in self.g.edges(data=True):
            edge = {"src": src, "dst": dst, "type": data.get("etype")}
            for key in ("relationship_type", "multiplicity", "navigability", "dangling"):
                if key in data:
                    edge[key] = data[key]
            edges.append(edge)

        return {"nodes": nodes, "edges": edges}


def _payload_attrs(payload: Any) -> Dict[str, Any]:
    # members are exported as separate nodes, keep only scalar fields
    if isinstance(payload, dict):
        return dict(payload)
    if hasattr(payload, "__dict__"):
        return {
            k: v for k, v in payload.__dict__.items()
            if not isinstance(v, (list, dict))
        }
    return {}
