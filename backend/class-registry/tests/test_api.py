import pytest # type: ignore
from fastapi.testclient import TestClient # type: ignore

from uml_registry import main

client = TestClient(main.app)

@pytest.fixture(autouse=True)
def clear_registry():
    main.registry.get_classes().clear()
    yield
    main.registry.get_classes().clear()

def add_class(name, **extra):
    r = client.post("/classes", json={"name": name, **extra})
    assert r.status_code == 200
    return r.json()

def test_health():
    assert client.get("/health").json() == {"ok": True}

def test_add_and_list_classes():
    add_class("Animal")
    body = add_class("Dog", visibility="package", is_abstract=False)
    assert body["visibility"] == "package"

    classes = client.get("/classes").json()["classes"]
    assert [c["name"] for c in classes] == ["Animal", "Dog"]
    assert classes[0]["visibility"] == "public"

def test_get_missing_class_is_404():
    r = client.get("/classes/Nope")
    assert r.status_code == 404

    r = client.post("/classes/Nope/attributes", json={"name": "x", "type": "int"})
    assert r.status_code == 404

def test_patch_class():
    add_class("Shape")
    r = client.patch("/classes/Shape", json={"name": "Figure", "is_abstract": True})
    assert r.status_code == 200
    assert r.json()["name"] == "Figure"
    assert r.json()["is_abstract"] is True
    assert client.get("/classes/Shape").status_code == 404

def test_attribute_and_method_crud():
    add_class("Order")
    client.post("/classes/Order/attributes", json={"name": "total", "type": "double"})
    client.post("/classes/Order/attributes", json={"name": "total", "type": "double"})
    r = client.put(
        "/classes/Order/attributes/total",
        json={"name": "sum", "type": "BigDecimal", "visibility": "private", "default_value": "0"},
    )
    attrs = r.json()["attributes"]
    assert [a["name"] for a in attrs] == ["sum", "sum"]
    assert attrs[1]["default_value"] == "0"

    r = client.post(
        "/classes/Order/methods",
        json={"name": "pay", "parameters": [{"name": "amount", "type": "double"}]},
    )
    method = r.json()["methods"][0]
    assert method["return_type"] == "void"
    assert method["parameters"] == [{"name": "amount", "type": "double"}]

    r = client.put("/classes/Order/methods/pay", json={"name": "pay", "return_type": "boolean"})
    assert r.json()["methods"][0]["parameters"] == []

    assert client.delete("/classes/Order/methods/pay").json() == {"ok": True}
    assert client.delete("/classes/Order/attributes/missing").json() == {"ok": True}
    assert client.delete("/classes/Order/attributes/sum").json() == {"ok": True}
    order = client.get("/classes/Order").json()
    assert order["attributes"] == [] and order["methods"] == []

def test_relationships_and_dangling_target():
    add_class("Animal")
    add_class("Dog")
    r = client.post(
        "/relationships",
        json={"source": "Dog", "target": "Animal", "type": "inheritance"},
    )
    assert r.json() == {"ok": True}

    client.put(
        "/relationships",
        json={"source": "Dog", "target": "Animal", "type": "inheritance", "multiplicity": "0..1"},
    )
    rel = client.get("/classes/Dog").json()["relationships"][0]
    assert rel["multiplicity"] == "0..1"
    assert rel["dangling"] is False

    client.delete("/classes/Animal")
    rels = client.get("/classes/Dog").json()["relationships"]
    assert len(rels) == 1
    assert rels[0]["target"] == "Animal"
    assert rels[0]["dangling"] is True

    # target can no longer be resolved by name
    client.request("DELETE", "/relationships", json={"source": "Dog", "target": "Animal"})
    assert len(client.get("/classes/Dog").json()["relationships"]) == 1

def test_unknown_relationship_names_are_ignored():
    add_class("A")
    r = client.post("/relationships", json={"source": "A", "target": "Nope"})
    assert r.json() == {"ok": True}
    assert client.get("/classes/A").json()["relationships"] == []

def test_delete_relationship():
    add_class("A")
    add_class("B")
    client.post("/relationships", json={"source": "A", "target": "B"})
    for _ in range(2):
        r = client.request("DELETE", "/relationships", json={"source": "A", "target": "B"})
        assert r.json() == {"ok": True}
    assert client.get("/classes/A").json()["relationships"] == []

def test_graph_endpoint():
    add_class("A")
    add_class("B")
    client.post("/relationships", json={"source": "A", "target": "B", "type": "composition"})
    data = client.get("/graph").json()
    assert {n["id"] for n in data["nodes"]} == {"class:0", "class:1"}
    assert data["edges"][0]["type"] == "COMPOSES"
