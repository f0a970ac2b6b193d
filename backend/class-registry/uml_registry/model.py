import logging
from dataclasses import dataclass, field
from typing import List, Literal, Optional

logger = logging.getLogger(__name__)

Visibility = Literal["public", "protected", "private", "package"]

@dataclass
class Parameter:
    name: str
    type: str

@dataclass
class Attribute:
    name: str
    type: str                 # free-form type text (e.g. List<Item>)
    visibility: Visibility = "package"
    is_static: bool = False
    default_value: Optional[str] = None

@dataclass
class Method:
    name: str
    return_type: str
    visibility: Visibility = "package"
    is_static: bool = False
    is_abstract: bool = False
    parameters: List[Parameter] = field(default_factory=list)

@dataclass
class Relationship:
    type: str                 # association, inheritance, ...
    target: "UMLClass"
    multiplicity: str = "1"   # e.g. "1", "0..*", "1..*"
    navigability: str = "unidirectional"

    @property
    def target_name(self) -> str:
        return self.target.name

    def __repr__(self) -> str:
        return (
            f"Relationship(type={self.type!r}, target={self.target_name!r}, "
            f"multiplicity={self.multiplicity!r}, navigability={self.navigability!r})"
        )


@dataclass(eq=False)
class UMLClass:
    """
    A class node of the diagram.
    Owns its attributes, methods and outgoing relationships.
    Equality is identity, so relationship targets are matched by reference
    and two classes with the same name stay distinct entities.

    Every mutator is a silent no-op when nothing matches.
    """
    name: str
    visibility: Visibility = "package"
    is_abstract: bool = False
    attributes: List[Attribute] = field(default_factory=list)
    methods: List[Method] = field(default_factory=list)
    relationships: List[Relationship] = field(default_factory=list)

    # ---------------- Members ----------------

    def add_attribute(self, name: str, type: str, visibility: Visibility = "package",
                      is_static: bool = False, default_value: Optional[str] = None) -> None:
        self.attributes.append(Attribute(name, type, visibility, is_static, default_value))
        logger.debug("%s: added attribute %s", self.name, name)

    def add_method(self, name: str, return_type: str, visibility: Visibility = "package",
                   is_static: bool = False, is_abstract: bool = False,
                   parameters: Optional[List[Parameter]] = None) -> None:
        self.methods.append(
            Method(name, return_type, visibility, is_static, is_abstract, list(parameters or []))
        )
        logger.debug("%s: added method %s", self.name, name)

    def add_relationship(self, target: "UMLClass", type: str,
                         multiplicity: str = "1", navigability: str = "unidirectional") -> None:
        self.relationships.append(Relationship(type, target, multiplicity, navigability))
        logger.debug("%s: added %s relationship to %s", self.name, type, target.name)

    def delete_attribute(self, name: str) -> None:
        # removes every match, not just the first
        self.attributes[:] = [a for a in self.attributes if a.name != name]

    def delete_method(self, name: str) -> None:
        self.methods[:] = [m for m in self.methods if m.name != name]

    def delete_relationship(self, target: "UMLClass") -> None:
        self.relationships[:] = [r for r in self.relationships if r.target is not target]

    # ---------------- Class fields ----------------

    def set_class_name(self, new_name: str) -> None:
        self.name = new_name

    def set_visibility(self, visibility: Visibility) -> None:
        self.visibility = visibility

    def set_abstract_status(self, is_abstract: bool) -> None:
        self.is_abstract = is_abstract

    # ---------------- Edits ----------------

    def edit_attribute(self, old_name: str, new_name: str, type: str, visibility: Visibility,
                       is_static: bool, default_value: Optional[str]) -> None:
        """
        Overwrite every attribute named old_name, name included.
        """
        hits = 0
        for attribute in self.attributes:
            if attribute.name == old_name:
                attribute.name = new_name
                attribute.type = type
                attribute.visibility = visibility
                attribute.is_static = is_static
                attribute.default_value = default_value
                hits += 1
        if not hits:
            logger.debug("%s: no attribute %s to edit", self.name, old_name)

    def edit_method(self, old_name: str, new_name: str, return_type: str, visibility: Visibility,
                    is_static: bool, is_abstract: bool, parameters: List[Parameter]) -> None:
        """
        Overwrite every method named old_name.
        The parameter list is replaced as a whole.
        """
        hits = 0
        for method in self.methods:
            if method.name == old_name:
                method.name = new_name
                method.return_type = return_type
                method.visibility = visibility
                method.is_static = is_static
                method.is_abstract = is_abstract
                method.parameters = list(parameters)
                hits += 1
        if not hits:
            logger.debug("%s: no method %s to edit", self.name, old_name)

    def edit_relationship(self, target: "UMLClass", new_type: str,
                          new_multiplicity: str, new_navigability: str) -> None:
        # target itself is never rewritten
        for relationship in self.relationships:
            if relationship.target is target:
                relationship.type = new_type
                relationship.multiplicity = new_multiplicity
                relationship.navigability = new_navigability
