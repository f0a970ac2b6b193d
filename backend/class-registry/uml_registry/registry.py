import logging
from typing import Iterator, List, Optional

from uml_registry.model import UMLClass

logger = logging.getLogger(__name__)

class ClassRegistry:
    """
    Ordered, in-memory collection of UML classes.
    Names are not unique: lookups return the first match in insertion
    order, deletes remove every match. Deleting a class never touches
    relationships that point at it from other classes.
    """

    def __init__(self) -> None:
        self.classes: List[UMLClass] = []

    def __len__(self) -> int:
        return len(self.classes)

    def __iter__(self) -> Iterator[UMLClass]:
        return iter(self.classes)

    def __contains__(self, uml_class: object) -> bool:
        # identity, not field equality
        return any(c is uml_class for c in self.classes)

    def add_class(self, uml_class: UMLClass) -> None:
        self.classes.append(uml_class)
        logger.debug("added class %s", uml_class.name)

    def delete_class(self, name: str) -> None:
        before = len(self.classes)
        self.classes[:] = [c for c in self.classes if c.name != name]
        logger.debug("deleted %d class(es) named %s", before - len(self.classes), name)

    def find_class_by_name(self, name: str) -> Optional[UMLClass]:
        return next((c for c in self.classes if c.name == name), None)

    def add_relationship(self, source_name: str, target_name: str, relationship_type: str,
                         multiplicity: str, navigability: str) -> None:
        source = self.find_class_by_name(source_name)
        target = self.find_class_by_name(target_name)
        if source is None or target is None:
            logger.debug("skip relationship %s -> %s: class not found", source_name, target_name)
            return
        source.add_relationship(target, relationship_type, multiplicity, navigability)

    def delete_relationship(self, source_name: str, target_name: str) -> None:
        source = self.find_class_by_name(source_name)
        target = self.find_class_by_name(target_name)
        if source is None or target is None:
            logger.debug("skip relationship delete %s -> %s: class not found", source_name, target_name)
            return
        source.delete_relationship(target)

    def get_classes(self) -> List[UMLClass]:
        """Live list, not a copy."""
        return self.classes
