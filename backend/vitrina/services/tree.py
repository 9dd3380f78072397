"""Navegación del bosque de subcategorías de cada categoría.

Las subcategorías llegan como una colección plana (tal cual las devuelve el
store). Todas las vistas jerárquicas se calculan bajo demanda a partir de esa
colección: hijos directos, conteos, filas indentadas para el panel y el árbol
anidado para la API pública.
"""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple, TypedDict

from vitrina.models.category import Subcategory

logger = logging.getLogger(__name__)


class InvalidParentError(ValueError):
    """El padre elegido rompe la jerarquía (ciclo, otra categoría o inexistente)."""


class SubcategoryNode(TypedDict):
    subcategory: Subcategory
    children: List["SubcategoryNode"]


def toggle(expanded: FrozenSet[str], node_id: str) -> FrozenSet[str]:
    """Devuelve un nuevo conjunto con ``node_id`` alternado."""
    if node_id in expanded:
        return expanded - {node_id}
    return expanded | {node_id}


class TreeNavigator:
    """Vistas de árbol sobre una colección plana de subcategorías.

    El estado de expansión es un ``frozenset`` que se reemplaza entero en cada
    ``toggle_expanded``; nunca se muta en el lugar.
    """

    def __init__(self, subcategories: Iterable[Subcategory], expanded: Iterable[str] = ()):
        # El orden de llegada desempata order_position (sorted es estable)
        self.subcategories: Tuple[Subcategory, ...] = tuple(subcategories)
        self.expanded: FrozenSet[str] = frozenset(expanded)
        self._by_id: Dict[str, Subcategory] = {sub.id: sub for sub in self.subcategories}

    # === Consultas ===

    def get(self, node_id: str) -> Optional[Subcategory]:
        return self._by_id.get(node_id)

    def children_of(self, category_id: str, parent_id: Optional[str]) -> List[Subcategory]:
        """Hijos directos de ``parent_id`` dentro de la categoría (None = raíces)."""
        children = [
            sub for sub in self.subcategories
            if sub.category_id == category_id and (sub.parent_id or None) == parent_id
        ]
        return sorted(children, key=lambda sub: sub.order_position)

    def direct_children_count(self, node: Subcategory) -> int:
        return len(self.children_of(node.category_id, node.id))

    def count_descendants(self, category_id: str) -> int:
        """Total de subcategorías de la categoría, sin importar la profundidad."""
        return sum(1 for sub in self.subcategories if sub.category_id == category_id)

    def ancestors(self, node_id: str) -> List[Subcategory]:
        """Cadena de padres desde el inmediato hasta la raíz."""
        chain: List[Subcategory] = []
        seen: Set[str] = {node_id}
        current = self._by_id.get(node_id)
        while current is not None and current.parent_id:
            if current.parent_id in seen:
                logger.warning("Cycle detected in ancestors of subcategory %s", node_id)
                break
            seen.add(current.parent_id)
            parent = self._by_id.get(current.parent_id)
            if parent is None:
                break
            chain.append(parent)
            current = parent
        return chain

    def descendant_ids(self, node_id: str) -> Set[str]:
        """Ids de todo el subárbol bajo ``node_id`` (sin incluirlo)."""
        found: Set[str] = set()
        pending = [node_id]
        while pending:
            current = pending.pop()
            for sub in self.subcategories:
                if sub.parent_id == current and sub.id not in found and sub.id != node_id:
                    found.add(sub.id)
                    pending.append(sub.id)
        return found

    # === Expansión ===

    def is_expanded(self, node_id: str) -> bool:
        return node_id in self.expanded

    def toggle_expanded(self, node_id: str) -> FrozenSet[str]:
        self.expanded = toggle(self.expanded, node_id)
        return self.expanded

    # === Recorridos ===

    def render_tree(self, category_id: str) -> Iterator[Tuple[Subcategory, int]]:
        """Recorrido en profundidad de (subcategoría, nivel) para dibujar el panel.

        Solo desciende en los nodos expandidos. Un nodo ya emitido no se
        vuelve a emitir, así un ``parent_id`` corrupto no provoca recursión
        infinita.
        """
        yield from self._walk(category_id, expand_all=False)

    def walk_all(self, category_id: str) -> Iterator[Tuple[Subcategory, int]]:
        """Como ``render_tree`` pero con todos los nodos expandidos."""
        yield from self._walk(category_id, expand_all=True)

    def _walk(self, category_id: str, expand_all: bool) -> Iterator[Tuple[Subcategory, int]]:
        # Pila explícita: la profundidad del árbol no está limitada
        visited: Set[str] = set()
        pending = [(node, 0) for node in reversed(self.children_of(category_id, None))]
        while pending:
            node, depth = pending.pop()
            if node.id in visited:
                logger.warning("Subcategory %s reached twice, skipping", node.id)
                continue
            visited.add(node.id)
            yield node, depth
            if expand_all or self.is_expanded(node.id):
                children = self.children_of(category_id, node.id)
                pending.extend((child, depth + 1) for child in reversed(children))

    def build_forest(self, category_id: str) -> List[SubcategoryNode]:
        """Árbol anidado completo de la categoría."""
        roots: List[SubcategoryNode] = []
        stack: List[SubcategoryNode] = []
        for node, depth in self.walk_all(category_id):
            item: SubcategoryNode = {"subcategory": node, "children": []}
            del stack[depth:]
            if stack:
                stack[-1]["children"].append(item)
            else:
                roots.append(item)
            stack.append(item)
        return roots

    # === Validación de escrituras ===

    def level_for(self, parent_id: Optional[str]) -> int:
        if not parent_id:
            return 0
        parent = self._by_id.get(parent_id)
        return (parent.level or 0) + 1 if parent else 0

    def validate_parent(self, node_id: Optional[str], parent_id: Optional[str]) -> Optional[Subcategory]:
        """Comprueba que ``parent_id`` es un padre válido para ``node_id``.

        ``node_id`` es None al crear. Devuelve el padre (o None si no hay).
        """
        if not parent_id:
            return None
        if node_id is not None and parent_id == node_id:
            raise InvalidParentError("Subcategory cannot be its own parent")
        parent = self._by_id.get(parent_id)
        if parent is None:
            raise InvalidParentError("Parent subcategory not found")
        if node_id is not None:
            chain = {ancestor.id for ancestor in self.ancestors(parent_id)}
            if node_id in chain:
                raise InvalidParentError("Cannot set a descendant subcategory as parent")
        return parent

    def parent_options(self, category_id: str, editing_id: Optional[str] = None) -> List[Tuple[Subcategory, int]]:
        """Padres elegibles en el formulario: excluye el nodo y su subárbol."""
        excluded: Set[str] = set()
        if editing_id:
            excluded = self.descendant_ids(editing_id) | {editing_id}
        return [
            (node, depth) for node, depth in self.walk_all(category_id)
            if node.id not in excluded
        ]
