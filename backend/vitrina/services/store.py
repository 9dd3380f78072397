from typing import Any, Dict, List, Optional, Type, TypeVar
import logging
from fastapi import HTTPException
from sqlalchemy import delete
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine, select, col
from vitrina.models.category import Category, Subcategory, utcnow
from vitrina.models.product import Product
from vitrina.models.promotion import Banner, PromotionalSection
from vitrina.models.site import FooterSettings, SiteTheme
from vitrina.services.tree import TreeNavigator, InvalidParentError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)


def create_store_engine(database_url: str):
    """Engine para la URL dada (SQLite en memoria comparte una sola conexión)"""
    if database_url.startswith("sqlite"):
        kwargs: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)
    return create_engine(database_url, pool_pre_ping=True)


class CatalogStore:
    """
    Acceso a las tablas del catálogo.
    Se construye explícitamente al arrancar la app y se inyecta donde haga falta;
    cada operación abre su propia sesión.
    """

    def __init__(self, engine):
        self.engine = engine

    @classmethod
    def from_url(cls, database_url: str) -> "CatalogStore":
        return cls(create_store_engine(database_url))

    def start(self):
        SQLModel.metadata.create_all(self.engine)
        logger.info("Catalog store ready")

    def stop(self):
        self.engine.dispose()
        logger.info("Catalog store closed")

    # === Helpers genéricos ===

    def _list(self, model: Type[ModelT], *where, order_by=None) -> List[ModelT]:
        with Session(self.engine) as db:
            stmt = select(model)
            for clause in where:
                stmt = stmt.where(clause)
            if order_by is not None:
                stmt = stmt.order_by(*order_by)
            return list(db.exec(stmt).all())

    def _get(self, model: Type[ModelT], item_id: str, label: str) -> ModelT:
        with Session(self.engine) as db:
            item = db.get(model, item_id)
            if not item:
                raise HTTPException(status_code=404, detail=f"{label} not found")
            return item

    def _create(self, model: Type[ModelT], data: Dict[str, Any]) -> ModelT:
        with Session(self.engine) as db:
            item = model(**data)
            db.add(item)
            db.commit()
            db.refresh(item)
            logger.info("Created %s %s", model.__tablename__, item.id)
            return item

    def _update(self, model: Type[ModelT], item_id: str, data: Dict[str, Any], label: str) -> ModelT:
        with Session(self.engine) as db:
            item = db.get(model, item_id)
            if not item:
                raise HTTPException(status_code=404, detail=f"{label} not found")

            for key, value in data.items():
                setattr(item, key, value)
            if hasattr(item, "updated_at"):
                item.updated_at = utcnow()

            db.add(item)
            db.commit()
            db.refresh(item)
            logger.info("Updated %s %s", model.__tablename__, item_id)
            return item

    def _delete(self, model: Type[ModelT], item_id: str, label: str) -> None:
        with Session(self.engine) as db:
            item = db.get(model, item_id)
            if not item:
                raise HTTPException(status_code=404, detail=f"{label} not found")
            db.delete(item)
            db.commit()
            logger.info("Deleted %s %s", model.__tablename__, item_id)

    # === Categories ===

    def list_categories(self, active_only: bool = False) -> List[Category]:
        where = [Category.is_active == True] if active_only else []
        return self._list(Category, *where, order_by=(Category.order_position, Category.created_at))

    def get_category(self, category_id: str) -> Category:
        return self._get(Category, category_id, "Category")

    def create_category(self, data: Dict[str, Any]) -> Category:
        return self._create(Category, data)

    def update_category(self, category_id: str, data: Dict[str, Any]) -> Category:
        # Renombrar no toca Product.category (copia desnormalizada)
        return self._update(Category, category_id, data, "Category")

    def delete_category(self, category_id: str) -> int:
        """Borra la categoría y todas sus subcategorías. Devuelve cuántas subcategorías cayeron."""
        with Session(self.engine) as db:
            category = db.get(Category, category_id)
            if not category:
                raise HTTPException(status_code=404, detail="Category not found")

            sub_ids = list(db.exec(
                select(Subcategory.id).where(Subcategory.category_id == category_id)
            ).all())
            if sub_ids:
                db.exec(delete(Subcategory).where(col(Subcategory.id).in_(sub_ids)))
            db.delete(category)
            db.commit()

        logger.info("Deleted category %s with %d subcategories", category_id, len(sub_ids))
        return len(sub_ids)

    # === Subcategories ===

    def list_subcategories(self, active_only: bool = False, category_id: Optional[str] = None) -> List[Subcategory]:
        where = []
        if active_only:
            where.append(Subcategory.is_active == True)
        if category_id:
            where.append(Subcategory.category_id == category_id)
        return self._list(Subcategory, *where, order_by=(Subcategory.order_position, Subcategory.created_at))

    def get_subcategory(self, subcategory_id: str) -> Subcategory:
        return self._get(Subcategory, subcategory_id, "Subcategory")

    def _resolve_placement(
        self,
        db: Session,
        node_id: Optional[str],
        category_id: Optional[str],
        parent_id: Optional[str],
    ) -> Dict[str, Any]:
        """category_id, parent_id y level finales para un nodo"""
        navigator = TreeNavigator(db.exec(select(Subcategory)).all())
        try:
            parent = navigator.validate_parent(node_id, parent_id)
        except InvalidParentError as e:
            raise HTTPException(status_code=400, detail=str(e))

        if parent is not None:
            # El padre manda: se ignora cualquier category_id desactualizado
            category_id = parent.category_id
        if not category_id or not db.get(Category, category_id):
            raise HTTPException(status_code=400, detail="Category not found")

        return {
            "category_id": category_id,
            "parent_id": parent.id if parent else None,
            "level": navigator.level_for(parent.id) if parent else 0,
        }

    def create_subcategory(self, data: Dict[str, Any]) -> Subcategory:
        with Session(self.engine) as db:
            placement = self._resolve_placement(db, None, data.get("category_id"), data.get("parent_id"))
            subcategory = Subcategory(**{**data, **placement})
            db.add(subcategory)
            db.commit()
            db.refresh(subcategory)
            logger.info("Created subcategory %s (level %d)", subcategory.id, subcategory.level)
            return subcategory

    def update_subcategory(self, subcategory_id: str, data: Dict[str, Any]) -> Subcategory:
        with Session(self.engine) as db:
            subcategory = db.get(Subcategory, subcategory_id)
            if not subcategory:
                raise HTTPException(status_code=404, detail="Subcategory not found")

            data = dict(data)
            if "parent_id" in data or "category_id" in data:
                parent_id = data.pop("parent_id", subcategory.parent_id)
                category_id = data.pop("category_id", subcategory.category_id)
                placement = self._resolve_placement(db, subcategory_id, category_id, parent_id)
                data.update(placement)

            old_category, old_level = subcategory.category_id, subcategory.level
            for key, value in data.items():
                setattr(subcategory, key, value)
            subcategory.updated_at = utcnow()
            db.add(subcategory)

            if subcategory.category_id != old_category or subcategory.level != old_level:
                self._cascade_placement(db, subcategory)

            db.commit()
            db.refresh(subcategory)
            logger.info("Updated subcategory %s", subcategory_id)
            return subcategory

    def _cascade_placement(self, db: Session, root: Subcategory):
        """Propaga categoría y nivel al subárbol de un nodo movido"""
        navigator = TreeNavigator(db.exec(select(Subcategory)).all())
        descendants = navigator.descendant_ids(root.id)
        if not descendants:
            return
        by_id = {sub.id: sub for sub in navigator.subcategories}
        levels = {root.id: root.level}
        pending = [root.id]
        while pending:
            current = pending.pop()
            for child_id in descendants:
                child = by_id[child_id]
                if child.parent_id == current and child_id not in levels:
                    child.category_id = root.category_id
                    child.level = levels[current] + 1
                    levels[child_id] = child.level
                    db.add(child)
                    pending.append(child_id)

    def delete_subcategory(self, subcategory_id: str) -> int:
        """Borra el nodo y sus descendientes. Devuelve cuántos descendientes cayeron."""
        with Session(self.engine) as db:
            subcategory = db.get(Subcategory, subcategory_id)
            if not subcategory:
                raise HTTPException(status_code=404, detail="Subcategory not found")

            navigator = TreeNavigator(db.exec(select(Subcategory)).all())
            doomed = navigator.descendant_ids(subcategory_id) | {subcategory_id}
            db.exec(delete(Subcategory).where(col(Subcategory.id).in_(list(doomed))))
            db.commit()

        logger.info("Deleted subcategory %s with %d descendants", subcategory_id, len(doomed) - 1)
        return len(doomed) - 1

    # === Products ===

    def list_products(self) -> List[Product]:
        return self._list(Product, order_by=(col(Product.created_at).desc(),))

    def get_product(self, product_id: str) -> Product:
        return self._get(Product, product_id, "Product")

    def get_products(self, product_ids: List[str]) -> Dict[str, Product]:
        if not product_ids:
            return {}
        items = self._list(Product, col(Product.id).in_(product_ids))
        return {p.id: p for p in items}

    def create_product(self, data: Dict[str, Any]) -> Product:
        return self._create(Product, data)

    def update_product(self, product_id: str, data: Dict[str, Any]) -> Product:
        return self._update(Product, product_id, data, "Product")

    def delete_product(self, product_id: str) -> None:
        self._delete(Product, product_id, "Product")

    def duplicate_product(self, product_id: str) -> Product:
        product = self.get_product(product_id)
        data = product.model_dump(exclude={"id", "created_at", "updated_at"})
        data["name"] = f"{product.name} (Copia)"
        data["sku"] = f"{product.sku}-COPY" if product.sku else None
        return self._create(Product, data)

    # === Banners ===

    def list_banners(self, active_only: bool = False) -> List[Banner]:
        where = [Banner.is_active == True] if active_only else []
        return self._list(Banner, *where, order_by=(Banner.order_position, Banner.created_at))

    def create_banner(self, data: Dict[str, Any]) -> Banner:
        return self._create(Banner, data)

    def update_banner(self, banner_id: str, data: Dict[str, Any]) -> Banner:
        return self._update(Banner, banner_id, data, "Banner")

    def delete_banner(self, banner_id: str) -> None:
        self._delete(Banner, banner_id, "Banner")

    # === Promotional sections ===

    def list_promotional_sections(self, active_only: bool = False) -> List[PromotionalSection]:
        where = [PromotionalSection.is_active == True] if active_only else []
        return self._list(
            PromotionalSection, *where,
            order_by=(PromotionalSection.order_position, PromotionalSection.created_at)
        )

    def create_promotional_section(self, data: Dict[str, Any]) -> PromotionalSection:
        return self._create(PromotionalSection, data)

    def update_promotional_section(self, section_id: str, data: Dict[str, Any]) -> PromotionalSection:
        return self._update(PromotionalSection, section_id, data, "Promotional section")

    def delete_promotional_section(self, section_id: str) -> None:
        self._delete(PromotionalSection, section_id, "Promotional section")

    # === Footer ===

    def get_footer_settings(self) -> Optional[FooterSettings]:
        with Session(self.engine) as db:
            return db.exec(select(FooterSettings)).first()

    def update_footer_settings(self, data: Dict[str, Any]) -> FooterSettings:
        """Fila única: se crea la primera vez que se guarda"""
        current = self.get_footer_settings()
        if current is None:
            return self._create(FooterSettings, data)
        return self._update(FooterSettings, current.id, data, "Footer settings")

    # === Themes ===

    def list_themes(self) -> List[SiteTheme]:
        return self._list(SiteTheme, order_by=(SiteTheme.created_at,))

    def get_theme(self, theme_id: str) -> SiteTheme:
        return self._get(SiteTheme, theme_id, "Theme")

    def get_active_theme(self) -> Optional[SiteTheme]:
        with Session(self.engine) as db:
            return db.exec(select(SiteTheme).where(SiteTheme.active == True)).first()

    def create_theme(self, data: Dict[str, Any]) -> SiteTheme:
        return self._create(SiteTheme, {**data, "active": False})

    def update_theme(self, theme_id: str, data: Dict[str, Any]) -> SiteTheme:
        data = {key: value for key, value in data.items() if key != "active"}
        return self._update(SiteTheme, theme_id, data, "Theme")

    def activate_theme(self, theme_id: str) -> SiteTheme:
        """Deja un solo tema activo"""
        with Session(self.engine) as db:
            theme = db.get(SiteTheme, theme_id)
            if not theme:
                raise HTTPException(status_code=404, detail="Theme not found")

            for other in db.exec(select(SiteTheme).where(SiteTheme.id != theme_id, SiteTheme.active == True)).all():
                other.active = False
                db.add(other)
            theme.active = True
            theme.updated_at = utcnow()
            db.add(theme)
            db.commit()
            db.refresh(theme)
            logger.info("Activated theme %s", theme_id)
            return theme

    def delete_theme(self, theme_id: str) -> None:
        theme = self.get_theme(theme_id)
        if theme.active:
            raise HTTPException(status_code=400, detail="Cannot delete the active theme")
        self._delete(SiteTheme, theme_id, "Theme")
