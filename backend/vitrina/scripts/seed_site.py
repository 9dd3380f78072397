"""
Seed-script: crea las tablas, el pie de página y el tema por defecto si no existen
Uso: python -m vitrina.scripts.seed_site
"""
from vitrina.core.config import settings
from vitrina.services.store import CatalogStore

DEFAULT_THEME = "Extreme Neon"


def seed_footer(store: CatalogStore) -> bool:
    """Crea la fila del pie de página si todavía no existe"""
    if store.get_footer_settings() is not None:
        print("Footer settings already exist")
        return False

    store.update_footer_settings({
        "company_name": settings.STORE_NAME,
        "whatsapp_number": settings.INQUIRY_WHATSAPP_PHONE,
        "copyright_text": f"© {settings.STORE_NAME}. Todos los derechos reservados.",
    })
    print("Footer settings created")
    return True


def seed_theme(store: CatalogStore) -> bool:
    """Crea y activa el tema por defecto si no hay ninguno activo"""
    active = store.get_active_theme()
    if active is not None:
        print(f"Active theme already exists: {active.theme_name}")
        return False

    theme = store.create_theme({"theme_name": DEFAULT_THEME})
    store.activate_theme(theme.id)
    print(f"Theme created: {DEFAULT_THEME}")
    return True


def main(store: CatalogStore = None):
    store = store or CatalogStore.from_url(settings.DATABASE_URL)
    print("Creating tables...")
    store.start()
    print("Seeding footer...")
    seed_footer(store)
    print("Seeding theme...")
    seed_theme(store)
    print("Done!")


if __name__ == "__main__":
    main()
