from datetime import date, datetime
from typing import Callable, Iterable, List, Optional, Sequence
import base64
import logging
import mimetypes
import os
import requests
from jinja2 import Environment, FileSystemLoader, select_autoescape
from vitrina.models.product import Product
from vitrina.services.currency import format_price, format_price_plain
from vitrina.services.storage import ObjectStorage

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    'SKU', 'Nombre', 'Marca', 'Categoría', 'Precio', 'Stock',
    'Descripción', 'Dimensiones', 'Compatibilidad',
]
BOM = '\ufeff'
CSV_SPECIAL_CHARS = (',', '"', '\n', '\r')

PLACEHOLDER_IMAGE = (
    "data:image/svg+xml,%3Csvg xmlns=%22http://www.w3.org/2000/svg%22 width=%22120%22 "
    "height=%22120%22%3E%3Crect fill=%22%23f3f4f6%22 width=%22120%22 height=%22120%22/%3E"
    "%3Ctext x=%2250%25%22 y=%2250%25%22 dominant-baseline=%22middle%22 text-anchor=%22middle%22 "
    "fill=%22%239ca3af%22 font-size=%2214%22%3ESin imagen%3C/text%3E%3C/svg%3E"
)

MONTHS_ES = [
    "enero", "febrero", "marzo", "abril", "mayo", "junio", "julio",
    "agosto", "septiembre", "octubre", "noviembre", "diciembre",
]

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")

_templates = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
)


def _quoted(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def _plain(value: Optional[str]) -> str:
    """Campo sin comillas salvo que traiga separadores o comillas"""
    value = value or ''
    if any(ch in value for ch in CSV_SPECIAL_CHARS):
        return _quoted(value)
    return value


def csv_row(product: Product) -> str:
    return ','.join([
        _plain(product.sku),
        _quoted(product.name),
        _plain(product.brand),
        _plain(product.category),
        format_price_plain(product.price),
        str(product.stock),
        _quoted(product.description or ''),
        _quoted(product.dimensions) if product.dimensions else '',
        _quoted(product.compatibility) if product.compatibility else '',
    ])


def export_csv(products: Iterable[Product]) -> str:
    """CSV del catálogo con BOM para que Excel respete UTF-8"""
    lines = [','.join(CSV_HEADERS)] + [csv_row(p) for p in products]
    return BOM + '\n'.join(lines)


def csv_filename(today: Optional[date] = None) -> str:
    return f"catalogo_{(today or date.today()).isoformat()}.csv"


def stock_label(stock: int):
    """(clase css, texto) de la etiqueta de stock"""
    if stock == 0:
        return 'stock-out', 'Sin stock'
    if stock < 5:
        return 'stock-low', f'Stock bajo ({stock})'
    return 'stock-available', f'En stock ({stock})'


def format_generated_at(moment: datetime) -> str:
    return f"{moment.day} de {MONTHS_ES[moment.month - 1]} de {moment.year}, {moment:%H:%M}"


class ImageInliner:
    """Convierte URLs de imagen en data URIs base64"""

    def __init__(self, storage: Optional[ObjectStorage] = None, fetch: Optional[Callable[[str], bytes]] = None, timeout: int = 10):
        self.storage = storage
        self.timeout = timeout
        self.fetch = fetch or self._fetch_remote

    def _fetch_remote(self, url: str) -> bytes:
        response = requests.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.content

    def __call__(self, url: Optional[str]) -> str:
        if not url:
            return PLACEHOLDER_IMAGE
        try:
            name = self.storage.name_from_url(url) if self.storage else None
            content = self.storage.read(name) if name else self.fetch(url)
        except (OSError, requests.RequestException) as e:
            logger.error("Error converting image to base64 %s: %s", url, e)
            return PLACEHOLDER_IMAGE

        mime = mimetypes.guess_type(url)[0] or 'image/jpeg'
        return f"data:{mime};base64,{base64.b64encode(content).decode('ascii')}"


def export_html(
    products: Sequence[Product],
    inline_image: Callable[[Optional[str]], str],
    store_name: str,
    logo_url: Optional[str] = None,
    generated_at: Optional[datetime] = None,
) -> str:
    """Documento imprimible (para guardar como PDF) con las imágenes embebidas"""
    items: List[dict] = []
    for p in products:
        css_class, label = stock_label(p.stock)
        items.append({
            "product": p,
            "image": inline_image(p.image_url),
            "price": format_price(p.price),
            "stock_class": css_class,
            "stock_text": label,
        })

    template = _templates.get_template("catalog_print.html")
    return template.render(
        store_name=store_name,
        logo=inline_image(logo_url) if logo_url else None,
        generated_at=format_generated_at(generated_at or datetime.now()),
        items=items,
        total=len(items),
    )
