import csv
from datetime import date, datetime
from decimal import Decimal

import requests

from conftest import make_product
from vitrina.services.export import (
    BOM, CSV_HEADERS, PLACEHOLDER_IMAGE, ImageInliner,
    csv_filename, csv_row, export_csv, export_html, format_generated_at, stock_label,
)

kit = make_product(
    name='Kit "Sport" de embrague',
    description="Disco, plato y rulemán",
    price=Decimal("1250000"),
    category="Transmisión",
    stock=2,
    sku="KE-9",
    brand="Sachs",
    dimensions="240 mm",
    image_url="https://cdn.example.com/kit.jpg",
)


def test_csv_starts_with_bom_and_header():
    content = export_csv([kit])
    assert content.startswith(BOM)
    lines = content[len(BOM):].split("\n")
    assert lines[0] == ",".join(CSV_HEADERS)
    assert len(lines) == 2


def test_csv_row_quotes_text_fields():
    row = csv_row(kit)
    assert row == (
        'KE-9,"Kit ""Sport"" de embrague",Sachs,Transmisión,1.250.000,2,'
        '"Disco, plato y rulemán","240 mm",'
    )


def test_csv_keeps_nine_columns_with_separators_in_text():
    product = make_product(sku="A,1", brand='Bosch "Pro"', category="Audio, Video")
    rows = list(csv.reader(export_csv([product])[len(BOM):].split("\n")))
    assert all(len(row) == len(CSV_HEADERS) for row in rows)
    assert rows[1][:4] == ["A,1", "Producto", 'Bosch "Pro"', "Audio, Video"]


def test_csv_filename_uses_date():
    assert csv_filename(date(2024, 3, 5)) == "catalogo_2024-03-05.csv"


def test_stock_label():
    assert stock_label(0) == ("stock-out", "Sin stock")
    assert stock_label(4) == ("stock-low", "Stock bajo (4)")
    assert stock_label(5) == ("stock-available", "En stock (5)")


def test_generated_at_in_spanish():
    assert format_generated_at(datetime(2024, 1, 9, 14, 5)) == "9 de enero de 2024, 14:05"


def test_inliner_falls_back_to_placeholder():
    def failing_fetch(url):
        raise requests.ConnectionError("offline")

    inline = ImageInliner(fetch=failing_fetch)
    assert inline(kit.image_url) == PLACEHOLDER_IMAGE
    assert inline("") == PLACEHOLDER_IMAGE


def test_inliner_encodes_fetched_bytes():
    inline = ImageInliner(fetch=lambda url: b"abc")
    assert inline("https://cdn.example.com/a.png") == "data:image/png;base64,YWJj"


def test_inliner_reads_local_bucket(storage):
    stored = storage.upload("notes.txt", b"hello", process_image=False)
    inline = ImageInliner(storage, fetch=lambda url: b"remote")
    assert inline(stored.url).endswith("base64,aGVsbG8=")


def test_export_html_renders_products():
    html = export_html(
        [kit, make_product(name="Bujía", stock=0)],
        ImageInliner(fetch=lambda url: b"img"),
        "EXTREME PERFORMANCE",
        generated_at=datetime(2024, 6, 1, 9, 30),
    )
    assert "Kit &#34;Sport&#34; de embrague" in html
    assert "₲ 1.250.000" in html
    assert "Sin stock" in html
    assert "2 productos en total" in html
    assert "1 de junio de 2024, 09:30" in html
    assert PLACEHOLDER_IMAGE in html
