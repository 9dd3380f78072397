from decimal import Decimal
from typing import List, Sequence, NamedTuple
from urllib.parse import quote
from vitrina.models.product import Product
from vitrina.services.currency import format_price

WHATSAPP_BASE_URL = "https://wa.me"
# Igual que encodeURIComponent
URI_SAFE_CHARS = "!~*'()"


class CartLine(NamedTuple):
    product: Product
    quantity: int

    @property
    def subtotal(self) -> Decimal:
        return Decimal(self.product.price) * self.quantity


def clamp_quantity(product: Product, quantity: int) -> int:
    """Cantidad entre 1 y el stock disponible"""
    if product.stock <= 0:
        return 0
    return max(1, min(quantity, product.stock))


def add_to_cart(lines: Sequence[CartLine], product: Product, quantity: int = 1) -> List[CartLine]:
    """Agrega (o acumula) un producto; devuelve un carrito nuevo"""
    result: List[CartLine] = []
    merged = False
    for line in lines:
        if line.product.id == product.id:
            result.append(CartLine(product, clamp_quantity(product, line.quantity + quantity)))
            merged = True
        else:
            result.append(line)
    if not merged:
        qty = clamp_quantity(product, quantity)
        if qty > 0:
            result.append(CartLine(product, qty))
    return result


def update_quantity(lines: Sequence[CartLine], product_id: str, quantity: int) -> List[CartLine]:
    """Cambia la cantidad; con cantidad <= 0 la línea se elimina"""
    if quantity <= 0:
        return remove_from_cart(lines, product_id)
    return [
        CartLine(line.product, clamp_quantity(line.product, quantity))
        if line.product.id == product_id else line
        for line in lines
    ]


def remove_from_cart(lines: Sequence[CartLine], product_id: str) -> List[CartLine]:
    return [line for line in lines if line.product.id != product_id]


def total_items(lines: Sequence[CartLine]) -> int:
    return sum(line.quantity for line in lines)


def total_price(lines: Sequence[CartLine]) -> Decimal:
    return sum((line.subtotal for line in lines), Decimal("0"))


def whatsapp_link(phone: str, message: str) -> str:
    return f"{WHATSAPP_BASE_URL}/{phone}?text={quote(message, safe=URI_SAFE_CHARS)}"


def build_order_message(lines: Sequence[CartLine]) -> str:
    """Resumen del pedido que se envía por WhatsApp"""
    message = "¡Hola! Me gustaría hacer el siguiente pedido:\n\n"

    for index, line in enumerate(lines, start=1):
        product = line.product
        message += f"{index}. {product.name}\n"
        message += f"   - Cantidad: {line.quantity}\n"
        message += f"   - Precio unitario: {format_price(product.price)}\n"
        message += f"   - Subtotal: {format_price(line.subtotal)}\n"
        if product.sku:
            message += f"   - SKU: {product.sku}\n"
        message += "\n"

    message += f"*Total: {format_price(total_price(lines))}*\n\n"
    message += "¿Podrías confirmar la disponibilidad y el método de envío?"
    return message


def build_inquiry_message(product: Product) -> str:
    """Consulta por un producto puntual"""
    message = "¡Hola! Me interesa este producto:\n\n"
    message += f"*{product.name}*\n"
    message += f"Precio: {format_price(product.price)}\n"
    if product.sku:
        message += f"SKU: {product.sku}\n"
    if product.brand:
        message += f"Marca: {product.brand}\n"
    message += "\n¿Está disponible? Me gustaría conocer más detalles."
    return message


def checkout_link(lines: Sequence[CartLine], phone: str) -> str:
    return whatsapp_link(phone, build_order_message(lines))


def inquiry_link(product: Product, phone: str) -> str:
    return whatsapp_link(phone, build_inquiry_message(product))
