"""
Localised client messages.

Only the messages a client is expected to read (conflicts, not-found, login) live
here. Lookup falls back to English, then to the key itself.
"""

from typing import Iterable

DEFAULT_LOCALE = "en"

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "region.code.exists": "Region code already exists",
        "region.not_found": "Region not found",
        "region.image.save_failed": "Error saving the image",
        "region.image.delete_failed": "Error deleting the image",
        "province.code.exists": "Province code already exists",
        "province.not_found": "Province not found",
        "province.region.not_found": "The selected region does not exist",
        "supermarket.not_found": "Supermarket not found",
        "location.not_found": "Location not found",
        "location.supermarket.not_found": "The selected supermarket does not exist",
        "location.province.not_found": "The selected province does not exist",
        "ticket.not_found": "Ticket not found",
        "ticket.products.not_found": "Some products do not exist",
        "product.not_found": "Product not found",
        "ticket.product.duplicate": "The product is already on the ticket",
        "ticket.product.name_exists": "A product with this name is already on the ticket",
        "auth.required": "Username and password are required",
        "auth.invalid": "Invalid credentials",
        "auth.success": "Login successful",
        "auth.info": "Send a POST request with username and password to log in",
        "validation.failed": "Validation failed",
        "error.unexpected": "An unexpected error occurred",
    },
    "es": {
        "region.code.exists": "El código de la región ya existe",
        "region.not_found": "La región no existe",
        "region.image.save_failed": "Error al guardar la imagen",
        "region.image.delete_failed": "Error al eliminar la imagen",
        "province.code.exists": "El código de la provincia ya existe",
        "province.not_found": "La provincia no existe",
        "province.region.not_found": "La región seleccionada no existe",
        "supermarket.not_found": "El supermercado no existe",
        "location.not_found": "La ubicación no existe",
        "location.supermarket.not_found": "El supermercado seleccionado no existe",
        "location.province.not_found": "La provincia seleccionada no existe",
        "ticket.not_found": "El ticket no existe",
        "ticket.products.not_found": "Algunos productos no existen",
        "product.not_found": "El producto no existe",
        "ticket.product.duplicate": "El producto ya está en el ticket",
        "ticket.product.name_exists": "Ya existe un producto con este nombre en el ticket",
        "auth.required": "Usuario y contraseña son obligatorios",
        "auth.invalid": "Credenciales incorrectas",
        "auth.success": "Inicio de sesión correcto",
        "auth.info": "Envía una petición POST con usuario y contraseña para iniciar sesión",
        "validation.failed": "Error de validación",
        "error.unexpected": "Se ha producido un error inesperado",
    },
}

SUPPORTED_LOCALES = frozenset(MESSAGES)


def get_message(key: str, locale: str | None = None) -> str:
    catalogue = MESSAGES.get(locale or DEFAULT_LOCALE) or MESSAGES[DEFAULT_LOCALE]
    return catalogue.get(key) or MESSAGES[DEFAULT_LOCALE].get(key, key)


def _parse_accept_language(header: str) -> Iterable[tuple[str, float]]:
    for part in header.split(","):
        lang, _, params = part.strip().partition(";")
        if not lang:
            continue
        quality = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                quality = float(params[2:])
            except ValueError:
                quality = 0.0
        yield lang.split("-")[0].lower(), quality


def negotiate_locale(accept_language: str | None, default: str = DEFAULT_LOCALE) -> str:
    """
    Pick the best supported locale from an Accept-Language header.

    >>> negotiate_locale("es-ES,es;q=0.9,en;q=0.8")
    'es'
    """
    if not accept_language:
        return default
    candidates = sorted(_parse_accept_language(accept_language), key=lambda c: c[1], reverse=True)
    for lang, quality in candidates:
        if quality > 0 and lang in SUPPORTED_LOCALES:
            return lang
    return default
