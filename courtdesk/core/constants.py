"""Static club constants."""
from decimal import Decimal

DAYS_PER_WEEK = 7
HOURS_PER_DAY = 24

# Mon-Sun, open 09:00 to 23:00
DEFAULT_OPEN_FROM_HOUR = 9
DEFAULT_OPEN_TO_HOUR = 23

DEFAULT_CLUB_NAME = "World Padel Center"
DEFAULT_OWNER_PHONE = "5491100000000"
DEFAULT_PROMO_TEXT = "¡Gaseosa de Regalo!"
DEFAULT_PROMO_PRICE = Decimal("20000")

DEFAULT_COURTS = [
    {
        "name": "Cancha Central (WPT)",
        "type": "indoor",
        "base_price": Decimal("20000"),
        "offer1_price": Decimal("15000"),
        "offer1_label": "Promo Mañana",
        "offer2_price": Decimal("18000"),
        "offer2_label": "Socio",
    },
    {
        "name": "Cancha 2",
        "type": "indoor",
        "base_price": Decimal("18000"),
        "offer1_price": Decimal("14000"),
        "offer1_label": "Promo Mañana",
        "offer2_price": Decimal("16000"),
        "offer2_label": "Socio",
    },
    {
        "name": "Cancha 3",
        "type": "outdoor",
        "base_price": Decimal("15000"),
        "offer1_price": Decimal("12000"),
        "offer1_label": "Promo Mañana",
        "offer2_price": Decimal("14000"),
        "offer2_label": "Socio",
    },
]

MONTH_LABELS = [
    "Enero",
    "Febrero",
    "Marzo",
    "Abril",
    "Mayo",
    "Junio",
    "Julio",
    "Agosto",
    "Septiembre",
    "Octubre",
    "Noviembre",
    "Diciembre",
]

# Argentine mobile prefix added to bare 10-digit numbers
WHATSAPP_COUNTRY_PREFIX = "549"

SURCHARGE_ITEM_TITLE = "Recargo por Servicio (Comisión)"
