import re

from travelnow.states import CheckoutState, PaymentMethod

from .common import ask, proceed

EXPIRY_PATTERN = re.compile(r"^(0[1-9]|1[0-2])/\d{2}$")


def card_digits(number: str) -> str:
    return re.sub(r"\D", "", number or "")


def payment_node(state: CheckoutState):
    if state.payment_method is None:
        options = ", ".join(method.value for method in PaymentMethod)
        return ask("payment", "payment_method", f"How would you like to pay? ({options})")

    if state.payment_method != PaymentMethod.CARD:
        return proceed()

    card = state.card
    if not card.holder_name:
        return ask("payment", "card.holder_name", "Name on the card?")

    digits = card_digits(card.number)
    if not 12 <= len(digits) <= 19:
        return ask("payment", "card.number", "Card number? (12 to 19 digits)")

    if not card.expiry or not EXPIRY_PATTERN.match(card.expiry.strip()):
        return ask("payment", "card.expiry", "Card expiry date? (MM/YY)")

    if not card.cvv or not re.fullmatch(r"\d{3,4}", card.cvv.strip()):
        return ask("payment", "card.cvv", "Card security code? (3 or 4 digits)")

    return proceed()
