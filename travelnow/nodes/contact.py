import re

from travelnow.states import CheckoutState

from .common import ask, proceed

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def contact_node(state: CheckoutState):
    contact = state.contact

    if not contact.full_name:
        return ask("contact", "contact.full_name", "Who will be checking in? (full name)")

    if not contact.email:
        return ask("contact", "contact.email", "What email should we send the confirmation to?")
    if not EMAIL_PATTERN.match(contact.email):
        return ask(
            "contact",
            "contact.email",
            f"'{contact.email}' doesn't look like an email address. Please enter it again.",
        )

    if not contact.phone:
        return ask("contact", "contact.phone", "What phone number can the hotel reach you on?")

    return proceed()
