"""Sample catalog data shared by runtime and call-site tests."""

from __future__ import annotations

CS_MESSAGES: dict[str, str] = {
    "Original": "Původní",
    "Welcome": "Vítejte",
    "My name is {name}": "Jmenuji se {name}",
    "msg.currency": "{value, number, currency}",
    "ID": "Translation",
}
