import html
from typing import Optional


def sanitize_string(value: Optional[str]) -> Optional[str]:
    """
    Escape HTML special characters in customer-supplied text before it is stored
    or placed into an email. Returns None if input is None.
    """
    if value is None:
        return None
    return html.escape(value.strip(), quote=True)
