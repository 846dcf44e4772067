"""
Free-text cleanup for patient and report fields.

Markup is stripped before storage, but the characters a doctor typed
(``<``, ``&`` in "IMT < 1.0 mm") are stored as typed.  Escaping is left
to template auto-escaping at render time.
"""
import html

import bleach


def plain_text(value: str) -> str:
    return html.unescape(bleach.clean(value.strip(), tags=[], attributes={}, strip=True))
