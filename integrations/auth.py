"""
HTTP authentication helpers.
"""

import base64


def build_basic_auth_header(credential: str) -> str:
    """Encode a pre-shared credential (or "user:password") for a Basic header."""
    token = base64.b64encode(credential.encode("utf-8")).decode("ascii")
    return f"Basic {token}"
