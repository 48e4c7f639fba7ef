"""
User model - a recruiter account as stored in the Baserow users table.

Baserow hands rows back as dicts keyed by the column titles of the users
table, which are in Portuguese. User.from_row/to_row are the only place
those wire names appear; everything else uses the attribute names below.

Column mapping:
    id                    → id
    nome                  → name
    empresa               → company
    telefone              → phone
    Email                 → email (always stored lowercase)
    senha_hash            → password_hash
    avatar_url            → avatar_url
    google_refresh_token  → google_refresh_token
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel


# Attribute name → Baserow column title
ROW_FIELDS: Dict[str, str] = {
    "name": "nome",
    "company": "empresa",
    "phone": "telefone",
    "email": "Email",
    "password_hash": "senha_hash",
    "avatar_url": "avatar_url",
    "google_refresh_token": "google_refresh_token",
}


def normalize_email(email: str) -> str:
    """Emails are compared and stored lowercase."""
    return email.strip().lower()


def parse_user_id(value: Any) -> Optional[int]:
    """
    Turn a user id from a path, query string or JSON body into a row id.

    Returns None for missing or non-numeric values; callers decide which
    error that is.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    text = str(value).strip()
    # Row ids are plain ASCII digits; "²" or "٤٢" are not ids
    if not (text.isascii() and text.isdecimal()):
        return None
    try:
        return int(text) or None
    except ValueError:
        return None


def is_google_connected(refresh_token: Optional[str]) -> bool:
    """
    Whether a user has a usable Google grant.

    "Connected" is not stored anywhere; it is inferred from the refresh
    token column holding a non-empty string. Every caller that needs the
    connection state goes through this function.
    """
    return isinstance(refresh_token, str) and refresh_token.strip() != ""


class User(BaseModel):
    """
    A user row from the row store.

    password_hash is present only for accounts created through signup.
    google_refresh_token is set by the OAuth callback and cleared by
    disconnect.
    """

    id: int
    name: Optional[str] = None
    company: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    password_hash: Optional[str] = None
    avatar_url: Optional[str] = None
    google_refresh_token: Optional[str] = None

    @property
    def google_connected(self) -> bool:
        return is_google_connected(self.google_refresh_token)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "User":
        """Build a User from a Baserow row dict."""
        values = {attr: row.get(column) for attr, column in ROW_FIELDS.items()}
        # Empty cells come back as "" from Baserow text fields
        values = {attr: (value if value != "" else None) for attr, value in values.items()}
        return cls(id=row["id"], **values)

    @staticmethod
    def to_row(**fields: Any) -> Dict[str, Any]:
        """
        Translate attribute names into Baserow column titles.

        Only known attributes are translated; anything else raises KeyError
        so a typo never silently writes a new column.
        """
        return {ROW_FIELDS[attr]: value for attr, value in fields.items()}
