"""User record returned by the identity provider"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class UserContext:
    """
    Identity record for an authenticated user.

    The state machine treats this as opaque: it only checks whether a user
    is present. Fields are populated by the identity provider adapter.
    """

    user_id: str
    email: str = ""
    name: Optional[str] = None
    attributes: Dict[str, Any] = field(default_factory=dict, compare=False)
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "UserContext":
        """
        Build a user from a provider payload.

        Accepts either a flat user object or one wrapped in a "user" key.
        Identifier lookup falls back through "user_id", "id", "sub", "username".

        Raises:
            ValueError: If the payload carries no identifier
        """
        data = payload["user"] if isinstance(payload.get("user"), dict) else payload
        attributes = dict(data.get("attributes") or {})

        user_id = (
            data.get("user_id")
            or data.get("id")
            or data.get("sub")
            or data.get("username")
        )
        if not user_id:
            raise ValueError("Provider payload has no user identifier")

        return cls(
            user_id=str(user_id),
            email=data.get("email") or attributes.get("email", ""),
            name=data.get("name") or attributes.get("name"),
            attributes=attributes,
            raw=dict(payload),
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable view for consumers."""
        return {
            "user_id": self.user_id,
            "email": self.email,
            "name": self.name,
            "attributes": dict(self.attributes),
        }
