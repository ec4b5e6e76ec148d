"""Supabase-backed storage for the state document."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from sehat_sense.services.store import StateStorage


@dataclass
class SupabaseStateStorage(StateStorage):
    """Keeps the state document in one ``app_state`` row per namespace."""

    client: Client
    namespace: str = "sehatSenseData"

    def read(self) -> dict[str, object] | None:
        """Return the stored payload, if the namespace row exists."""
        response = (
            self.client.table("app_state")
            .select("payload")
            .eq("namespace", self.namespace)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        payload = response.data[0].get("payload")
        if payload is None:
            return None
        if not isinstance(payload, dict):
            raise ValueError("Stored state payload is not an object")
        return payload

    def write(self, payload: dict[str, object]) -> None:
        """Upsert the namespace row with the new payload."""
        self.client.table("app_state").upsert(
            {
                "namespace": self.namespace,
                "payload": payload,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="namespace",
        ).execute()
