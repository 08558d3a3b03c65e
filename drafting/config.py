import os
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Settings:
    store_backend: str = "firestore"
    # None lets the Firestore client resolve the project from the environment
    project_id: Optional[str] = None
    collection: str = "drafting"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"


def load_settings() -> Settings:
    origins = os.getenv("CORS_ORIGINS", "*")
    return Settings(
        store_backend=os.getenv("DRAFT_STORE", "firestore").strip().lower(),
        project_id=os.getenv("GOOGLE_CLOUD_PROJECT", "").strip() or None,
        collection=os.getenv("DRAFT_COLLECTION", "").strip() or "drafting",
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()] or ["*"],
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
    )
