import copy
import threading
from abc import ABC, abstractmethod
from uuid import uuid4

from google.cloud import firestore

from drafting.models.draft_state import DRAFT_COLLECTION, with_draft_id


class DraftStore(ABC):
    """Access to the collection of draft documents.

    Lookups and updates return the stored record with its ``draftId``
    merged in, or ``None`` when no document has that id. Updates never
    create a missing document.
    """

    @abstractmethod
    def create(self, draft: dict) -> str:
        """Insert ``draft`` and return the id assigned to it."""

    @abstractmethod
    def get_by_id(self, draft_id: str):
        ...

    @abstractmethod
    def set_active(self, draft_id: str, is_active: bool):
        """Overwrite only the ``isActive`` field."""

    @abstractmethod
    def add_participant(self, draft_id: str, participant: dict):
        """Array-union ``participant`` into ``participants`` and re-read."""

    def close(self) -> None:
        pass


class FirestoreDraftStore(DraftStore):
    def __init__(self, client, collection: str = DRAFT_COLLECTION):
        self._client = client
        self._collection = client.collection(collection)

    def create(self, draft: dict) -> str:
        _, doc_ref = self._collection.add(draft)
        return doc_ref.id

    def get_by_id(self, draft_id: str):
        snapshot = self._collection.document(draft_id).get()
        if not snapshot.exists:
            return None
        return with_draft_id(snapshot.id, snapshot.to_dict())

    def set_active(self, draft_id: str, is_active: bool):
        doc_ref = self._collection.document(draft_id)
        snapshot = doc_ref.get()
        if not snapshot.exists:
            return None

        doc_ref.update({"isActive": is_active})
        return with_draft_id(snapshot.id, {**snapshot.to_dict(), "isActive": is_active})

    def add_participant(self, draft_id: str, participant: dict):
        doc_ref = self._collection.document(draft_id)
        if not doc_ref.get().exists:
            return None

        doc_ref.update({"participants": firestore.ArrayUnion([participant])})

        updated = doc_ref.get()
        return with_draft_id(updated.id, updated.to_dict())

    def close(self) -> None:
        self._client.close()


class InMemoryDraftStore(DraftStore):
    """Process-local store with the same per-document semantics as Firestore."""

    def __init__(self):
        self._drafts = {}
        self._lock = threading.Lock()

    def create(self, draft: dict) -> str:
        draft_id = uuid4().hex
        with self._lock:
            self._drafts[draft_id] = copy.deepcopy(draft)
        return draft_id

    def get_by_id(self, draft_id: str):
        with self._lock:
            draft = self._drafts.get(draft_id)
            if draft is None:
                return None
            return with_draft_id(draft_id, copy.deepcopy(draft))

    def set_active(self, draft_id: str, is_active: bool):
        with self._lock:
            draft = self._drafts.get(draft_id)
            if draft is None:
                return None
            draft["isActive"] = is_active
            return with_draft_id(draft_id, copy.deepcopy(draft))

    def add_participant(self, draft_id: str, participant: dict):
        with self._lock:
            draft = self._drafts.get(draft_id)
            if draft is None:
                return None
            participants = draft.setdefault("participants", [])
            if participant not in participants:
                participants.append(copy.deepcopy(participant))
            return with_draft_id(draft_id, copy.deepcopy(draft))

    def __len__(self):
        return len(self._drafts)


def build_draft_store(settings) -> DraftStore:
    if settings.store_backend == "memory":
        return InMemoryDraftStore()

    if settings.store_backend == "firestore":
        client = firestore.Client(project=settings.project_id)
        return FirestoreDraftStore(client, collection=settings.collection)

    raise ValueError(f"Unknown draft store backend: {settings.store_backend!r}")
