DRAFT_COLLECTION = "drafting"


def new_draft(name, topic):
    return {
        "name": name,
        "topic": topic,
        "currentTurn": "",
        "isActive": False,
        "participants": [],
        "picks": [],
    }


def with_draft_id(draft_id: str, draft: dict) -> dict:
    return {"draftId": draft_id, **draft}
