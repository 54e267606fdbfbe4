import asyncio
from datetime import timedelta

import pytest

from guessbot.errors import InvalidState, ValidationError
from guessbot.services.game import GameService
from guessbot.services.knowledge import LIVE_TREE_ID, KnowledgeRepository
from guessbot.services.sweeper import SessionSweeper
from guessbot.session import RoundState
from guessbot.tree import INITIAL_TREE
from guessbot.utils.dates import utcnow


class FakeCollection:
    def __init__(self, docs=None):
        self.docs = {doc["_id"]: dict(doc) for doc in docs or []}

    async def find_one(self, query, projection=None):
        doc = self.docs.get(query["_id"])
        return dict(doc) if doc else None

    async def find_one_and_update(self, query, update, projection=None, upsert=False, return_document=None):
        doc = self.docs.get(query["_id"])
        if doc is None:
            if not upsert:
                return None
            doc = self.docs[query["_id"]] = {"_id": query["_id"]}
        doc.update(update.get("$set", {}))
        for key, step in update.get("$inc", {}).items():
            doc[key] = doc.get(key, 0) + step
        return dict(doc)

    async def delete_one(self, query):
        self.docs.pop(query["_id"], None)


class BrokenCollection(FakeCollection):
    async def find_one_and_update(self, *args, **kwargs):
        raise ConnectionError("mongo down")


def lose_on_rock(service: GameService, user_id: int) -> None:
    service.start_round(user_id)
    service.answer(user_id, "no")
    service.answer(user_id, "no")


def test_sessions_are_isolated_per_user():
    service = GameService()
    service.start_round(1)
    service.answer(1, "yes")
    service.start_round(2)

    assert service.session(1).parent_node is service.store.root
    assert service.session(2).parent_node is None
    assert service.session(2).state is RoundState.AWAITING_ANSWER


def test_teach_is_shared_across_sessions_and_persisted():
    collection = FakeCollection()
    service = GameService(knowledge=KnowledgeRepository(collection))
    lose_on_rock(service, 1)

    asyncio.run(service.teach(1, "Is it yellow?", "yes", "a banana"))

    service.start_round(2)
    service.answer(2, "no")
    assert service.answer(2, "no").text == "Is it yellow?"
    stored = collection.docs[LIVE_TREE_ID]
    assert stored["revision"] == 1
    assert stored["tree"]["no"]["no"]["yes"] == {"guess": "a banana"}
    assert stored["guesses"] == 5


def test_teach_survives_storage_outage(caplog):
    service = GameService(knowledge=KnowledgeRepository(BrokenCollection()))
    lose_on_rock(service, 1)

    asyncio.run(service.teach(1, "Is it yellow?", "yes", "a banana"))

    assert service.session(1).state is RoundState.LEARNED
    assert service.store.snapshot()["no"]["no"]["question"] == "Is it yellow?"
    assert "Failed to persist lesson from user 1" in caplog.text
    service.start_round(2)
    service.answer(2, "no")
    assert service.answer(2, "no").text == "Is it yellow?"


def test_failed_teach_does_not_persist():
    collection = FakeCollection()
    service = GameService(knowledge=KnowledgeRepository(collection))
    lose_on_rock(service, 1)

    with pytest.raises(ValidationError):
        asyncio.run(service.teach(1, " ", "yes", "a banana"))

    assert collection.docs == {}
    assert service.store.snapshot() == INITIAL_TREE


def test_reset_memory_clears_storage_and_other_rounds():
    collection = FakeCollection()
    service = GameService(knowledge=KnowledgeRepository(collection))
    lose_on_rock(service, 1)
    asyncio.run(service.teach(1, "Is it yellow?", "yes", "a banana"))
    lose_on_rock(service, 2)

    asyncio.run(service.reset_memory(1))

    assert service.store.snapshot() == INITIAL_TREE
    assert collection.docs == {}
    with pytest.raises(InvalidState):
        service.confirm_correct(2)


def test_restore_loads_stored_tree():
    tree = {"question": "Is it big?", "yes": {"guess": "a whale"}, "no": {"guess": "a mouse"}}
    collection = FakeCollection([{"_id": LIVE_TREE_ID, "tree": tree, "revision": 3}])
    service = GameService(knowledge=KnowledgeRepository(collection))

    assert asyncio.run(service.restore()) is True
    assert service.store.snapshot() == tree

    service.store.reset()
    assert service.store.snapshot() == INITIAL_TREE


def test_restore_ignores_malformed_tree():
    collection = FakeCollection([{"_id": LIVE_TREE_ID, "tree": {"question": "Half a node?"}}])
    service = GameService(knowledge=KnowledgeRepository(collection))

    assert asyncio.run(service.restore()) is False
    assert service.store.snapshot() == INITIAL_TREE


def test_restore_without_persistence_is_noop():
    service = GameService()
    assert asyncio.run(service.restore()) is False


def test_save_increments_revision():
    collection = FakeCollection()
    repo = KnowledgeRepository(collection)
    service = GameService(knowledge=repo)
    assert asyncio.run(repo.save(service.store)) == 1
    assert asyncio.run(repo.save(service.store)) == 2
    stored = collection.docs[LIVE_TREE_ID]
    assert stored["revision"] == 2
    assert stored["tree"] == INITIAL_TREE


def test_evict_idle_drops_only_stale_sessions():
    service = GameService(idle_seconds=60)
    service.start_round(1)
    service.start_round(2)
    service._last_seen[1] = utcnow() - timedelta(minutes=5)

    assert service.evict_idle() == 1
    assert not service.has_session(1)
    assert service.has_session(2)


def test_sweeper_tick_evicts():
    service = GameService(idle_seconds=60)
    service.start_round(7)
    service._last_seen[7] = utcnow() - timedelta(hours=1)
    sweeper = SessionSweeper(service, interval_seconds=30)

    assert asyncio.run(sweeper.tick()) == 1
    assert not service.has_session(7)


def test_stats_reflect_learning():
    service = GameService()
    assert service.stats().guesses == 4
    lose_on_rock(service, 1)
    asyncio.run(service.teach(1, "Is it yellow?", "yes", "a banana"))
    stats = service.stats()
    assert (stats.questions, stats.guesses, stats.depth) == (4, 5, 3)
