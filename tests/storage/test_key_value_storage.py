from __future__ import annotations

import json
import logging
import threading

from src.school_attendance.school_attendance.roster.repository import SchoolRepository
from src.school_attendance.school_attendance.storage.bridge import KeyValuePersistence
from src.school_attendance.school_attendance.storage.codec import loads_schools
from src.school_attendance.school_attendance.storage.json_file_store import JsonFileKeyValueStore
from src.school_attendance.school_attendance.storage.migration import migrate_legacy_classes


class DictStore:
    def __init__(self, data=None):
        self.data = dict(data or {})

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value


class BrokenStore:
    def get(self, key):
        raise OSError("disk gone")

    def set(self, key, value):
        raise OSError("disk gone")


class FixedIds:
    def new_id(self):
        return "school-1"


def test_json_file_store_keeps_keys_independent(tmp_path):
    store = JsonFileKeyValueStore(tmp_path / "nested" / "storage.json")

    assert store.get("a") is None
    store.set("a", "[]")
    store.set("b", "texto ç")

    assert store.get("a") == "[]"
    assert JsonFileKeyValueStore(store.path).get("b") == "texto ç"


def test_json_file_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("{broken", encoding="utf-8")
    store = JsonFileKeyValueStore(path)

    assert store.get("a") is None
    store.set("a", "x")
    assert json.loads(path.read_text(encoding="utf-8")) == {"a": "x"}


def test_persistence_reads_and_writes_its_key():
    store = DictStore()
    persistence = KeyValuePersistence(store, "k")

    assert persistence.load() is None
    persistence.save("[]")
    assert store.data == {"k": "[]"}
    assert persistence.load() == "[]"


def test_persistence_io_errors_do_not_propagate():
    persistence = KeyValuePersistence(BrokenStore(), "k")

    assert persistence.load() is None
    persistence.save("[]")


def test_migration_copies_legacy_classes_once():
    legacy = json.dumps([{"id": "c1", "name": "Turma A", "students": [{"id": "s1", "name": "Ana", "attendance": {}}]}])
    store = DictStore({"old": legacy})

    assert migrate_legacy_classes(store, key="new", legacy_key="old", school_name="Minha Escola", ids=FixedIds())
    migrated = json.loads(store.data["new"])
    assert migrated[0]["id"] == "school-1"
    assert migrated[0]["classes"][0]["students"][0]["name"] == "Ana"
    assert store.data["old"] == legacy

    assert migrate_legacy_classes(store, key="new", legacy_key="old", school_name="x", ids=FixedIds()) is False


def test_migration_skips_when_nothing_to_migrate():
    store = DictStore()

    assert migrate_legacy_classes(store, key="new", legacy_key="old", school_name="x", ids=FixedIds()) is False
    assert store.data == {}


def test_migration_skips_unreadable_storage():
    assert migrate_legacy_classes(BrokenStore(), key="new", legacy_key="old", school_name="x", ids=FixedIds()) is False


def _run_in_threads(target, workers: int) -> None:
    threads = [threading.Thread(target=target, args=(w,)) for w in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()


def test_json_file_store_concurrent_writers_keep_every_key(tmp_path):
    store = JsonFileKeyValueStore(tmp_path / "storage.json")

    def write(worker):
        for n in range(25):
            store.set(f"k{worker}-{n}", str(n))

    _run_in_threads(write, 8)

    data = json.loads((tmp_path / "storage.json").read_text(encoding="utf-8"))
    assert len(data) == 8 * 25
    assert [p.name for p in tmp_path.iterdir()] == ["storage.json"]


def test_concurrent_repository_mutations_are_all_saved(tmp_path, caplog):
    store = JsonFileKeyValueStore(tmp_path / "storage.json")
    repo = SchoolRepository(KeyValuePersistence(store, "k"))
    school_class = repo.add_class(repo.add_school("Escola").id, "Turma")

    def add_students(worker):
        for n in range(50):
            repo.add_student(school_class.id, f"Aluno {worker}-{n}")

    with caplog.at_level(logging.ERROR):
        _run_in_threads(add_students, 8)

    assert [r for r in caplog.records if r.levelno >= logging.ERROR] == []
    saved = loads_schools(store.get("k"))
    assert len(saved[0].classes[0].students) == 8 * 50
    assert len(school_class.students) == 8 * 50
