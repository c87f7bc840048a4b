import json

import pytest

from rolodex.memory_storage import DEFAULT_SEED_FILE, InMemoryDocumentStore, load_seed_documents


def test_insert_assigns_unique_ids_and_keeps_order():
    store = InMemoryDocumentStore()

    first = store.insert_document("recipes", {"name": "A"})
    second = store.insert_document("recipes", {"name": "B"})

    assert first != second
    assert store.list_documents("recipes") == [(first, {"name": "A"}), (second, {"name": "B"})]


def test_listed_documents_are_copies():
    store = InMemoryDocumentStore()
    store.insert_document("recipes", {"name": "A", "tags": ["x"]})

    _, fields = store.list_documents("recipes")[0]
    fields["tags"].append("mutated")

    assert store.list_documents("recipes")[0][1]["tags"] == ["x"]


def test_delete_missing_document_is_a_no_op():
    store = InMemoryDocumentStore()
    doc_id = store.insert_document("recipes", {"name": "A"})

    store.delete_document("recipes", "missing")
    store.delete_document("other", doc_id)

    assert [item[0] for item in store.list_documents("recipes")] == [doc_id]


def test_seed_records_keep_their_ids():
    store = InMemoryDocumentStore([{"id": "seed-1", "name": "Seeded"}, {"name": "No id"}])

    documents = store.list_documents("recipes")

    assert documents[0] == ("seed-1", {"name": "Seeded"})
    assert documents[1][0]
    assert documents[1][1] == {"name": "No id"}


def test_bundled_seed_file_is_valid():
    records = load_seed_documents(DEFAULT_SEED_FILE)

    assert records
    assert all(isinstance(record["tags"], list) for record in records)


def test_from_seed_file_uses_collection(tmp_path):
    seed_file = tmp_path / "seed.json"
    seed_file.write_text(json.dumps([{"name": "Pesto"}]))

    store = InMemoryDocumentStore.from_seed_file(seed_file, seed_collection="family")

    assert store.list_documents("recipes") == []
    assert store.list_documents("family")[0][1] == {"name": "Pesto"}


def test_seed_file_must_hold_a_list_of_objects(tmp_path):
    seed_file = tmp_path / "seed.json"
    seed_file.write_text(json.dumps({"name": "not a list"}))

    with pytest.raises(ValueError):
        load_seed_documents(seed_file)
