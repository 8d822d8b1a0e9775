"""Unit tests for the typed Collection facade."""

import pytest
from pydantic import BaseModel

from tinyodm.firestore import (
    AlreadyExistsError,
    Collection,
    CollectionMismatchError,
    CollectionName,
    DeserializationError,
    NotFoundError,
    ProjectMismatchError,
    SerializationError,
)
from tinyodm.firestore.runtime.paging import Page

PROJECT = "my-project"
PREFIX = f"projects/{PROJECT}/databases/(default)/documents"


class Person(BaseModel):
    name: str
    age: int


def people(transport) -> Collection[Person]:
    return Collection(transport, CollectionName.new(PROJECT, "people"), Person)


class TestCollectionBasics:
    def test_root_rejected(self, fake_transport):
        with pytest.raises(ValueError):
            Collection(fake_transport, CollectionName.root(PROJECT), dict)

    def test_document_name(self, fake_transport):
        collection = people(fake_transport)

        assert collection.document_name("jack").name == f"{PREFIX}/people/jack"

    def test_subcollection(self, fake_transport):
        devices = people(fake_transport).subcollection("jack", "devices", dict)

        assert devices.name.name == f"{PREFIX}/people/jack/devices"
        assert devices.model is dict

    def test_repr(self, fake_transport):
        assert repr(people(fake_transport)) == f"Collection('{PREFIX}/people', model=Person)"


class TestWrites:
    """Test create, upsert and update semantics."""

    @pytest.mark.asyncio
    async def test_create_assigns_key(self, fake_transport):
        collection = people(fake_transport)

        key = await collection.create(Person(name="Jack", age=3))

        assert key == CollectionName.new(PROJECT, "people").document("auto1")
        assert fake_transport.calls == [("create", PREFIX, "people", None)]
        assert await collection.get(key) == Person(name="Jack", age=3)

    @pytest.mark.asyncio
    async def test_create_in_subcollection_uses_document_parent(self, fake_transport):
        devices = people(fake_transport).subcollection("jack", "devices", dict)

        key = await devices.create({"model": "phone"})

        assert fake_transport.calls[0] == ("create", f"{PREFIX}/people/jack", "devices", None)
        assert key.parent() == devices.name

    @pytest.mark.asyncio
    async def test_create_with_key(self, fake_transport):
        collection = people(fake_transport)

        await collection.create_with_key(Person(name="Jack", age=3), "jack")

        assert fake_transport.calls == [("update", f"{PREFIX}/people/jack", False)]
        with pytest.raises(AlreadyExistsError):
            await collection.create_with_key(Person(name="Jill", age=4), "jack")
        assert await collection.get("jack") == Person(name="Jack", age=3)

    @pytest.mark.asyncio
    async def test_try_create(self, fake_transport):
        collection = people(fake_transport)

        assert await collection.try_create(Person(name="Jack", age=3), "jack") is True
        assert await collection.try_create(Person(name="Jill", age=4), "jack") is False
        assert (await collection.get("jack")).name == "Jack"

    @pytest.mark.asyncio
    async def test_upsert_replaces(self, fake_transport):
        collection = people(fake_transport)

        await collection.upsert(Person(name="Jack", age=3), "jack")
        await collection.upsert(Person(name="Jack", age=4), "jack")

        assert (await collection.get("jack")).age == 4
        assert [c[2] for c in fake_transport.calls if c[0] == "update"] == [None, None]

    @pytest.mark.asyncio
    async def test_update_requires_existing(self, fake_transport):
        collection = people(fake_transport)

        with pytest.raises(NotFoundError):
            await collection.update(Person(name="Jack", age=3), "jack")

        await collection.upsert(Person(name="Jack", age=3), "jack")
        await collection.update(Person(name="Jack", age=5), "jack")
        assert (await collection.get("jack")).age == 5

    @pytest.mark.asyncio
    async def test_write_accepts_full_document_name(self, fake_transport):
        collection = people(fake_transport)
        key = collection.document_name("jack")

        await collection.upsert(Person(name="Jack", age=3), key)

        assert f"{PREFIX}/people/jack" in fake_transport.documents

    @pytest.mark.asyncio
    async def test_foreign_key_rejected_before_request(self, fake_transport):
        collection = people(fake_transport)
        pets = CollectionName.new(PROJECT, "pets").document("rex")
        foreign = CollectionName.new("other", "people").document("jack")

        with pytest.raises(CollectionMismatchError):
            await collection.upsert(Person(name="Rex", age=1), pets)
        with pytest.raises(ProjectMismatchError):
            await collection.get(foreign)
        with pytest.raises(CollectionMismatchError):
            await collection.delete(pets)

        assert fake_transport.calls == []

    @pytest.mark.asyncio
    async def test_unserializable_value_rejected_before_request(self, fake_transport):
        collection = Collection(fake_transport, CollectionName.new(PROJECT, "things"), dict)

        with pytest.raises(SerializationError):
            await collection.upsert({"bad": object()}, "x")

        assert fake_transport.calls == []


class TestReads:
    @pytest.mark.asyncio
    async def test_get_missing(self, fake_transport):
        with pytest.raises(NotFoundError):
            await people(fake_transport).get("nobody")

    @pytest.mark.asyncio
    async def test_try_get_missing(self, fake_transport):
        assert await people(fake_transport).try_get("nobody") is None

    @pytest.mark.asyncio
    async def test_get_wrong_shape(self, fake_transport, make_document):
        fake_transport.documents[f"{PREFIX}/people/jack"] = make_document(
            "people/jack", name="Jack"
        )

        with pytest.raises(DeserializationError) as exc:
            await people(fake_transport).get("jack")

        assert exc.value.name == f"{PREFIX}/people/jack"

    @pytest.mark.asyncio
    async def test_list_streams_typed_documents(self, transport_factory, make_document):
        transport = transport_factory(
            [
                Page(
                    documents=(make_document("people/jack", name="Jack", age=3),),
                    next_page_token="t1",
                ),
                Page(documents=(make_document("people/jill", name="Jill", age=4),)),
            ]
        )

        docs = await people(transport).list().with_page_size(1).collect()

        assert [d.value for d in docs] == [Person(name="Jack", age=3), Person(name="Jill", age=4)]
        assert [d.name.document_id for d in docs] == ["jack", "jill"]
        assert [r.page_size for r in transport.list_requests] == [1, 1]


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_existing(self, fake_transport):
        collection = people(fake_transport)
        await collection.upsert(Person(name="Jack", age=3), "jack")

        await collection.delete("jack")

        assert await collection.try_get("jack") is None
        assert ("delete", f"{PREFIX}/people/jack", True) in fake_transport.calls

    @pytest.mark.asyncio
    async def test_delete_missing(self, fake_transport):
        with pytest.raises(NotFoundError):
            await people(fake_transport).delete("nobody")
