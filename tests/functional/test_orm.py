"""
Functional tests for the model registry, including a relationship-style
workflow across several sheets.
"""

import pytest

from sheets_orm import SheetsORM
from sheets_orm.core.base_service import Model
from sheets_orm.core.exceptions import ModelDefinitionError, ModelNotFoundError, ValidationError
from sheets_orm.store.sql import SqlSheetStore
from sheets_orm.utils.ids import SequentialIdGenerator


class TestRegistry:
    """Test model definition and lookup"""

    def test_define_and_lookup(self, orm):
        users = orm.define_model("User", schema={"id": {"type": "string"}})

        assert orm.model("User") is users
        assert users.sheet_name == "User"
        assert users.primary_key == "id"
        assert orm.models == {"User": users}

    def test_sheet_name_and_primary_key_overrides(self, orm):
        model = orm.define_model("Book", sheet_name="books_v2", primary_key="isbn",
                                 schema={"isbn": {"type": "string", "required": True}})
        assert model.sheet_name == "books_v2"
        assert model.primary_key == "isbn"

    def test_duplicate_definition_rejected(self, orm):
        orm.define_model("User")
        with pytest.raises(ModelDefinitionError, match="Model 'User' already defined"):
            orm.define_model("User")

    def test_unknown_model(self, orm):
        with pytest.raises(ModelNotFoundError) as exc_info:
            orm.model("Ghost")
        assert str(exc_info.value) == "Model 'Ghost' not found"
        # Also usable where a KeyError is expected
        assert isinstance(exc_info.value, KeyError)

    def test_store_is_required(self):
        with pytest.raises(ModelDefinitionError):
            SheetsORM(None)

    def test_init_models_creates_every_sheet(self, orm):
        orm.define_model("A", schema={"id": {"type": "string"}})
        orm.define_model("B", schema={"id": {"type": "string"}})

        assert orm.init_models() is orm
        assert all(model.initialized for model in orm.models.values())
        assert orm.store.get_sheet("A") is not None
        assert orm.store.get_sheet("B") is not None

    def test_from_url_builds_sql_store(self):
        orm = SheetsORM.from_url("sqlite:///:memory:")
        assert isinstance(orm.store, SqlSheetStore)
        orm.store.engine.dispose()


class TestCustomPrimaryKey:
    """Models keyed by something other than ``id``"""

    def test_crud_by_custom_key(self, orm):
        books = orm.define_model("Book", primary_key="isbn", schema={
            "isbn": {"type": "string", "required": True},
            "title": {"type": "string", "required": True},
        })
        books.create({"isbn": "978-0", "title": "Dune"})

        assert books.find_by_id("978-0")["title"] == "Dune"
        assert books.update("978-0", {"title": "Dune Messiah"})["title"] == "Dune Messiah"
        assert books.delete("978-0") is True

    def test_no_id_generated_for_custom_key(self, orm):
        books = orm.define_model("Book", primary_key="isbn", schema={"isbn": {"type": "string", "required": True}})
        with pytest.raises(Exception, match="Field 'isbn' is required"):
            books.create({})

    def test_optional_custom_key_is_still_required_on_create(self, orm):
        books = orm.define_model("Book", primary_key="isbn", schema={
            "isbn": {"type": "string"},
            "title": {"type": "string"},
        })
        with pytest.raises(ValidationError) as exc_info:
            books.create({"title": "Untitled"})

        assert exc_info.value.errors == ["Field 'isbn' is required"]
        assert books.count() == 0


class TestRelationshipWorkflow:
    """Authors, books and a join sheet linked by ids"""

    @pytest.fixture
    def library(self, orm):
        ids = SequentialIdGenerator()
        authors = orm.define_model("Author", id_generator=ids, schema={
            "id": {"type": "string"},
            "name": {"type": "string", "required": True},
        })
        books = orm.define_model("Book", id_generator=ids, schema={
            "id": {"type": "string"},
            "title": {"type": "string", "required": True},
            "authorId": {"type": "string", "required": True},
            "year": {"type": "number"},
        })
        tags = orm.define_model("BookTag", id_generator=ids, timestamps=False, schema={
            "id": {"type": "string"},
            "bookId": {"type": "string", "required": True},
            "tag": {"type": "string", "required": True},
        })
        orm.init_models()
        return authors, books, tags

    def test_linked_reads(self, library):
        authors, books, tags = library

        verne = authors.create({"name": "Jules Verne"})
        austen = authors.create({"name": "Jane Austen"})
        nautilus = books.create({"title": "Twenty Thousand Leagues", "authorId": verne["id"], "year": 1870})
        books.create({"title": "Around the World", "authorId": verne["id"], "year": 1872})
        books.create({"title": "Emma", "authorId": austen["id"], "year": 1815})
        tags.create_many([
            {"bookId": nautilus["id"], "tag": "classic"},
            {"bookId": nautilus["id"], "tag": "adventure"},
        ])

        verne_titles = [b["title"] for b in books.find_all({"where": {"authorId": verne["id"]}, "orderBy": {"year": "desc"}})]
        assert verne_titles == ["Around the World", "Twenty Thousand Leagues"]

        assert books.count({"authorId": austen["id"]}) == 1
        assert [t["tag"] for t in tags.find({"bookId": nautilus["id"]})] == ["classic", "adventure"]

        author_of_nautilus = authors.find_by_id(books.find_by_id(nautilus["id"])["authorId"])
        assert author_of_nautilus["name"] == "Jules Verne"

        for link in tags.find_all():
            assert tags.delete(link["id"])
        assert tags.count() == 0

    def test_models_share_one_store(self, library, orm):
        authors, books, _ = library
        assert isinstance(authors, Model) and authors.store is books.store is orm.store
