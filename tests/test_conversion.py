"""Tests for the typed document conversion layer."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Annotated, Any, Literal

import pytest
from pydantic import BaseModel, Field
from typing_extensions import TypedDict

from apito_sdk.contracts.document import Document, SearchResult, TypedDocument, TypedSearchResult
from apito_sdk.contracts.exceptions import ConversionError
from apito_sdk.conversion import _adapter, convert_to_typed_document, convert_to_typed_search_result


class Todo(BaseModel):
    title: str
    done: bool


class Product(BaseModel):
    price: float


class Profile(BaseModel):
    name: str
    age: int
    score: float
    active: bool
    tags: list[str]
    attrs: dict[str, str]
    nickname: str | None
    role: str = "member"


@dataclass
class TodoRecord:
    title: str
    done: bool = False


@dataclass
class TaskRecord:
    title: str
    done: bool


class TaskDict(TypedDict):
    title: str
    priority: int


class Customer(BaseModel):
    name: str
    age: int


class Order(BaseModel):
    customer: Customer
    note: Customer | None = None


class Basket(BaseModel):
    customers: list[Customer]


class Category(BaseModel):
    name: str
    children: list[Category]


def _doc(data: dict[str, Any], **kwargs: Any) -> Document:
    return Document.model_validate({"id": kwargs.pop("id", "d1"), "data": data, "type": "todo", **kwargs})


# ---------------------------------------------------------------------------
# Single documents
# ---------------------------------------------------------------------------


class TestConvertToTypedDocument:
    def test_converts_todo_payload(self) -> None:
        raw = Document.model_validate({"id": "t1", "data": {"title": "Buy milk", "done": False}, "type": "todo"})

        typed = convert_to_typed_document(raw, Todo)

        assert typed == TypedDocument[Todo](id="t1", data=Todo(title="Buy milk", done=False), type="todo")
        assert isinstance(typed.data, Todo)

    def test_envelope_fields_pass_through(self, raw_document_payload: dict[str, Any]) -> None:
        raw = Document.model_validate(raw_document_payload)

        typed = convert_to_typed_document(raw, Todo)

        assert typed.key == raw.key == "k-1"
        assert typed.id == raw.id
        assert typed.meta == raw.meta
        assert typed.meta is not None and typed.meta.revision == 3
        assert typed.expire_at == raw.expire_at == "2030-01-01T00:00:00Z"
        assert typed.relation_doc_id == raw.relation_doc_id == "rel-9"
        assert typed.type == raw.type

    def test_payload_fields_not_declared_are_dropped(self, raw_document_payload: dict[str, Any]) -> None:
        raw = Document.model_validate(raw_document_payload)

        typed = convert_to_typed_document(raw, Todo)

        assert typed.data.model_dump() == {"title": "Buy milk", "done": False}

    def test_round_trip_matches_source_payload(self) -> None:
        payload = {"title": "Write tests", "done": True}
        raw = _doc(payload)

        typed = convert_to_typed_document(raw, Todo)

        assert json.loads(typed.data.model_dump_json()) == payload

    def test_non_numeric_string_fails_naming_the_field(self) -> None:
        raw = _doc({"price": "twenty"})

        with pytest.raises(ConversionError) as exc_info:
            convert_to_typed_document(raw, Product)

        assert exc_info.value.fields == ("price",)
        assert "price" in str(exc_info.value)
        assert exc_info.value.index is None

    def test_numeric_string_is_coerced(self) -> None:
        typed = convert_to_typed_document(_doc({"price": "20"}), Product)

        assert typed.data.price == 20.0

    def test_missing_required_fields_take_zero_values(self) -> None:
        typed = convert_to_typed_document(_doc({}), Profile)

        assert typed.data == Profile(
            name="",
            age=0,
            score=0.0,
            active=False,
            tags=[],
            attrs={},
            nickname=None,
        )
        assert typed.data.role == "member"

    def test_zero_values_use_field_alias(self) -> None:
        class Aliased(BaseModel):
            display_name: str = Field(alias="displayName")

        typed = convert_to_typed_document(_doc({}), Aliased)

        assert typed.data.display_name == ""

    def test_nested_field_failure_reports_dotted_path(self) -> None:
        class Order(BaseModel):
            items: list[Product]

        with pytest.raises(ConversionError) as exc_info:
            convert_to_typed_document(_doc({"items": [{"price": 1}, {"price": "n/a"}]}), Order)

        assert exc_info.value.fields == ("items.1.price",)

    def test_dataclass_target(self) -> None:
        typed = convert_to_typed_document(_doc({"title": "Dataclass", "extra": 1}), TodoRecord)

        assert typed.data == TodoRecord(title="Dataclass", done=False)

    def test_builtin_mapping_target(self) -> None:
        typed = convert_to_typed_document(_doc({"a": 1, "b": "2"}), dict[str, int])

        assert typed.data == {"a": 1, "b": 2}

    def test_unhashable_target_type_is_supported(self) -> None:
        target = Annotated[dict[str, int], {"source": "apito"}]

        assert _adapter(target).validate_python({"a": "1"}) == {"a": 1}


# ---------------------------------------------------------------------------
# Zero values
# ---------------------------------------------------------------------------


class TestZeroValues:
    def test_missing_field_inside_nested_model(self) -> None:
        typed = convert_to_typed_document(_doc({"customer": {"name": "Ada"}}), Order)

        assert typed.data.customer == Customer(name="Ada", age=0)

    def test_absent_nested_model_becomes_zero_instance(self) -> None:
        typed = convert_to_typed_document(_doc({}), Order)

        assert typed.data.customer == Customer(name="", age=0)
        assert typed.data.note is None

    def test_null_nested_model_becomes_zero_instance(self) -> None:
        typed = convert_to_typed_document(_doc({"customer": None}), Order)

        assert typed.data.customer == Customer(name="", age=0)

    def test_optional_nested_model_is_filled_when_present(self) -> None:
        typed = convert_to_typed_document(_doc({"customer": {}, "note": {"name": "vip"}}), Order)

        assert typed.data.note == Customer(name="vip", age=0)

    def test_list_items_are_filled(self) -> None:
        typed = convert_to_typed_document(_doc({"customers": [{"name": "a"}, {"age": 2}]}), Basket)

        assert typed.data.customers == [Customer(name="a", age=0), Customer(name="", age=2)]

    def test_recursive_model_is_filled_at_every_level(self) -> None:
        typed = convert_to_typed_document(_doc({"children": [{"name": "leaf"}]}), Category)

        assert typed.data == Category(name="", children=[Category(name="leaf", children=[])])

    def test_dataclass_missing_required_field(self) -> None:
        typed = convert_to_typed_document(_doc({"title": "a"}), TaskRecord)

        assert typed.data == TaskRecord(title="a", done=False)

    def test_dataclass_keeps_declared_default(self) -> None:
        typed = convert_to_typed_document(_doc({"title": "a"}), TodoRecord)

        assert typed.data.done is False

    def test_typed_dict_missing_required_field(self) -> None:
        typed = convert_to_typed_document(_doc({"title": "a"}), TaskDict)

        assert typed.data == {"title": "a", "priority": 0}

    def test_null_scalar_takes_zero_value(self) -> None:
        typed = convert_to_typed_document(_doc({"title": None, "done": True}), Todo)

        assert typed.data == Todo(title="", done=True)

    def test_null_optional_field_stays_none(self) -> None:
        typed = convert_to_typed_document(_doc({"nickname": None}), Profile)

        assert typed.data.nickname is None

    def test_field_without_zero_value_still_fails(self) -> None:
        class Shipment(BaseModel):
            order: Order
            carrier: Literal["ups", "dhl"]

        with pytest.raises(ConversionError) as exc_info:
            convert_to_typed_document(_doc({}), Shipment)

        assert exc_info.value.fields == ("carrier",)

    def test_source_document_is_left_untouched(self) -> None:
        raw = _doc({})

        convert_to_typed_document(raw, Profile)

        assert raw.data == {}

    def test_each_call_builds_a_fresh_instance(self) -> None:
        raw = _doc({"title": "Same", "done": True})

        first = convert_to_typed_document(raw, Todo)
        second = convert_to_typed_document(raw, Todo)

        assert first == second
        assert first is not second


# ---------------------------------------------------------------------------
# Search results
# ---------------------------------------------------------------------------


class TestConvertToTypedSearchResult:
    def test_preserves_order_and_count(self) -> None:
        raw = SearchResult(
            results=[_doc({"title": f"todo-{i}", "done": i % 2 == 0}, id=f"t{i}") for i in range(5)],
            count=5,
        )

        typed = convert_to_typed_search_result(raw, Todo)

        assert isinstance(typed, TypedSearchResult)
        assert typed.count == 5
        assert [doc.id for doc in typed.results] == ["t0", "t1", "t2", "t3", "t4"]
        assert [doc.data.title for doc in typed.results] == [f"todo-{i}" for i in range(5)]

    def test_empty_result(self) -> None:
        typed = convert_to_typed_search_result(SearchResult(results=[], count=0), Todo)

        assert typed.results == []
        assert typed.count == 0

    def test_count_mismatch_passes_through(self) -> None:
        raw = SearchResult(results=[_doc({"title": "only", "done": False})], count=2)

        typed = convert_to_typed_search_result(raw, Todo)

        assert typed.count == 2
        assert len(typed.results) == 1

    def test_failure_is_atomic_and_reports_index(self) -> None:
        raw = SearchResult(
            results=[
                _doc({"price": 1.5}, id="p0"),
                _doc({"price": 2}, id="p1"),
                _doc({"price": "twenty"}, id="p2"),
                _doc({"price": 4}, id="p3"),
            ],
            count=4,
        )

        with pytest.raises(ConversionError) as exc_info:
            convert_to_typed_search_result(raw, Product)

        assert exc_info.value.index == 2
        assert "index 2" in str(exc_info.value)
        assert exc_info.value.fields == ("price",)
