"""Projection of raw documents onto caller-chosen payload types.

Every typed client operation goes through :func:`convert_to_typed_document`
or :func:`convert_to_typed_search_result`, so all of them share one set of
conversion rules:

* the raw payload is serialized to JSON bytes and validated into the target
  type from those bytes, using pydantic's lax JSON rules (``"20"`` becomes
  ``20.0`` for a float field, ``"twenty"`` is rejected);
* payload keys the target does not declare are dropped;
* required fields that are missing from the payload, and fields sent as
  ``null``, receive the zero value of their annotation when one exists.
  This applies to pydantic models, dataclasses and TypedDicts, including
  nested ones, where a missing nested struct becomes its zero instance;
* every other document field is copied verbatim.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from functools import lru_cache
from types import NoneType, UnionType
from typing import Any, TypeVar, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel, TypeAdapter, ValidationError
from typing_extensions import is_typeddict

from apito_sdk.contracts.document import Document, Payload, SearchResult, TypedDocument, TypedSearchResult
from apito_sdk.contracts.exceptions import ConversionError

_LOG = logging.getLogger(__name__)

T = TypeVar("T")

_PAYLOAD_ADAPTER: TypeAdapter[Payload] = TypeAdapter(Payload)

_NO_ZERO = object()
_SCALAR_ZEROS: dict[Any, Any] = {str: "", int: 0, float: 0.0, bool: False}
_SEQUENCE_TYPES = (list, tuple, set, frozenset, Sequence, MutableSequence)
_MAPPING_TYPES = (dict, Mapping, MutableMapping)


def convert_to_typed_document(raw: Document, data_type: type[T]) -> TypedDocument[T]:
    """Project a raw document's payload onto ``data_type``.

    Raises:
        ConversionError: If the payload cannot be serialized or does not fit
            ``data_type``. ``fields`` lists the offending field paths.
    """
    payload = _fill_zero_values(raw.data, data_type)
    try:
        payload_json = _PAYLOAD_ADAPTER.dump_json(payload)
    except ValueError as exc:
        raise ConversionError(f"failed to marshal raw data: {exc}") from exc

    try:
        typed_data = _adapter(data_type).validate_json(payload_json)
    except ValidationError as exc:
        fields = [_format_loc(error["loc"]) for error in exc.errors()]
        details = "; ".join(f"{_format_loc(error['loc']) or '<root>'}: {error['msg']}" for error in exc.errors())
        _LOG.debug("Typed conversion of document %r failed: %s", raw.id, details)
        raise ConversionError(f"failed to unmarshal to typed data: {details}", fields=fields) from exc

    return TypedDocument[data_type](  # type: ignore[valid-type]
        key=raw.key,
        id=raw.id,
        data=typed_data,
        meta=raw.meta,
        expire_at=raw.expire_at,
        relation_doc_id=raw.relation_doc_id,
        type=raw.type,
    )


def convert_to_typed_search_result(raw: SearchResult, data_type: type[T]) -> TypedSearchResult[T]:
    """Project every document of a search result, keeping order and ``count``.

    Fails atomically: the first document that cannot be converted aborts the
    whole projection.

    Raises:
        ConversionError: With ``index`` set to the failing document's position.
    """
    if raw.count != len(raw.results):
        _LOG.debug("Search result count %d differs from %d returned documents", raw.count, len(raw.results))

    typed_results: list[TypedDocument[T]] = []
    for index, document in enumerate(raw.results):
        try:
            typed_results.append(convert_to_typed_document(document, data_type))
        except ConversionError as exc:
            raise ConversionError(
                f"failed to convert document at index {index}: {exc}",
                fields=exc.fields,
                index=index,
            ) from exc

    return TypedSearchResult[data_type](results=typed_results, count=raw.count)  # type: ignore[valid-type]


def _adapter(data_type: Any) -> TypeAdapter[Any]:
    try:
        return _cached_adapter(data_type)
    except TypeError:
        # unhashable target, e.g. Annotated with Field metadata
        return TypeAdapter(data_type)


@lru_cache(maxsize=256)
def _cached_adapter(data_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(data_type)


def _format_loc(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc)


def _struct_fields(data_type: Any) -> list[tuple[str, str, Any, bool]] | None:
    """Return ``(key, name, annotation, required)`` for struct-like targets, else None."""
    if not isinstance(data_type, type) or get_origin(data_type) is not None:
        return None
    if issubclass(data_type, BaseModel):
        return [
            (field.alias or name, name, field.annotation, field.is_required())
            for name, field in data_type.model_fields.items()
        ]
    if dataclasses.is_dataclass(data_type):
        hints = _type_hints(data_type)
        if hints is None:
            return None
        return [
            (
                field.name,
                field.name,
                hints.get(field.name, Any),
                field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING,
            )
            for field in dataclasses.fields(data_type)
            if field.init
        ]
    if is_typeddict(data_type):
        hints = _type_hints(data_type)
        if hints is None:
            return None
        return [(name, name, hint, name in data_type.__required_keys__) for name, hint in hints.items()]
    return None


def _type_hints(data_type: type) -> dict[str, Any] | None:
    try:
        return get_type_hints(data_type)
    except (NameError, TypeError) as exc:
        _LOG.debug("Cannot resolve annotations of %r, skipping zero values: %s", data_type, exc)
        return None


def _zero_value(annotation: Any, seen: frozenset[Any] = frozenset()) -> Any:
    if isinstance(annotation, type) and annotation in _SCALAR_ZEROS:
        return _SCALAR_ZEROS[annotation]
    if annotation is Any or annotation is NoneType:
        return None

    origin = get_origin(annotation)
    if origin in (Union, UnionType):
        return None if NoneType in get_args(annotation) else _NO_ZERO
    container = origin or annotation
    if container in _SEQUENCE_TYPES:
        return []
    if container in _MAPPING_TYPES:
        return {}
    if _struct_fields(annotation) is None or annotation in seen:
        return _NO_ZERO
    return _fill_struct({}, annotation, seen | {annotation})


def _fill_struct(payload: Mapping[str, Any], data_type: Any, seen: frozenset[Any]) -> dict[str, Any]:
    filled = dict(payload)
    for key, name, annotation, required in _struct_fields(data_type) or ():
        present = key if key in filled else name if name in filled else None
        if present is not None and filled[present] is not None:
            filled[present] = _fill_value(filled[present], annotation, seen)
            continue
        if present is None and not required:
            continue
        # absent required fields and nulls take the zero value of the annotation
        zero = _zero_value(annotation, seen)
        if zero is not _NO_ZERO:
            filled[present or key] = zero
    return filled


def _fill_value(value: Any, annotation: Any, seen: frozenset[Any]) -> Any:
    origin = get_origin(annotation)
    args = get_args(annotation)
    if origin in (Union, UnionType):
        members = [arg for arg in args if arg is not NoneType]
        return _fill_value(value, members[0], seen) if len(members) == 1 else value
    if isinstance(value, list) and origin in _SEQUENCE_TYPES and args:
        return [_fill_value(item, args[0], seen) for item in value]
    if isinstance(value, dict):
        if origin in _MAPPING_TYPES and len(args) == 2:
            return {key: _fill_value(item, args[1], seen) for key, item in value.items()}
        if _struct_fields(annotation) is not None:
            return _fill_struct(value, annotation, seen | {annotation})
    return value


def _fill_zero_values(payload: Payload, data_type: Any) -> Payload:
    return _fill_value(payload, data_type, frozenset())
