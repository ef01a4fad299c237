"""
Result normalization

Terminal operations never return pymongo's result objects.
Instead, every operation has a small, stable result shape:

* `count()`: int
* `get()`: list of dicts, with every `ObjectId` replaced by its string
* `insert()`: `{'inserted_count': int, 'inserted_ids': str | list[str]}`
* `update()`, `replace()`: `{'matched_count': int, 'modified_count': int}`
* `upsert()`: `{'matched_count': int, 'modified_count': int, 'upserted_count': int}`
* `delete()`: `{'matched_count': int, 'deleted_count': int}`
"""

from typing import Any, Iterable, List

from bson import ObjectId, DBRef


def stringify_ids(value: Any) -> Any:
    """ Walk a document and replace every ObjectId with its string form

        Nested documents and arrays are walked recursively.
        A DBRef becomes a plain `{'$ref': ..., '$id': ...}` document, with its id converted as well.
    """
    if isinstance(value, ObjectId):
        return str(value)
    elif isinstance(value, DBRef):
        return stringify_ids(value.as_doc())
    elif isinstance(value, dict):
        return {k: stringify_ids(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [stringify_ids(v) for v in value]
    else:
        return value


def documents_result(cursor: Iterable[dict], stringify: bool = True) -> List[dict]:
    """ Load all documents from a cursor """
    if stringify:
        return [stringify_ids(doc) for doc in cursor]
    return list(cursor)


def insert_result(result, is_many: bool) -> dict:
    """ Normalize InsertOneResult / InsertManyResult """
    if is_many:
        ids = [str(id) for id in result.inserted_ids]
        return dict(inserted_count=len(ids), inserted_ids=ids)
    else:
        return dict(inserted_count=1, inserted_ids=str(result.inserted_id))


def update_result(result) -> dict:
    """ Normalize UpdateResult """
    return dict(matched_count=result.matched_count,
                modified_count=result.modified_count)


def upsert_result(result) -> dict:
    """ Normalize UpdateResult of an upsert """
    return dict(update_result(result),
                upserted_count=0 if result.upserted_id is None else 1)


def delete_result(result) -> dict:
    """ Normalize DeleteResult

        MongoDB does not report matches for deletes: every matched document is deleted.
    """
    return dict(matched_count=result.deleted_count,
                deleted_count=result.deleted_count)
