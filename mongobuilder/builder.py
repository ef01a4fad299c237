from contextlib import nullcontext
from copy import copy
import logging

import pymongo

from .client import as_provider, MongoClientProvider
from .compiler import QueryCompiler
from .exc import BaseMongoBuilderException, ConfigurationError, ExecutionError, InvalidQueryError
from .state import QueryState
from . import results

logger = logging.getLogger(__name__)


class QueryBuilder(object):
    """ Fluent MongoDB queries

        Configure a query with chainable methods, then run it with a terminal method:

            qb = QueryBuilder('shop', MongoClient())
            products = qb.collection('products') \
                .filter('title', 'STARTS', 'Wid') \
                .sort('title', 1) \
                .limit(5) \
                .get()

        Every terminal method resets the builder, whether it has succeeded or failed,
        so the same builder can be used for the next query right away.

        NOTE: a QueryBuilder is not thread-safe: it keeps the query being built in a mutable QueryState.
        Either give every thread its own builder (copy() it), or wrap it into Reusable().
    """

    def __init__(self, database: str, client, settings=None):
        """ Init a query builder

        :param database: Name of the database to work with
        :param client: The database client: a CollectionProvider, or a pymongo.MongoClient
        :type client: mongobuilder.client.CollectionProvider | pymongo.MongoClient
        :param settings: Builder settings
        :type settings: mongobuilder.settings.BuilderSettings | dict | None
        """
        self._database = database
        self._client = as_provider(client)
        self._compiler = QueryCompiler(settings)
        self._state = QueryState()

    @classmethod
    def from_uri(cls, database: str, uri: str = 'mongodb://localhost:27017', settings=None, **client_kwargs):
        """ Init a query builder with a new MongoClient

        :param client_kwargs: Keyword arguments for MongoClient()
        """
        return cls(database, MongoClientProvider.from_uri(uri, **client_kwargs), settings)

    def __copy__(self):
        """ Get an independent builder with the same client and settings, and a copy of the current state """
        cls = self.__class__
        result = cls.__new__(cls)
        result.__dict__.update(self.__dict__)
        result._state = copy(self._state)
        return result

    def __repr__(self):
        return '{}({!r}, {!r})'.format(self.__class__.__name__, self._database, self._state)

    @property
    def database(self):
        return self._database

    @property
    def settings(self):
        return self._compiler.settings

    @property
    def state(self):
        """ The query being built. Don't modify it directly

        :rtype: QueryState
        """
        return self._state

    def compile(self):
        """ Compile the current state into (filter, options) without running anything

        :raises ConversionError
        :rtype: (dict, dict)
        """
        return self._compiler.compile(self._state)

    # region Chainable methods

    def collection(self, name: str):
        """ Set the collection to work with """
        if not isinstance(name, str) or not name:
            raise InvalidQueryError('collection name must be a non-empty string; {!r} provided'.format(name))
        self._state.collection = name
        return self

    def projection(self, fields):
        """ Set the fields to load. Replaces any previous projection

        :param fields: List of field names, or a whitespace-separated string
        :raises InvalidQueryError
        """
        self._compiler.handler_project.input(self._state, fields)
        return self

    def filter(self, field: str, comparator: str, value):
        """ Set a condition on a field. Replaces any previous condition on the same field

        :param comparator: EQ, STARTS, ENDS, CONTAINS. Anything else is treated as EQ
        :raises InvalidQueryError
        """
        self._compiler.handler_filter.input(self._state, field, comparator, value)
        return self

    def sort(self, field: str, direction: int = 1):
        """ Sort by a field

        :param direction: +1 ascending, -1 descending
        :raises InvalidQueryError
        """
        self._compiler.handler_sort.input(self._state, field, direction)
        return self

    def skip(self, n: int):
        """ Skip the first `n` documents """
        self._compiler.handler_limit.input(self._state, skip=n)
        return self

    def limit(self, n: int):
        """ Load at most `n` documents """
        self._compiler.handler_limit.input(self._state, limit=n)
        return self

    # endregion

    # region Terminal methods

    def count(self, *, timeout: float = None) -> int:
        """ Count the documents matching the filters

        :param timeout: Deadline for the operation, in seconds. Default: none at this level
        :raises ConfigurationError: no collection set
        :raises ConversionError: invalid identifier in a filter
        :raises ExecutionError: the driver has failed
        """
        def run(collection):
            filter_spec, options = self._compiler.compile_count(self._state)
            self._log_call('count_documents', filter_spec, options)
            return collection.count_documents(filter_spec, **options)
        return self._execute('count', run, timeout)

    def get(self, *, timeout: float = None) -> list:
        """ Load the documents matching the filters

        Every ObjectId in the documents is replaced with its string (unless `stringify_ids=False`)

        :rtype: list[dict]
        """
        def run(collection):
            filter_spec, options = self._compiler.compile(self._state)
            self._log_call('find', filter_spec, options)
            return results.documents_result(collection.find(filter_spec, **options),
                                            stringify=self.settings['stringify_ids'])
        return self._execute('get', run, timeout)

    def insert(self, data, is_many: bool = False, *, timeout: float = None) -> dict:
        """ Insert a document, or a list of documents

        The given documents are not modified: pymongo would have added an `_id` to them.

        :param data: A document (is_many=False), or a list of documents (is_many=True)
        :return: {'inserted_count': int, 'inserted_ids': str | list[str]}
        """
        def run(collection):
            if is_many:
                self._log_call('insert_many', None, {})
                res = collection.insert_many([dict(doc) for doc in data])
            else:
                self._log_call('insert_one', None, {})
                res = collection.insert_one(dict(data))
            return results.insert_result(res, is_many)
        return self._execute('insert', run, timeout)

    def update(self, data: dict, is_many: bool = True, *, timeout: float = None) -> dict:
        """ Set the given fields on the documents matching the filters

        :return: {'matched_count': int, 'modified_count': int}
        """
        def run(collection):
            filter_spec = self._compiler.compile_filter(self._state)
            name = 'update_many' if is_many else 'update_one'
            self._log_call(name, filter_spec, {})
            return results.update_result(getattr(collection, name)(filter_spec, {'$set': data}))
        return self._execute('update', run, timeout)

    def upsert(self, data: dict, *, timeout: float = None) -> dict:
        """ Set the given fields on the first document matching the filters, or insert a new one

        :return: {'matched_count': int, 'modified_count': int, 'upserted_count': int}
        """
        def run(collection):
            filter_spec = self._compiler.compile_filter(self._state)
            self._log_call('update_one', filter_spec, {'upsert': True})
            return results.upsert_result(collection.update_one(filter_spec, {'$set': data}, upsert=True))
        return self._execute('upsert', run, timeout)

    def replace(self, data: dict, upsert: bool = False, *, timeout: float = None) -> dict:
        """ Replace the first document matching the filters with `data`

        :return: {'matched_count': int, 'modified_count': int}
        """
        def run(collection):
            filter_spec = self._compiler.compile_filter(self._state)
            self._log_call('replace_one', filter_spec, {'upsert': upsert})
            return results.update_result(collection.replace_one(filter_spec, data, upsert=upsert))
        return self._execute('replace', run, timeout)

    def delete(self, is_many: bool = True, *, timeout: float = None) -> dict:
        """ Delete the documents matching the filters

        :return: {'matched_count': int, 'deleted_count': int}
        """
        def run(collection):
            filter_spec = self._compiler.compile_filter(self._state)
            name = 'delete_many' if is_many else 'delete_one'
            self._log_call(name, filter_spec, {})
            return results.delete_result(getattr(collection, name)(filter_spec))
        return self._execute('delete', run, timeout)

    # endregion

    def _execute(self, operation: str, run, timeout: float = None):
        """ Run a terminal operation

        :param operation: Name of the operation, for error messages
        :param run: callable(collection) that calls the driver and normalizes the result
        :param timeout: Deadline, seconds
        :raises ConfigurationError, ConversionError, ExecutionError
        """
        try:
            if self._state.collection is None:
                raise ConfigurationError(operation, 'no collection set')
            if timeout is not None and (isinstance(timeout, bool) or
                                        not isinstance(timeout, (int, float)) or
                                        timeout < 0):
                raise InvalidQueryError('timeout must be a non-negative number of seconds; {!r} provided'
                                        .format(timeout))

            deadline = pymongo.timeout(timeout) if timeout is not None else nullcontext()
            with deadline:
                try:
                    collection = self._client.get_collection(self._database, self._state.collection)
                    return run(collection)
                except BaseMongoBuilderException:
                    raise
                except Exception as e:
                    raise ExecutionError(operation, e) from e
        except BaseMongoBuilderException as e:
            logger.error('%s.%s: %s', self._database, self._state.collection, e)
            raise
        finally:
            # Never leak state into the next query
            self._state.reset()

    def _log_call(self, method_name, filter_spec, options):
        logger.debug('%s.%s.%s(%r, **%r)',
                     self._database, self._state.collection, method_name, filter_spec, options)
