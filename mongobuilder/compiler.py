from typing import Tuple

from . import handlers
from .settings import BuilderSettings


class QueryCompiler:
    """ Turns a QueryState into arguments for pymongo

        Holds one handler per QueryState section; QueryBuilder uses the same handlers
        to validate the input of its chainable methods.
    """

    def __init__(self, settings=None):
        """ Init the compiler

        :type settings: BuilderSettings | dict | None
        """
        self.settings = BuilderSettings.from_value(settings)

        # Query Object handlers
        self.handler_project = handlers.MongoProject(self.settings)
        self.handler_sort = handlers.MongoSort(self.settings)
        self.handler_filter = handlers.MongoFilter(self.settings)
        self.handler_limit = handlers.MongoLimit(self.settings)
        self.handler_count = handlers.MongoCount(self.settings)

    def compile_filter(self, state) -> dict:
        """ Compile the filter document

        :raises ConversionError: invalid identifier given to an EQ filter
        """
        return self.handler_filter.compile_filter(state)

    def compile_options(self, state, count: bool = False) -> dict:
        """ Compile keyword options for Collection.find()

        Only the options that were set are present: an unset option is omitted, never given as None.
        """
        options = {}
        options.update(self.handler_project.compile_options(state))
        options.update(self.handler_sort.compile_options(state))
        options.update(self.handler_limit.compile_options(state, count=count))
        return options

    def compile(self, state) -> Tuple[dict, dict]:
        """ Compile a QueryState into (filter, options) for Collection.find()

        :type state: mongobuilder.state.QueryState
        :raises ConversionError
        """
        return self.compile_filter(state), self.compile_options(state)

    def compile_count(self, state) -> Tuple[dict, dict]:
        """ Compile a QueryState into (filter, options) for Collection.count_documents() """
        return self.compile_filter(state), \
               self.handler_count.prepare_options(self.compile_options(state, count=True))


def compile_query(state, settings=None) -> Tuple[dict, dict]:
    """ Compile a QueryState into a (filter, options) pair

    :type state: mongobuilder.state.QueryState
    :type settings: BuilderSettings | dict | None
    """
    return QueryCompiler(settings).compile(state)
