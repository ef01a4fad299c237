from copy import copy


class QueryState:
    """ Builder inputs accumulated for a single logical query

        A QueryState is owned by exactly one QueryBuilder. Chainable methods mutate it,
        and every terminal operation resets it, whether it has succeeded or not.

        * collection: None, or str: the collection to work with
        * filters: {field: FilterPredicate}. All conditions are AND-ed together
        * projection: [field, ...]: fields to include. Empty list means all fields
        * sort, direction: None, or the field to sort by; +1 or -1
        * skip, limit: None, or int
    """

    __slots__ = ('collection', 'filters', 'projection', 'sort', 'direction', 'skip', 'limit')

    def __init__(self):
        self.reset()

    def reset(self):
        """ Restore every field to its default value. Can be called any number of times """
        self.collection = None
        self.filters = {}
        self.projection = []
        self.sort = None
        self.direction = 1
        self.skip = None
        self.limit = None
        return self

    def is_empty(self):
        """ Test whether the state is in its default condition """
        return self.collection is None and \
               not self.filters and \
               not self.projection and \
               self.sort is None and \
               self.direction == 1 and \
               self.skip is None and \
               self.limit is None

    def export(self):
        """ Get a plain dict snapshot of the state: for logging and debugging """
        return dict(
            collection=self.collection,
            filters={field: repr(predicate) for field, predicate in self.filters.items()},
            projection=list(self.projection),
            sort=self.sort,
            direction=self.direction,
            skip=self.skip,
            limit=self.limit,
        )

    def __copy__(self):
        # Containers are copied: otherwise two builders would share their filters
        result = self.__class__.__new__(self.__class__)
        for name in self.__slots__:
            setattr(result, name, copy(getattr(self, name)))
        return result

    def __repr__(self):
        return '{}({})'.format(
            self.__class__.__name__,
            ', '.join('{}={!r}'.format(k, v) for k, v in self.export().items())
        )
