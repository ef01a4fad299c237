"""
### Slice

Slicing corresponds to the `skip` and `limit` arguments of a MongoDB query.

* `limit` would limit the number of documents returned
* `skip` would shift the "window" a number of documents

Together, these two elements implement pagination.

```python
qb.collection('users').skip(200).limit(100).get()  # the third page
```

A value of `None` means "not set", and such a value is never sent to the driver.
Note that a zero is a value: `skip(0)` is sent as `skip=0`.
"""

from .base import BuilderHandlerBase
from ..exc import InvalidQueryError


class MongoLimit(BuilderHandlerBase):
    """ Skip and limit

        Handles two fields:
        * 'skip': None, or int
        * 'limit': None, or int
    """

    state_section_name = 'limit'

    def __init__(self, settings):
        super(MongoLimit, self).__init__(settings)

        # Config
        #: The maximum number of documents that can be loaded with a query.
        #: This value is forced onto every query, except for counts.
        self.max_items = settings['max_items']

    def input(self, state, skip=None, limit=None):
        # Validate
        for name, value in (('skip', skip), ('limit', limit)):
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidQueryError('{} must be a non-negative integer; {!r} provided'
                                        .format(name, value))

        # Only store what was given
        if skip is not None:
            state.skip = skip
        if limit is not None:
            state.limit = limit
        return state

    def is_input_empty(self, state):
        return state.skip is None and state.limit is None

    compile_filter = NotImplemented

    def compile_options(self, state, count=False):
        """ Compile skip & limit

        :param count: Compiling for a count query. `max_items` does not apply.
        """
        options = {}
        if state.skip is not None:
            options['skip'] = state.skip

        limit = state.limit
        # Max limit
        if self.max_items and not count:
            limit = min(self.max_items, limit or self.max_items)
        if limit is not None:
            options['limit'] = limit

        return options
