"""
### Sort

Sorting corresponds to the `sort` argument of a MongoDB query.

Only one sort key is supported:

```python
qb.collection('users').sort('age', -1).get()  # age, descending
```

The direction is given to pymongo as is: use `+1` for ascending order and `-1` for descending.
"""

from .base import BuilderHandlerBase
from ..exc import InvalidQueryError


class MongoSort(BuilderHandlerBase):
    """ Single-key sorting

        * None: no sorting
        * (field, direction): sort by one field. direction = +1 | -1
    """

    state_section_name = 'sort'

    def input(self, state, field, direction=1):
        self.validate_field_name(field, 'sort')

        # Validate direction: any non-zero integer
        if isinstance(direction, bool) or not isinstance(direction, int) or direction == 0:
            raise InvalidQueryError('sort direction must be a non-zero integer; {!r} provided'
                                    .format(direction))

        state.sort = field
        state.direction = direction
        return state

    def is_input_empty(self, state):
        return state.sort is None

    compile_filter = NotImplemented

    def compile_options(self, state):
        if self.is_input_empty(state):
            return {}  # short-circuit
        # pymongo wants a list of (key, direction) pairs
        return {'sort': [(state.sort, state.direction)]}
