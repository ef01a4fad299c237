"""
### Projection

Projection corresponds to the `projection` argument of a MongoDB query:
it selects the fields to be loaded.

```python
qb.collection('users').projection(['name', 'age']).get()
```

A whitespace-separated string is accepted as well:

```python
qb.collection('users').projection('name age').get()
```

Every call replaces the previous projection completely.
An empty projection loads all fields.
"""

from .base import BuilderHandlerBase
from ..exc import InvalidQueryError


class MongoProject(BuilderHandlerBase):
    """ Inclusion projection

        * [] or None: all fields
        * [ 'a', 'b' ]  - array of field names
        * 'a b' - string, split by whitespace
    """

    state_section_name = 'projection'

    def input(self, state, fields):
        # Empty
        if not fields:
            fields = []

        # String syntax
        if isinstance(fields, str):
            fields = fields.split()

        # List
        if not isinstance(fields, (list, tuple)):
            raise InvalidQueryError('projection must be either a list or a string; {} provided'
                                    .format(type(fields)))
        for name in fields:
            self.validate_field_name(name, 'projection')

        # An ordered set: drop duplicates
        state.projection = list(dict.fromkeys(fields))
        return state

    compile_filter = NotImplemented

    def compile_options(self, state):
        if self.is_input_empty(state):
            return {}  # all fields
        return {'projection': {name: 1 for name in state.projection}}
