"""
### Count

Return the number of documents matching the filter, without loading the documents themselves.

```python
qb.collection('users').filter('name', 'STARTS', 'J').count()
```

`Collection.count_documents()` only understands `skip` and `limit`:
projection and sorting make no difference to a count, and are dropped.
"""

from .base import BuilderHandlerBase


class MongoCount(BuilderHandlerBase):
    """ Options for a count query

        Takes the options compiled for a find() and keeps those that count_documents() accepts.
    """

    state_section_name = None  # there is no state for counting

    #: Options that count_documents() accepts
    supported_options = frozenset(('skip', 'limit'))

    def is_input_empty(self, state):
        return True

    # Not Implemented for this handler
    compile_filter = NotImplemented
    compile_options = NotImplemented

    def prepare_options(self, options):
        """ Remove the options a count does not care about

        find() reads `limit=0` as "no limit", while count_documents() rejects it: drop it.

        :param options: Options compiled for Collection.find()
        :rtype: dict
        """
        options = {name: value
                   for name, value in options.items()
                   if name in self.supported_options}
        if options.get('limit') == 0:
            del options['limit']
        return options
