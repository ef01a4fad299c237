"""
MongoBuilder is a fluent query builder for [pymongo](https://pymongo.readthedocs.io/).

Describe a query with chained calls, then run it with one terminal method:

```python
from pymongo import MongoClient
from mongobuilder import QueryBuilder

qb = QueryBuilder('shop', MongoClient())

widgets = qb.collection('products') \\
    .filter('title', 'STARTS', 'Wid') \\
    .projection(['title', 'price']) \\
    .sort('title', 1) \\
    .limit(5) \\
    .get()
```

Results are plain Python objects: lists of dicts with `ObjectId`s converted to strings,
and small dicts with counts for writes.
Failures are raised as `ConfigurationError`, `ConversionError`, or `ExecutionError`.
"""

# Exceptions that are used here and there
from .exc import *

# QueryState keeps the input of the builder, and handlers compile it into pymongo arguments
from .state import QueryState
from . import handlers
from .handlers import Comparator
from .compiler import QueryCompiler, compile_query

# The database client capability
from .client import CollectionProvider, MongoClientProvider

# Settings
from .settings import BuilderSettings

# QueryBuilder is the man that puts it all together
from .builder import QueryBuilder

# Helpers
# Reusable builders (so that every query chain gets its own state)
from .util import Reusable
