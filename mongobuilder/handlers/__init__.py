"""
A QueryBuilder keeps its input in a QueryState, which has a few sections:

* `projection`: [Projection](#projection) selects the fields to be loaded
* `sort`: [Sort](#sort) determines the ordering of the results
* `filters`: [Filter](#filter) selects the documents, using your criteria
* `skip`, `limit`: [Slice](#slice) paginates the results

Every section is handled by a handler that validates its input and compiles it into
a piece of the `filter` document or of the keyword options given to pymongo.
The [Count](#count) handler adapts those options for counting.
"""

from .project import MongoProject
from .sort import MongoSort
from .filter import MongoFilter, \
    Comparator, FilterPredicate, Eq, StartsWith, EndsWith, Contains
from .limit import MongoLimit
from .count import MongoCount
