"""
### Filter

Filtering corresponds to the `filter` argument of a MongoDB query.

Every `filter()` call sets a condition on one field.
All conditions are AND-ed together, and a second condition on the same field replaces the first one.

```python
qb.collection('users') \
    .filter('sex', 'EQ', 'female') \
    .filter('name', 'STARTS', 'Jo') \
    .get()
```

#### Comparators

* `EQ`: equality check: `{ field: value }`
* `STARTS`: case-insensitive prefix: `{ field: { $regex: '^value', $options: 'i' } }`
* `ENDS`: case-insensitive suffix: `{ field: { $regex: 'value$', $options: 'i' } }`
* `CONTAINS`: case-insensitive substring: `{ field: { $regex: 'value', $options: 'i' } }`

An unknown comparator is treated as `EQ`.
The value is used in the regular expression as is: it is not escaped.

#### Identity field

An `EQ` condition on the identity field (`_id`, unless configured otherwise) converts
the value into an `ObjectId`. The conversion happens when the query is executed,
and an invalid value fails it with a `ConversionError`.
"""

from enum import Enum

from bson import ObjectId
from bson.errors import InvalidId

from .base import BuilderHandlerBase
from ..exc import InvalidQueryError, ConversionError


class Comparator(str, Enum):
    """ Filter comparators """
    EQ = 'EQ'
    STARTS = 'STARTS'
    ENDS = 'ENDS'
    CONTAINS = 'CONTAINS'

    @classmethod
    def parse(cls, value):
        """ Get a Comparator from a string. Unknown values fall back to EQ """
        try:
            return cls(value)
        except ValueError:
            return cls.EQ


# region Filter Predicate Classes

class FilterPredicate:
    """ A condition on a single field """

    __slots__ = ('value',)

    #: The comparator this predicate implements
    comparator = None

    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return '{}({!r})'.format(self.__class__.__name__, self.value)

    def __eq__(self, other):
        return self.__class__ is other.__class__ and self.value == other.value

    def compile_expression(self, field, settings):
        """ Compile the predicate into a MongoDB condition for `field`

        :param field: The name of the field this condition is on
        :param settings: Builder settings
        :type settings: mongobuilder.settings.BuilderSettings
        :raises ConversionError
        """
        raise NotImplementedError()


class Eq(FilterPredicate):
    """ Equality: `field = value` """
    comparator = Comparator.EQ

    def compile_expression(self, field, settings):
        if field == settings['id_field']:
            return self.to_object_id(field, self.value)
        return self.value

    @staticmethod
    def to_object_id(field, value):
        """ Convert a value into an ObjectId

        :raises ConversionError
        """
        if isinstance(value, ObjectId):
            return value
        if not isinstance(value, (str, bytes)):
            raise ConversionError(field, value)  # ObjectId(None) would generate a new one
        try:
            return ObjectId(value)
        except (InvalidId, TypeError) as e:
            raise ConversionError(field, value) from e


class _PatternPredicate(FilterPredicate):
    """ Case-insensitive regular expression """

    #: Format string for the regular expression
    pattern = None

    def compile_expression(self, field, settings):
        return {'$regex': self.pattern.format(self.value), '$options': 'i'}


class StartsWith(_PatternPredicate):
    comparator = Comparator.STARTS
    pattern = '^{}'


class EndsWith(_PatternPredicate):
    comparator = Comparator.ENDS
    pattern = '{}$'


class Contains(_PatternPredicate):
    comparator = Comparator.CONTAINS
    pattern = '{}'


#: Predicate class for every comparator
PREDICATES = {
    cls.comparator: cls
    for cls in (Eq, StartsWith, EndsWith, Contains)
}

# endregion


class MongoFilter(BuilderHandlerBase):
    """ Per-field conditions, AND-ed together

        * {}: no filtering
        * {field: FilterPredicate}: one condition per field
    """

    state_section_name = 'filters'

    def input(self, state, field, comparator, value):
        self.validate_field_name(field, 'filter')

        # Pick the predicate
        predicate_cls = PREDICATES[Comparator.parse(comparator)]

        # Patterns have to be strings
        if issubclass(predicate_cls, _PatternPredicate) and not isinstance(value, str):
            raise InvalidQueryError('{} filter on "{}" needs a string value; {!r} provided'
                                    .format(predicate_cls.comparator.value, field, value))

        # Overwrite any previous condition on the same field
        state.filters[field] = predicate_cls(value)
        return state

    def compile_filter(self, state):
        return {field: predicate.compile_expression(field, self.settings)
                for field, predicate in state.filters.items()}

    compile_options = NotImplemented
