from copy import copy


class Reusable:
    """ A template for query builders

        Wraps a QueryBuilder that may already have some state, e.g. a collection.
        Every chainable or terminal method called on the wrapper runs on a fresh copy of the builder,
        so every query chain starts from the template and never changes it.
        Everything else (`database`, `settings`, `state`) is read from the template itself.

        Example:

            products = Reusable(QueryBuilder('shop', client).collection('products'))

            widgets = products.filter('title', 'STARTS', 'Wid').get()
            total = products.count()  # not affected by the filter above
    """
    __slots__ = ('_template',)

    #: QueryBuilder methods that start a new query chain
    CHAIN_METHODS = frozenset((
        # chainable
        'collection', 'projection', 'filter', 'sort', 'skip', 'limit',
        # terminal
        'count', 'get', 'insert', 'update', 'upsert', 'replace', 'delete',
    ))

    def __init__(self, builder):
        """
        :type builder: mongobuilder.builder.QueryBuilder
        """
        self._template = builder

    def new(self):
        """ Get a new builder, with the template's state

        :rtype: mongobuilder.builder.QueryBuilder
        """
        return copy(self._template)

    def __getattr__(self, attr):
        if attr in self.CHAIN_METHODS:
            return getattr(self.new(), attr)
        return getattr(self._template, attr)

    def __repr__(self):
        return '{}({!r})'.format(self.__class__.__name__, self._template)
