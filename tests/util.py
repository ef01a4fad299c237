from unittest import mock

import mongomock

from mongobuilder import CollectionProvider, QueryBuilder


#: Titles of the products in the seeded collection
PRODUCT_TITLES = ['Widget {}'.format(i) for i in range(1, 10)] + ['Gadget']


def seeded_client(database='shop'):
    """ Get an in-memory MongoDB client with a `products` collection

        Products: "Widget 1" .. "Widget 9", "Gadget"; inserted in reverse order,
        so that the natural order is not the sorted one.
    """
    client = mongomock.MongoClient()
    client[database]['products'].insert_many([
        {'title': title, 'price': i, 'tags': ['widget'] if title.startswith('Widget') else []}
        for i, title in reversed(list(enumerate(PRODUCT_TITLES)))
    ])
    return client


def failing_provider(**collection_methods):
    """ Get a CollectionProvider whose collection methods do whatever you tell them

        Example:

            failing_provider(count_documents=OperationFailure('boom'))
    """
    provider = mock.create_autospec(CollectionProvider, instance=True)
    collection = provider.get_collection.return_value
    for name, side_effect in collection_methods.items():
        getattr(collection, name).side_effect = side_effect
    return provider


class BuilderTestMixin:
    """ unittest mixin that provides a builder over a seeded in-memory database """

    def setUp(self):
        super().setUp()
        self.client = seeded_client()
        self.qb = QueryBuilder('shop', self.client)

    def products(self):
        """ Get the raw `products` collection """
        return self.client['shop']['products']

    def assertStateIsEmpty(self, qb=None):
        """ Check that the builder has no leftovers of the previous query """
        state = (qb or self.qb).state
        self.assertTrue(state.is_empty(), msg=repr(state))
