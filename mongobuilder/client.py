from pymongo import MongoClient


class CollectionProvider:
    """ The database client capability a QueryBuilder depends on

        Connections, pooling, authentication: all that is the provider's job.
        The builder only asks it for a collection.
    """

    def get_collection(self, database: str, collection: str):
        """ Get a collection handle

        :rtype: pymongo.collection.Collection
        """
        raise NotImplementedError()


class MongoClientProvider(CollectionProvider):
    """ CollectionProvider for a pymongo.MongoClient

        Works with anything that supports `client[database][collection]`.
    """

    def __init__(self, client):
        """
        :type client: pymongo.MongoClient
        """
        self.client = client

    @classmethod
    def from_uri(cls, uri: str = 'mongodb://localhost:27017', **client_kwargs):
        """ Connect to MongoDB with a URI

        Note that MongoClient connects lazily: no I/O happens until the first operation.

        :param client_kwargs: Keyword arguments for MongoClient()
        """
        return cls(MongoClient(uri, **client_kwargs))

    def get_collection(self, database: str, collection: str):
        return self.client[database][collection]

    def __repr__(self):
        return '{}({!r})'.format(self.__class__.__name__, self.client)


def as_provider(client) -> CollectionProvider:
    """ Wrap a MongoClient into a CollectionProvider, unless it already is one """
    if isinstance(client, CollectionProvider):
        return client
    return MongoClientProvider(client)
