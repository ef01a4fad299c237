class BuilderSettings(dict):
    """ QueryBuilder settings container.

        Is mostly used for nice autocompletion and documentation purposes.
        Unknown keyword settings are rejected with a TypeError, as with any other function call.

        Example:

            settings = BuilderSettings(max_items=100)
            qb = QueryBuilder('shop', client, settings)
    """

    def __init__(self,
                 # --- filter & results
                 id_field: str = '_id',
                 # --- limit
                 max_items: int = None,
                 # --- results
                 stringify_ids: bool = True,
                 ):
        """ Init the settings

        Args:
            id_field (str): (for: filter)
                Name of the identity field.
                An `EQ` filter on this field has its value converted into an `ObjectId`.
            max_items (int | None): (for: limit)
                The maximum number of documents that get() can load.
                The limit is forced onto every get() query, even when no limit() was given.
                Counts are not affected.
            stringify_ids (bool): (for: get)
                Replace every `ObjectId` in the loaded documents with its string representation.
        """
        assert isinstance(id_field, str) and id_field, 'id_field must be a non-empty string'
        assert max_items is None or max_items > 0, 'max_items must be a positive integer'

        super(BuilderSettings, self).__init__(
            id_field=id_field,
            max_items=max_items,
            stringify_ids=stringify_ids,
        )

    @classmethod
    def from_value(cls, settings):
        """ Get a BuilderSettings from None, a plain dict, or a BuilderSettings """
        if settings is None:
            return cls()
        if isinstance(settings, cls):
            return settings
        return cls(**settings)
