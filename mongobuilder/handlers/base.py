from ..exc import InvalidQueryError


class BuilderHandlerBase:
    """ A compiler for a single section of the QueryState

        Every subclass handles one field (or a couple of related fields) of the QueryState,
        and knows how to validate its input and turn it into a piece of a pymongo call.
    """

    #: Name of the QueryState section that this object is capable of handling
    state_section_name = None

    def __init__(self, settings):
        """ Initialize the handler with builder settings

        :param settings: Builder settings
        :type settings: mongobuilder.settings.BuilderSettings
        """
        self.settings = settings

    def is_input_empty(self, state):
        """ Test whether the state has no input for this handler """
        return not getattr(state, self.state_section_name)

    @staticmethod
    def validate_field_name(name, where):
        """ Make sure that `name` is a field name

        :raises InvalidQueryError
        """
        if not isinstance(name, str) or not name:
            raise InvalidQueryError('{} field name must be a non-empty string; {!r} provided'
                                    .format(where, name))
        return name

    # These methods implement the logic of individual handlers
    # Note that not all methods are going to be implemented by subclasses!

    def input(self, state, *args):
        """ Validate the input and store it into the state

        :type state: mongobuilder.state.QueryState
        :raises InvalidQueryError
        """
        raise NotImplementedError()

    def compile_filter(self, state):
        """ Compile the filter document

        Purpose: the `filter` argument of Collection.find() and friends

        :rtype: dict
        """
        raise NotImplementedError()

    def compile_options(self, state):
        """ Compile keyword options

        Purpose: keyword arguments for Collection.find()

        :rtype: dict
        """
        raise NotImplementedError()
