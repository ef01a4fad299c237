class BaseMongoBuilderException(Exception):
    pass


class InvalidQueryError(BaseMongoBuilderException):
    """ Invalid input given to a chainable builder method """

    def __init__(self, err: str):
        super(InvalidQueryError, self).__init__('Query builder error: {err}'.format(err=err))


class ConfigurationError(BaseMongoBuilderException):
    """ A terminal operation was called on a builder that is not fully configured """

    def __init__(self, operation: str, err: str):
        self.operation = operation

        super(ConfigurationError, self).__init__(
            '{operation}(): {err}'.format(operation=operation, err=err)
        )


class ConversionError(BaseMongoBuilderException):
    """ A filter value could not be converted into the native identifier type """

    def __init__(self, field: str, value):
        self.field = field
        self.value = value

        super(ConversionError, self).__init__(
            'Invalid identifier {value!r} given for "{field}"'.format(
                value=value,
                field=field)
        )


class ExecutionError(BaseMongoBuilderException):
    """ The database driver has failed while running a terminal operation

    This class is used to wrap the driver's errors. The original is available as `original`.
    """

    def __init__(self, operation: str, original: BaseException):
        self.operation = operation
        self.original = original

        super(ExecutionError, self).__init__(
            '{operation}() failed: {cls}: {err}'.format(
                operation=operation,
                cls=original.__class__.__name__,
                err=original)
        )
