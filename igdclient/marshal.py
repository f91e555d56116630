MARSHAL_FUNCTIONS = (
    (("string",), lambda v: v),
)

ZERO_VALUES = (
    (("string",), ""),
)


def zero_value(datatype):
    for types, value in ZERO_VALUES:
        if datatype in types:
            return value
    return None


def marshal_value(datatype, value):
    """
    Converts a string received from a gateway into a Python type matching
    `datatype`. Returns (marshalled, value) where `marshalled` is False if the
    value was missing or of a datatype we don't convert. Missing values become
    the datatype's zero value.
    """
    if value is None:
        return False, zero_value(datatype)
    for types, func in MARSHAL_FUNCTIONS:
        if datatype in types:
            return True, func(value)
    return False, value
